"""
Versions — snapshots immuables et horodatés d'une page.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.schemas import PageSnapshot


class VersionMetadata(BaseModel):
    """Réglages de page capturés avec la version (clés snake_case)."""
    title: str = ""
    slug: str = ""
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None


class Version(BaseModel):
    model_config = ConfigDict(frozen=True)

    version_number: int
    content: PageSnapshot = Field(default_factory=PageSnapshot)
    metadata: VersionMetadata = Field(default_factory=VersionMetadata)
    change_summary: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    is_published: bool = False

    @property
    def block_count(self) -> int:
        return len(self.content.blocks)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "version_number": self.version_number,
            "content": self.content.to_wire(),
            "metadata": self.metadata.model_dump(),
            "change_summary": self.change_summary,
            "created_at": self.created_at.isoformat(),
            "is_published": self.is_published,
            "block_count": self.block_count,
        }
