"""
Passerelle de persistance — contrat + implémentation en mémoire.

Les erreurs de stockage remontent en PersistenceError ; une page absente
en PageNotFound (seule erreur fatale côté éditeur, au chargement) ; un bloc
personnalisé absent en CustomBlockNotFound.
"""
import copy
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from ..library.models import CustomBlock
    from ..templates.catalog import PageTemplate
    from ..versioning.models import Version


class PersistenceError(Exception):
    """Échec d'une opération de stockage (lecture, écriture, publication)."""


class PageNotFound(PersistenceError):
    def __init__(self, page_id: str):
        super().__init__(f"Page introuvable : {page_id}")
        self.page_id = page_id


class CustomBlockNotFound(PersistenceError):
    def __init__(self, block_id: str):
        super().__init__(f"Bloc personnalisé introuvable : {block_id}")
        self.block_id = block_id


class PageRecord(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str = ""
    slug: str = ""
    content: Dict[str, Any] = Field(default_factory=lambda: {"blocks": [], "theme": {}})
    status: Literal["draft", "published"] = "draft"
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    published_at: Optional[datetime] = None


@runtime_checkable
class PageRepository(Protocol):
    def get_page(self, page_id: str) -> Optional[PageRecord]: ...
    def create_page(self, title: str, slug: str, content: Optional[dict] = None) -> PageRecord: ...
    def publish_page(self, page_id: str, published_at: datetime) -> PageRecord: ...
    def list_versions(self, page_id: str) -> List["Version"]: ...
    def get_version(self, page_id: str, version_number: int) -> Optional["Version"]: ...
    def save_version(self, page_id: str, content: dict, updated_at: datetime, version: "Version",
                     **settings: Any) -> PageRecord: ...
    def list_templates(self) -> List["PageTemplate"]: ...
    def list_custom_blocks(self) -> List["CustomBlock"]: ...
    def get_custom_block(self, block_id: str) -> Optional["CustomBlock"]: ...
    def create_custom_block(self, block: "CustomBlock") -> "CustomBlock": ...
    def set_custom_block_favorite(self, block_id: str, is_favorite: bool) -> "CustomBlock": ...
    def increment_custom_block_usage(self, block_id: str) -> "CustomBlock": ...
    def delete_custom_block(self, block_id: str) -> None: ...


PAGE_SETTINGS = ("title", "slug", "seo_title", "seo_description")


class InMemoryPageRepository:
    """Stockage en mémoire (tests, aperçu sans base)."""

    def __init__(self, templates: Optional[List["PageTemplate"]] = None):
        self.pages: Dict[str, PageRecord] = {}
        self.versions: Dict[str, List["Version"]] = {}
        self.templates = list(templates or [])
        self.custom_blocks: Dict[str, "CustomBlock"] = {}

    def _require(self, page_id: str) -> PageRecord:
        record = self.pages.get(page_id)
        if record is None:
            raise PageNotFound(page_id)
        return record

    def get_page(self, page_id: str) -> Optional[PageRecord]:
        record = self.pages.get(page_id)
        return record.model_copy(deep=True) if record else None

    def create_page(self, title: str, slug: str, content: Optional[dict] = None) -> PageRecord:
        record = PageRecord(title=title, slug=slug)
        if content is not None:
            record.content = copy.deepcopy(content)
        self.pages[record.id] = record
        return record.model_copy(deep=True)

    def publish_page(self, page_id: str, published_at: datetime) -> PageRecord:
        record = self._require(page_id)
        record.status = "published"
        record.published_at = published_at
        return record.model_copy(deep=True)

    def list_versions(self, page_id: str) -> List["Version"]:
        return sorted(self.versions.get(page_id, []), key=lambda v: v.version_number, reverse=True)

    def get_version(self, page_id: str, version_number: int) -> Optional["Version"]:
        return next((v for v in self.versions.get(page_id, []) if v.version_number == version_number), None)

    def save_version(self, page_id: str, content: dict, updated_at: datetime, version: "Version",
                     **settings: Any) -> PageRecord:
        """Contenu + réglages de la page et nouvelle version ; numéro déjà pris → rien n'est écrit."""
        record = self._require(page_id)
        if self.get_version(page_id, version.version_number) is not None:
            raise PersistenceError(f"Version {version.version_number} déjà enregistrée pour {page_id}")
        record.content = copy.deepcopy(content)
        record.updated_at = updated_at
        for key in PAGE_SETTINGS:
            if settings.get(key) is not None:
                setattr(record, key, settings[key])
        self.versions.setdefault(page_id, []).append(version)
        return record.model_copy(deep=True)

    def list_templates(self) -> List["PageTemplate"]:
        return list(self.templates)

    # ── Blocs personnalisés ──

    def _require_custom(self, block_id: str) -> "CustomBlock":
        block = self.custom_blocks.get(block_id)
        if block is None:
            raise CustomBlockNotFound(block_id)
        return block

    def list_custom_blocks(self) -> List["CustomBlock"]:
        blocks = sorted(self.custom_blocks.values(), key=lambda b: b.created_at, reverse=True)
        return [b.model_copy(deep=True) for b in blocks]

    def get_custom_block(self, block_id: str) -> Optional["CustomBlock"]:
        block = self.custom_blocks.get(block_id)
        return block.model_copy(deep=True) if block else None

    def create_custom_block(self, block: "CustomBlock") -> "CustomBlock":
        self.custom_blocks[block.id] = block.model_copy(deep=True)
        return block.model_copy(deep=True)

    def set_custom_block_favorite(self, block_id: str, is_favorite: bool) -> "CustomBlock":
        block = self._require_custom(block_id)
        block.is_favorite = is_favorite
        return block.model_copy(deep=True)

    def increment_custom_block_usage(self, block_id: str) -> "CustomBlock":
        block = self._require_custom(block_id)
        block.usage_count += 1
        return block.model_copy(deep=True)

    def delete_custom_block(self, block_id: str) -> None:
        self._require_custom(block_id)
        del self.custom_blocks[block_id]
