"""
Blocs personnalisés — un bloc de page enregistré avec nom, catégorie, tags.

block_data ne garde que {type, content, styles} : ni id, ni drapeaux
d'édition. Chaque insertion produit une copie profonde avec un id neuf.

Tri : recent (création décroissante), popular (usage décroissant),
favorites (favoris d'abord, ordre récent conservé sinon).
"""
import copy
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..blocks import BaseBlock, dump_block, new_block_id, parse_block

log = logging.getLogger(__name__)

LIBRARY_CATEGORIES = [
    "hero", "text", "image", "cta", "features", "testimonial",
    "form", "pricing", "video", "gallery", "stats", "custom",
]
SORT_OPTIONS = ("recent", "popular", "favorites")

BLOCK_DATA_KEYS = ("type", "content", "styles")


def parse_tags(raw: Any) -> List[str]:
    """"a, b,, c" → ["a", "b", "c"] ; une liste est nettoyée de la même façon."""
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, (list, tuple)):
        return []
    return [t.strip() for t in raw if isinstance(t, str) and t.strip()]


class CustomBlock(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: Optional[str] = None
    category: str = "custom"
    block_data: Dict[str, Any] = Field(default_factory=dict)
    thumbnail_url: Optional[str] = None
    usage_count: int = 0
    is_favorite: bool = False
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    tags: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a name for this block")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, v: Any) -> Any:
        return (v.strip() or None) if isinstance(v, str) else v

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, v: Any) -> Any:
        return v if v in LIBRARY_CATEGORIES else "custom"

    @field_validator("block_data", mode="before")
    @classmethod
    def _block_data(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return {}
        return {k: v[k] for k in BLOCK_DATA_KEYS if k in v}

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> Any:
        return parse_tags(v)

    @property
    def block_type(self) -> str:
        return str(self.block_data.get("type") or "")

    @classmethod
    def from_block(
        cls,
        block: BaseBlock,
        name: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        tags: Any = (),
        is_favorite: bool = False,
        created_by: Optional[str] = None,
    ) -> "CustomBlock":
        """Catégorie par défaut = type du bloc (ou "custom" si hors liste)."""
        wire = dump_block(block)
        return cls(
            name=name,
            description=description,
            category=category or block.type,
            block_data=copy.deepcopy({k: wire[k] for k in BLOCK_DATA_KEYS if k in wire}),
            tags=tags,
            is_favorite=is_favorite,
            created_by=created_by,
        )

    def to_block(self) -> BaseBlock:
        """Nouveau bloc de page : copie profonde de block_data, id neuf."""
        data = copy.deepcopy(self.block_data)
        data["id"] = new_block_id()
        return parse_block(data)

    def matches(self, term: str) -> bool:
        """Recherche insensible à la casse : nom, description, tags."""
        term = term.strip().lower()
        if not term:
            return True
        return (
            term in self.name.lower()
            or term in (self.description or "").lower()
            or any(term in t.lower() for t in self.tags)
        )


def search_custom_blocks(
    blocks: Iterable[CustomBlock],
    search: str = "",
    category: str = "all",
    sort: str = "recent",
    favorites_only: bool = False,
) -> List[CustomBlock]:
    out = [
        b for b in blocks
        if (category == "all" or b.category == category)
        and (not favorites_only or b.is_favorite)
        and b.matches(search)
    ]
    out.sort(key=lambda b: b.created_at, reverse=True)
    if sort == "popular":
        out.sort(key=lambda b: b.usage_count, reverse=True)
    elif sort == "favorites":
        out.sort(key=lambda b: not b.is_favorite)
    elif sort != "recent":
        log.info("Tri inconnu %r — tri par date", sort)
    return out
