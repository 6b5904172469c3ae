"""
Catalogue de templates de page — liste par catégorie, recherche, sélection.

Sélectionner un template produit un snapshot {blocks, theme} : copie
profonde du template, ids de blocs régénérés. Le template "blank" ne
contient aucun bloc et conserve le thème courant.
"""
import logging
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, Field, SerializeAsAny, field_validator

from ..blocks import BaseBlock, dump_block, new_block_id, parse_block
from ..core.schemas import PageSnapshot, Theme

log = logging.getLogger(__name__)

BLANK_TEMPLATE_ID = "blank"

TEMPLATE_CATEGORIES = [
    "landing", "sales", "course", "webinar", "lead_magnet", "coming_soon", "about", "portfolio",
]


class PageTemplate(BaseModel):
    id: str
    name: str
    description: str = ""
    category: str = "landing"
    thumbnail_url: Optional[str] = None
    blocks: List[SerializeAsAny[BaseBlock]] = Field(default_factory=list)
    theme: Theme = Field(default_factory=Theme)
    sort_order: int = 0

    @field_validator("blocks", mode="before")
    @classmethod
    def _parse_blocks(cls, v: Any) -> Any:
        return [parse_block(item) for item in v] if isinstance(v, list) else []

    @property
    def is_blank(self) -> bool:
        return self.id == BLANK_TEMPLATE_ID

    def to_wire(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "thumbnail_url": self.thumbnail_url,
            "blocks": [dump_block(b) for b in self.blocks],
            "theme": self.theme.to_wire(),
            "sort_order": self.sort_order,
        }


class TemplateCatalog:
    """Catalogue en lecture seule, trié par sort_order."""

    def __init__(self, templates: Iterable[PageTemplate]):
        self._templates = sorted(templates, key=lambda t: (t.sort_order, t.name))

    def list(self, category: str = "all") -> List[PageTemplate]:
        if category == "all":
            return list(self._templates)
        return [t for t in self._templates if t.category == category]

    def categories(self) -> List[str]:
        present = {t.category for t in self._templates}
        return [c for c in TEMPLATE_CATEGORIES if c in present]

    def get(self, template_id: str) -> Optional[PageTemplate]:
        return next((t for t in self._templates if t.id == template_id), None)

    def search(self, term: str, category: str = "all") -> List[PageTemplate]:
        """Recherche insensible à la casse sur le nom et la description."""
        term = term.strip().lower()
        return [
            t for t in self.list(category)
            if not term or term in t.name.lower() or term in t.description.lower()
        ]

    def __len__(self) -> int:
        return len(self._templates)


def select_template(template: PageTemplate, current_theme: Optional[Theme] = None) -> PageSnapshot:
    """Snapshot prêt à remplacer la séquence de la session."""
    if template.is_blank:
        return PageSnapshot(blocks=[], theme=(current_theme or Theme()).model_copy(deep=True))
    blocks = [b.model_copy(update={"id": new_block_id()}, deep=True) for b in template.blocks]
    log.info("Template %s sélectionné (%s blocs)", template.id, len(blocks))
    return PageSnapshot(blocks=blocks, theme=template.theme.model_copy(deep=True))
