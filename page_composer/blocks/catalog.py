"""
Catalogue des blocs — menu d'ajout, contenus par défaut, schémas d'édition.

new_block(type) matérialise une copie profonde du contenu par défaut de la
variante, avec des styles par défaut et un id neuf.
"""
import copy
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from ..core.fields import FieldSpec, STYLE_FIELDS
from . import (
    hero, text, image, cta, features, testimonial, form, pricing, video, gallery, stats,
)
from . import BLOCK_REGISTRY, parse_block
from .base import BaseBlock, DEFAULT_STYLES, new_block_id

CATEGORIES = ["Layout", "Content", "Media", "Social", "Commerce", "Interactive"]


class CatalogEntry(BaseModel):
    type: str
    label: str
    description: str
    category: str


BLOCK_CATALOG: List[CatalogEntry] = [
    CatalogEntry(type="hero",        label="Hero Section",   description="Large header with call-to-action", category="Layout"),
    CatalogEntry(type="text",        label="Text Block",     description="Paragraph or rich text content",   category="Content"),
    CatalogEntry(type="image",       label="Image",          description="Single image with caption",        category="Media"),
    CatalogEntry(type="video",       label="Video",          description="Embedded video player",            category="Media"),
    CatalogEntry(type="features",    label="Features Grid",  description="Showcase multiple features",       category="Layout"),
    CatalogEntry(type="testimonial", label="Testimonial",    description="Customer quote with photo",        category="Social"),
    CatalogEntry(type="cta",         label="Call to Action", description="Prominent action button",          category="Layout"),
    CatalogEntry(type="pricing",     label="Pricing Table",  description="Compare pricing tiers",            category="Commerce"),
    CatalogEntry(type="stats",       label="Statistics",     description="Display key numbers",              category="Content"),
    CatalogEntry(type="form",        label="Form",           description="Contact or lead capture form",     category="Interactive"),
    CatalogEntry(type="gallery",     label="Image Gallery",  description="Multiple images grid",             category="Media"),
]

_MODULES = {
    "hero": hero, "text": text, "image": image, "cta": cta, "features": features,
    "testimonial": testimonial, "form": form, "pricing": pricing, "video": video,
    "gallery": gallery, "stats": stats,
}

BLOCK_TEMPLATES: Dict[str, dict] = {t: m.TEMPLATE for t, m in _MODULES.items()}
FIELD_SCHEMAS: Dict[str, List[FieldSpec]] = {t: m.FIELDS for t, m in _MODULES.items()}


def new_block(block_type: str) -> BaseBlock:
    """Nouveau bloc prêt à l'emploi. Lève ValueError pour un type inconnu."""
    if block_type not in BLOCK_REGISTRY:
        raise ValueError(f"Bloc inconnu : {block_type!r}. Disponibles : {list(BLOCK_REGISTRY)}")
    return parse_block({
        "id": new_block_id(),
        "type": block_type,
        "content": copy.deepcopy(BLOCK_TEMPLATES[block_type]),
        "styles": dict(DEFAULT_STYLES),
    })


def field_schema(block_type: str) -> List[FieldSpec]:
    """Champs de contenu d'une variante (liste vide si type inconnu)."""
    return list(FIELD_SCHEMAS.get(block_type, []))


def style_schema() -> List[FieldSpec]:
    return list(STYLE_FIELDS)


def catalog_entry(block_type: str) -> Optional[CatalogEntry]:
    return next((e for e in BLOCK_CATALOG if e.type == block_type), None)


def library_entries(recent: Sequence[str] = (), category: str = "all", search: str = "") -> List[CatalogEntry]:
    """
    Entrées du menu d'ajout.
    Les types récemment utilisés (ordre conservé) passent en tête, puis le
    reste du catalogue ; filtre optionnel par catégorie et par texte libre
    (label ou description, insensible à la casse).
    """
    term = search.strip().lower()

    def _match(e: CatalogEntry) -> bool:
        if category != "all" and e.category != category:
            return False
        return not term or term in e.label.lower() or term in e.description.lower()

    head = [e for e in (catalog_entry(t) for t in recent) if e is not None]
    seen = {e.type for e in head}
    ordered = head + [e for e in BLOCK_CATALOG if e.type not in seen]
    return [e for e in ordered if _match(e)]
