"""
Blocs du page composer — exports publics + union discriminée sur `type`.
"""
import logging
from typing import Annotated, Any, Dict, Type, Union

from pydantic import Field, TypeAdapter, ValidationError

from .base import (
    BaseBlock, BlockContent, BlockStyles, ContentItem, UnknownBlock,
    DEFAULT_STYLES, new_block_id,
)
from .hero        import HeroBlock, HeroContent
from .text        import TextBlock, TextContent
from .image       import ImageBlock, ImageContent
from .cta         import CTABlock, CTAContent
from .features    import FeaturesBlock, FeaturesContent, FeatureItem
from .testimonial import TestimonialBlock, TestimonialContent
from .form        import FormBlock, FormContent, FormField
from .pricing     import PricingBlock, PricingContent, PricingPlan
from .video       import VideoBlock, VideoContent
from .gallery     import GalleryBlock, GalleryContent, GalleryImage
from .stats       import StatsBlock, StatsContent, StatItem

log = logging.getLogger(__name__)

# Union discriminée par type ; ordre = ordre du menu d'ajout
Block = Annotated[
    Union[
        HeroBlock,
        TextBlock,
        ImageBlock,
        CTABlock,
        FeaturesBlock,
        TestimonialBlock,
        FormBlock,
        PricingBlock,
        VideoBlock,
        GalleryBlock,
        StatsBlock,
    ],
    Field(discriminator="type"),
]

_BLOCK_ADAPTER = TypeAdapter(Block)

BLOCK_REGISTRY: Dict[str, Type[BaseBlock]] = {
    "hero":        HeroBlock,
    "text":        TextBlock,
    "image":       ImageBlock,
    "cta":         CTABlock,
    "features":    FeaturesBlock,
    "testimonial": TestimonialBlock,
    "form":        FormBlock,
    "pricing":     PricingBlock,
    "video":       VideoBlock,
    "gallery":     GalleryBlock,
    "stats":       StatsBlock,
}

BLOCK_TYPES = list(BLOCK_REGISTRY)


def _unknown(data: Dict[str, Any]) -> UnknownBlock:
    content = data.get("content")
    try:
        styles = BlockStyles.model_validate(data.get("styles") or {})
    except ValidationError:
        styles = BlockStyles()
    extra = {k: v for k, v in data.items() if k not in ("id", "type", "content", "styles", "name", "hidden", "locked")}
    return UnknownBlock(
        id=str(data.get("id") or new_block_id()),
        type=str(data.get("type") or ""),
        name=data.get("name") if isinstance(data.get("name"), str) else None,
        hidden=bool(data.get("hidden", False)),
        locked=bool(data.get("locked", False)),
        styles=styles,
        content=content if isinstance(content, dict) else {},
        **extra,
    )


def parse_block(data: Any) -> BaseBlock:
    """
    Désérialise un bloc depuis le format wire (dict camelCase).

    - type connu et contenu valide → variante typée
    - type connu, contenu illisible → variante avec contenu par défaut
    - type inconnu / entrée non-dict → UnknownBlock (conservé, jamais rendu)
    """
    if isinstance(data, BaseBlock):
        return data
    if not isinstance(data, dict):
        log.warning("Bloc ignoré (entrée non-dict) : %r", type(data).__name__)
        return UnknownBlock(type="")

    block_type = data.get("type")
    cls = BLOCK_REGISTRY.get(block_type) if isinstance(block_type, str) else None
    if cls is None:
        log.info("Type de bloc inconnu conservé tel quel : %r", block_type)
        return _unknown(data)

    try:
        return _BLOCK_ADAPTER.validate_python(data)
    except ValidationError as e:
        log.warning("Contenu invalide pour le bloc %s (%s) — contenu par défaut", block_type, e.error_count())
    try:
        return cls.model_validate({k: data[k] for k in ("id", "name", "hidden", "locked", "styles") if k in data})
    except ValidationError:
        return _unknown(data)


def dump_block(block: BaseBlock) -> Dict[str, Any]:
    """Sérialise un bloc au format wire (clés camelCase, None omis)."""
    return block.model_dump(by_alias=True, exclude_none=True)


__all__ = [
    # Base
    "BaseBlock", "BlockContent", "BlockStyles", "ContentItem", "UnknownBlock",
    "DEFAULT_STYLES", "new_block_id",
    # Variantes
    "HeroBlock", "HeroContent",
    "TextBlock", "TextContent",
    "ImageBlock", "ImageContent",
    "CTABlock", "CTAContent",
    "FeaturesBlock", "FeaturesContent", "FeatureItem",
    "TestimonialBlock", "TestimonialContent",
    "FormBlock", "FormContent", "FormField",
    "PricingBlock", "PricingContent", "PricingPlan",
    "VideoBlock", "VideoContent",
    "GalleryBlock", "GalleryContent", "GalleryImage",
    "StatsBlock", "StatsContent", "StatItem",
    # Union + (dé)sérialisation
    "Block", "BLOCK_REGISTRY", "BLOCK_TYPES",
    "parse_block", "dump_block",
]
