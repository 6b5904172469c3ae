"""
Page Composer — moteur de composition de pages par blocs typés.

Usage :
    >>> from page_composer import EditorSession, render_page
    >>> session = EditorSession()
    >>> hero = session.add_block("hero")
    >>> session.update_content(hero.id, {"headline": "Bonjour"})
    True
    >>> html = render_page(session.snapshot(), title="Accueil")

Intégration FastAPI :
    >>> from page_composer.api import router
    >>> app.include_router(router)
"""

# ── Blocs ────────────────────────────────────────────────────────────────────
from .blocks import (
    BaseBlock, BlockStyles, UnknownBlock, Block, BLOCK_REGISTRY, BLOCK_TYPES,
    HeroBlock, TextBlock, ImageBlock, CTABlock, FeaturesBlock, TestimonialBlock,
    FormBlock, PricingBlock, VideoBlock, GalleryBlock, StatsBlock,
    parse_block, dump_block,
)
from .blocks.catalog import BLOCK_CATALOG, new_block, field_schema, library_entries
from .core.schemas import PageSnapshot, Theme

# ── Rendu ────────────────────────────────────────────────────────────────────
from .renderer import render_block, render_page, render_preview, generate_theme_css

# ── Édition / versioning ─────────────────────────────────────────────────────
from .editor import EditorSession, PageEditor, Notification
from .versioning import Version, VersionMetadata, VersioningService

# ── Persistance / templates / import / bibliothèque ──────────────────────────
from .persistence import (
    CustomBlockNotFound, InMemoryPageRepository, PageNotFound, PageRecord, PersistenceError,
)
from .templates import PageTemplate, TemplateCatalog, select_template, builtin_templates
from .importer import extract_blocks, import_from_url
from .library import CustomBlock, search_custom_blocks

__version__ = "1.0.0"

__all__ = [
    # Blocs
    "BaseBlock", "BlockStyles", "UnknownBlock", "Block", "BLOCK_REGISTRY", "BLOCK_TYPES",
    "HeroBlock", "TextBlock", "ImageBlock", "CTABlock", "FeaturesBlock", "TestimonialBlock",
    "FormBlock", "PricingBlock", "VideoBlock", "GalleryBlock", "StatsBlock",
    "parse_block", "dump_block",
    "BLOCK_CATALOG", "new_block", "field_schema", "library_entries",
    "PageSnapshot", "Theme",
    # Rendu
    "render_block", "render_page", "render_preview", "generate_theme_css",
    # Édition / versioning
    "EditorSession", "PageEditor", "Notification",
    "Version", "VersionMetadata", "VersioningService",
    # Persistance / templates / import / bibliothèque
    "CustomBlockNotFound", "InMemoryPageRepository", "PageNotFound", "PageRecord", "PersistenceError",
    "PageTemplate", "TemplateCatalog", "select_template", "builtin_templates",
    "extract_blocks", "import_from_url",
    "CustomBlock", "search_custom_blocks",
]
