"""Templates de page : catalogue, sélection et templates fournis."""
from .catalog import (
    BLANK_TEMPLATE_ID, TEMPLATE_CATEGORIES, PageTemplate, TemplateCatalog, select_template,
)
from .builtin import BUILTIN_TEMPLATES, builtin_templates

__all__ = [
    "BLANK_TEMPLATE_ID", "TEMPLATE_CATEGORIES",
    "PageTemplate", "TemplateCatalog", "select_template",
    "BUILTIN_TEMPLATES", "builtin_templates",
]
