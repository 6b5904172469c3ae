"""Bibliothèque de blocs personnalisés (blocs enregistrés pour réutilisation)."""
from .models import (
    LIBRARY_CATEGORIES, SORT_OPTIONS, CustomBlock, parse_tags, search_custom_blocks,
)

__all__ = ["LIBRARY_CATEGORIES", "SORT_OPTIONS", "CustomBlock", "parse_tags", "search_custom_blocks"]
