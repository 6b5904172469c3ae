"""Persistance des pages, versions, templates et blocs personnalisés."""
from .base import (
    PAGE_SETTINGS, CustomBlockNotFound, InMemoryPageRepository, PageNotFound, PageRecord,
    PageRepository, PersistenceError,
)
from .database import SessionLocal, SqlPageRepository, get_db, init_db, make_engine

__all__ = [
    "PAGE_SETTINGS", "CustomBlockNotFound", "InMemoryPageRepository", "PageNotFound", "PageRecord",
    "PageRepository", "PersistenceError",
    "SessionLocal", "SqlPageRepository", "get_db", "init_db", "make_engine",
]
