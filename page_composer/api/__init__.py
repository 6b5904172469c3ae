"""Intégration HTTP (FastAPI)."""
from .router import get_repository, router

__all__ = ["router", "get_repository"]
