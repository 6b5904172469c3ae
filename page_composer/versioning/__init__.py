"""Versioning des pages : snapshots immuables + restauration."""
from .models import Version, VersionMetadata
from .service import VersioningService

__all__ = ["Version", "VersionMetadata", "VersioningService"]
