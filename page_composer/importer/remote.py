"""
Import distant — récupération d'une page par URL.

- fetch_markup    : GET de la page (User-Agent dédié, timeout) → HTML
- import_from_url : POST {url} au service fetch-and-extract configuré,
                    réponse {success, blocks} reprise telle quelle
"""
import logging
import os
from typing import List, Optional

import requests
from pydantic import BaseModel, Field, SerializeAsAny

from ..blocks import BaseBlock, parse_block

log = logging.getLogger(__name__)

IMPORT_URL     = os.getenv("PAGE_COMPOSER_IMPORT_URL", "http://localhost:8000/page-composer/import-page-from-url")
IMPORT_TIMEOUT = float(os.getenv("PAGE_COMPOSER_IMPORT_TIMEOUT", "15"))
USER_AGENT     = os.getenv("PAGE_COMPOSER_USER_AGENT", "Mozilla/5.0 (compatible; PageImporter/1.0)")


class FetchError(Exception):
    """Page distante inaccessible (réseau, statut HTTP, URL invalide)."""


class RemoteImportResult(BaseModel):
    success: bool = False
    blocks: List[SerializeAsAny[BaseBlock]] = Field(default_factory=list)
    error: Optional[str] = None
    source_url: Optional[str] = None


def validate_url(url: str) -> Optional[str]:
    """Message d'erreur utilisateur, ou None si l'URL est acceptable."""
    if not url or not url.strip():
        return "Please enter a valid URL"
    if not url.startswith(("http://", "https://")):
        return "URL must start with http:// or https://"
    return None


def fetch_markup(url: str, timeout: Optional[float] = None) -> str:
    """HTML de la page distante. Lève FetchError."""
    problem = validate_url(url)
    if problem:
        raise FetchError(problem)
    try:
        resp = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout or IMPORT_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        log.warning("Récupération %s impossible : %s", url, e)
        raise FetchError(f"Failed to fetch URL: {e}") from e
    return resp.text


def import_from_url(url: str, endpoint: Optional[str] = None, timeout: Optional[float] = None) -> RemoteImportResult:
    """
    Délègue l'extraction au service distant. Ne lève jamais : tout échec
    (URL invalide, réseau, réponse illisible, success=false, zéro bloc)
    est rendu dans `error` avec success=False.
    """
    problem = validate_url(url)
    if problem:
        return RemoteImportResult(error=problem, source_url=url)

    try:
        resp = requests.post(endpoint or IMPORT_URL, json={"url": url}, timeout=timeout or IMPORT_TIMEOUT)
    except requests.RequestException as e:
        log.warning("Import distant %s : %s", url, e)
        return RemoteImportResult(error="Failed to import page. Please check the URL and try again.", source_url=url)

    try:
        data = resp.json()
    except ValueError:
        data = None
    if not isinstance(data, dict):
        return RemoteImportResult(error="Failed to import page", source_url=url)
    if not resp.ok:
        return RemoteImportResult(error=data.get("error") or "Failed to import page", source_url=url)

    blocks = data.get("blocks")
    if not data.get("success") or not isinstance(blocks, list) or not blocks:
        return RemoteImportResult(error="No blocks were extracted from the page", source_url=url)

    return RemoteImportResult(
        success=True,
        blocks=[parse_block(b) for b in blocks],
        source_url=data.get("sourceUrl") or url,
    )
