"""Import de contenu : extraction HTML locale + import distant par URL."""
from .markup import BUTTON_SELECTOR, FEATURE_ICONS, ExtractionResult, extract_blocks
from .remote import FetchError, RemoteImportResult, fetch_markup, import_from_url, validate_url

__all__ = [
    "BUTTON_SELECTOR", "FEATURE_ICONS", "ExtractionResult", "extract_blocks",
    "FetchError", "RemoteImportResult", "fetch_markup", "import_from_url", "validate_url",
]
