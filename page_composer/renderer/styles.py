"""
Règles de style dérivées, communes à toutes les variantes.

- padding / alignment : table de correspondance fixe (défaut medium / left)
- couleur du texte : calculée d'après le fond (fond clair → texte sombre,
  fond sombre → texte clair) ; un textColor explicite n'est retenu que s'il
  contraste suffisamment avec le fond
"""
from typing import Dict, Optional

from ..core.colors import contrast_ratio, is_light

DEFAULT_PADDING   = "medium"
DEFAULT_ALIGNMENT = "left"

PADDING: Dict[str, str] = {
    "none":   "0",
    "small":  "1rem",
    "medium": "2rem",
    "large":  "3rem",
    "xlarge": "4rem",
}

ALIGNMENT: Dict[str, str] = {
    "left":   "left",
    "center": "center",
    "right":  "right",
}

DARK_TEXT  = "#0f172a"
LIGHT_TEXT = "#ffffff"
PAGE_BG    = "#ffffff"
MIN_CONTRAST = 3.0

# Largeurs de l'aperçu (desktop / tablet / mobile)
PREVIEW_WIDTHS: Dict[str, str] = {
    "desktop": "100%",
    "tablet":  "768px",
    "mobile":  "375px",
}


def padding_key(value: Optional[str]) -> str:
    return value if value in PADDING else DEFAULT_PADDING


def alignment_key(value: Optional[str]) -> str:
    return value if value in ALIGNMENT else DEFAULT_ALIGNMENT


def padding_css(value: Optional[str]) -> str:
    return PADDING[padding_key(value)]


def alignment_css(value: Optional[str]) -> str:
    return ALIGNMENT[alignment_key(value)]


def foreground_color(background: Optional[str], text_color: Optional[str] = None) -> Optional[str]:
    """
    Couleur de texte lisible pour un fond donné.

    Sans fond (ou fond illisible : gradient, var()…), le bloc hérite du fond
    de page blanc : un textColor explicite trop clair est remplacé par le
    texte sombre, et sans textColor rien n'est imposé (None).
    """
    light = is_light(background) if background else None
    if light is None:
        if not text_color:
            return None
        ratio = contrast_ratio(text_color, PAGE_BG)
        return text_color if ratio is None or ratio >= MIN_CONTRAST else DARK_TEXT

    auto = DARK_TEXT if light else LIGHT_TEXT
    if text_color:
        ratio = contrast_ratio(text_color, background)
        if ratio is not None and ratio >= MIN_CONTRAST:
            return text_color
    return auto
