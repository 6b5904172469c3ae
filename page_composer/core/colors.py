"""
Couleurs — conversion, dérivation (lighten/darken) et contraste.

Le renderer s'appuie sur `is_light` et `contrast_ratio` pour garantir un
texte lisible quel que soit le fond choisi par l'utilisateur.
"""
import re
from typing import Optional

_HEX_RE  = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_RE  = re.compile(r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)$")

NAMED_COLORS = {
    "white": (255, 255, 255),
    "black": (0, 0, 0),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
}

LIGHT_THRESHOLD = 0.4


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convertit #RRGGBB (ou #RGB) en (R, G, B)."""
    hex_color = hex_color.strip().lstrip("#")
    if len(hex_color) == 3:
        hex_color = "".join(c * 2 for c in hex_color)
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


def lighten(hex_color: str, percent: int = 20) -> str:
    """Éclaircit une couleur de X%."""
    r, g, b = hex_to_rgb(hex_color)
    factor = 1 + (percent / 100)
    return rgb_to_hex((min(255, int(r * factor)), min(255, int(g * factor)), min(255, int(b * factor))))


def darken(hex_color: str, percent: int = 20) -> str:
    """Assombrit une couleur de X%."""
    r, g, b = hex_to_rgb(hex_color)
    factor = 1 - (percent / 100)
    return rgb_to_hex((max(0, int(r * factor)), max(0, int(g * factor)), max(0, int(b * factor))))


def parse_color(value: Optional[str]) -> Optional[tuple[int, int, int]]:
    """
    Lit une couleur CSS simple : #RGB, #RRGGBB, rgb()/rgba() ou un nom courant.
    Retourne None pour tout le reste (gradients, var(), vide…).
    """
    if not value:
        return None
    value = value.strip()
    if _HEX_RE.match(value):
        return hex_to_rgb(value)
    m = _RGB_RE.match(value)
    if m:
        return tuple(min(255, int(c)) for c in m.groups())
    return NAMED_COLORS.get(value.lower())


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    """Luminance relative WCAG (0 = noir, 1 = blanc)."""
    def _channel(c: int) -> float:
        c = c / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4
    r, g, b = (_channel(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def is_light(value: str) -> Optional[bool]:
    """True si la couleur est claire, False si sombre, None si illisible."""
    rgb = parse_color(value)
    if rgb is None:
        return None
    return relative_luminance(rgb) > LIGHT_THRESHOLD


def contrast_ratio(a: str, b: str) -> Optional[float]:
    """Ratio de contraste WCAG entre deux couleurs (1 à 21), None si illisible."""
    ra, rb = parse_color(a), parse_color(b)
    if ra is None or rb is None:
        return None
    la, lb = relative_luminance(ra), relative_luminance(rb)
    hi, lo = max(la, lb), min(la, lb)
    return (hi + 0.05) / (lo + 0.05)
