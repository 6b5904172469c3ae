"""Tests couleurs + règles de style dérivées (padding, alignement, contraste)."""
import pytest

from page_composer.core.colors import (
    contrast_ratio, darken, hex_to_rgb, is_light, lighten, parse_color,
)
from page_composer.renderer.styles import (
    DARK_TEXT, LIGHT_TEXT, alignment_css, foreground_color, padding_css,
)


def test_hex_to_rgb_short_and_long():
    assert hex_to_rgb("#ffffff") == (255, 255, 255)
    assert hex_to_rgb("#0f0") == (0, 255, 0)


def test_lighten_darken():
    assert lighten("#808080", 50) == "#c0c0c0"
    assert darken("#808080", 50) == "#404040"
    assert lighten("#ffffff", 20) == "#ffffff"


@pytest.mark.parametrize("value,expected", [
    ("#ffffff", (255, 255, 255)),
    ("rgb(10, 20, 30)", (10, 20, 30)),
    ("rgba(10,20,30,0.5)", (10, 20, 30)),
    ("White", (255, 255, 255)),
    ("linear-gradient(red, blue)", None),
    ("", None),
    (None, None),
])
def test_parse_color(value, expected):
    assert parse_color(value) == expected


def test_is_light():
    assert is_light("#ffffff") is True
    assert is_light("#f8fafc") is True
    assert is_light("#0f172a") is False
    assert is_light("#3B82F6") is False
    assert is_light("var(--x)") is None


def test_contrast_ratio_bounds():
    assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
    assert contrast_ratio("#ffffff", "#ffffff") == pytest.approx(1.0)


# ── Table padding / alignement ───────────────────────────────────────────────

def test_padding_table_and_default():
    assert padding_css("none") == "0"
    assert padding_css("xlarge") == "4rem"
    assert padding_css(None) == "2rem"
    assert padding_css("100px") == "2rem"


def test_alignment_default():
    assert alignment_css("center") == "center"
    assert alignment_css(None) == "left"


# ── Couleur de texte dérivée ─────────────────────────────────────────────────

def test_light_background_gets_dark_text():
    assert foreground_color("#ffffff") == DARK_TEXT


def test_dark_background_gets_light_text():
    assert foreground_color("#0f172a") == LIGHT_TEXT


def test_light_on_light_text_color_rejected():
    assert foreground_color("#ffffff", "#f1f5f9") == DARK_TEXT


def test_dark_on_dark_text_color_rejected():
    assert foreground_color("#000000", "#111827") == LIGHT_TEXT


def test_contrasting_text_color_honoured():
    assert foreground_color("#ffffff", "#1d4ed8") == "#1d4ed8"
    assert foreground_color("#0f172a", "#fde68a") == "#fde68a"


def test_no_background_uses_page_rules():
    assert foreground_color("", None) is None
    assert foreground_color(None, "#334155") == "#334155"
    assert foreground_color(None, "#ffffff") == DARK_TEXT
