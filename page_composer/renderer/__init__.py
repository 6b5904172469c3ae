"""Renderers du page composer."""
from .base import Renderer
from .css import generate_css_variables, generate_theme_css
from .html import HtmlRenderer, render_block, render_blocks, render_page, render_preview
from .styles import PREVIEW_WIDTHS, foreground_color

__all__ = [
    "Renderer", "HtmlRenderer",
    "render_block", "render_blocks", "render_page", "render_preview",
    "generate_css_variables", "generate_theme_css",
    "PREVIEW_WIDTHS", "foreground_color",
]
