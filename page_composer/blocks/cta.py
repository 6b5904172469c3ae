"""Bloc CTA — bandeau d'appel à l'action (fond sombre par défaut)."""
from typing import Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent


class CTAContent(BlockContent):
    headline: str = ""
    description: str = ""
    button_text: str = ""
    button_url: str = ""


class CTABlock(BaseBlock):
    type: Literal["cta"] = "cta"
    content: CTAContent = Field(default_factory=CTAContent)


TEMPLATE = {
    "headline": "Ready to Get Started?",
    "description": "Join thousands of satisfied customers today",
    "buttonText": "Sign Up Now",
    "buttonUrl": "#",
}

FIELDS = [
    f.text("headline", "Headline"),
    f.long_text("description", "Description"),
    f.text("buttonText", "Button Text"),
    f.url("buttonUrl", "Button URL"),
]
