"""Bloc Hero — titre, sous-titre, CTA et image de fond optionnelle."""
from typing import Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent


class HeroContent(BlockContent):
    headline: str = ""
    subheadline: str = ""
    cta_text: str = ""
    cta_url: str = ""
    background_image: str = ""


class HeroBlock(BaseBlock):
    type: Literal["hero"] = "hero"
    content: HeroContent = Field(default_factory=HeroContent)


TEMPLATE = {
    "headline": "Your Compelling Headline Here",
    "subheadline": "A powerful subheadline that explains your value proposition",
    "ctaText": "Get Started",
    "ctaUrl": "#",
    "backgroundImage": "https://images.pexels.com/photos/3184291/pexels-photo-3184291.jpeg?auto=compress&cs=tinysrgb&w=1920",
}

FIELDS = [
    f.text("headline", "Headline"),
    f.long_text("subheadline", "Subheadline"),
    f.text("ctaText", "Button Text"),
    f.url("ctaUrl", "Button URL"),
    f.url("backgroundImage", "Background Image"),
]
