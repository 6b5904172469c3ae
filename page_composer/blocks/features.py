"""Bloc Features — grille d'avantages (icône + titre + description)."""
from typing import List, Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent, ContentItem


class FeatureItem(ContentItem):
    title: str = ""
    description: str = ""
    icon: str = ""


class FeaturesContent(BlockContent):
    headline: str = ""
    subheadline: str = ""
    features: List[FeatureItem] = Field(default_factory=list)


class FeaturesBlock(BaseBlock):
    type: Literal["features"] = "features"
    content: FeaturesContent = Field(default_factory=FeaturesContent)


TEMPLATE = {
    "headline": "Amazing Features",
    "subheadline": "Everything you need to succeed",
    "features": [
        {"title": "Fast Performance", "description": "Lightning-fast load times for better user experience", "icon": "🚀"},
        {"title": "Easy to Use", "description": "Intuitive interface that anyone can master", "icon": "⚡"},
        {"title": "Results Driven", "description": "Focused on delivering measurable outcomes", "icon": "🎯"},
    ],
}

FIELDS = [
    f.text("headline", "Headline"),
    f.long_text("subheadline", "Subheadline"),
    f.group("features", "Features", [
        f.text("title", "Title"),
        f.long_text("description", "Description"),
        f.text("icon", "Icon"),
    ]),
]
