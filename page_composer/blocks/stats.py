"""Bloc Stats — chiffres clés (fond = couleur primaire du thème par défaut)."""
from typing import List, Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent, ContentItem


class StatItem(ContentItem):
    value: str = ""
    label: str = ""


class StatsContent(BlockContent):
    headline: str = ""
    stats: List[StatItem] = Field(default_factory=list)


class StatsBlock(BaseBlock):
    type: Literal["stats"] = "stats"
    content: StatsContent = Field(default_factory=StatsContent)


TEMPLATE = {
    "headline": "Numbers That Matter",
    "stats": [
        {"value": "10K+", "label": "Happy Customers"},
        {"value": "99%", "label": "Satisfaction Rate"},
        {"value": "24/7", "label": "Support Available"},
        {"value": "50+", "label": "Countries"},
    ],
}

FIELDS = [
    f.text("headline", "Headline"),
    f.group("stats", "Stats", [
        f.text("value", "Value"),
        f.text("label", "Label"),
    ]),
]
