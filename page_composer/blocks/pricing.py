"""Bloc Pricing — grille de plans tarifaires (plan mis en avant optionnel)."""
from typing import List, Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent, ContentItem


class PricingPlan(ContentItem):
    name: str = ""
    price: str = ""
    period: str = ""
    features: List[str] = Field(default_factory=list)
    button_text: str = ""
    highlighted: bool = False


class PricingContent(BlockContent):
    headline: str = ""
    subheadline: str = ""
    plans: List[PricingPlan] = Field(default_factory=list)


class PricingBlock(BaseBlock):
    type: Literal["pricing"] = "pricing"
    content: PricingContent = Field(default_factory=PricingContent)


TEMPLATE = {
    "headline": "Simple, Transparent Pricing",
    "subheadline": "Choose the plan that's right for you",
    "plans": [
        {
            "name": "Starter",
            "price": "$29",
            "period": "/month",
            "features": ["Up to 1,000 contacts", "Basic analytics", "Email support"],
            "buttonText": "Get Started",
            "highlighted": False,
        },
        {
            "name": "Pro",
            "price": "$79",
            "period": "/month",
            "features": ["Up to 10,000 contacts", "Advanced analytics", "Priority support", "Custom domains"],
            "buttonText": "Get Started",
            "highlighted": True,
        },
        {
            "name": "Enterprise",
            "price": "$199",
            "period": "/month",
            "features": ["Unlimited contacts", "Full analytics suite", "Dedicated support", "White labeling"],
            "buttonText": "Contact Us",
            "highlighted": False,
        },
    ],
}

FIELDS = [
    f.text("headline", "Headline"),
    f.long_text("subheadline", "Subheadline"),
    f.group("plans", "Plans", [
        f.text("name", "Plan Name"),
        f.text("price", "Price"),
        f.text("period", "Period"),
        f.string_list("features", "Features"),
        f.text("buttonText", "Button Text"),
        f.boolean("highlighted", "Highlighted"),
    ]),
]
