"""Bloc Gallery — grille d'images."""
from typing import List, Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent, ContentItem


class GalleryImage(ContentItem):
    url: str = ""
    alt: str = ""


class GalleryContent(BlockContent):
    headline: str = ""
    images: List[GalleryImage] = Field(default_factory=list)


class GalleryBlock(BaseBlock):
    type: Literal["gallery"] = "gallery"
    content: GalleryContent = Field(default_factory=GalleryContent)


_PEXELS = "https://images.pexels.com/photos/{}/pexels-photo-{}.jpeg?auto=compress&cs=tinysrgb&w=600"

TEMPLATE = {
    "headline": "Gallery",
    "images": [
        {"url": _PEXELS.format(n, n), "alt": f"Gallery image {i}"}
        for i, n in enumerate((3184291, 3184292, 3184293, 3184294), start=1)
    ],
}

FIELDS = [
    f.text("headline", "Headline"),
    f.group("images", "Images", [
        f.url("url", "Image URL"),
        f.text("alt", "Alt Text"),
    ]),
]
