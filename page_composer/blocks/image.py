"""Bloc Image — une image avec texte alternatif et légende."""
from typing import Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent


class ImageContent(BlockContent):
    url: str = ""
    alt: str = ""
    caption: str = ""


class ImageBlock(BaseBlock):
    type: Literal["image"] = "image"
    content: ImageContent = Field(default_factory=ImageContent)


TEMPLATE = {
    "url": "https://images.pexels.com/photos/3184292/pexels-photo-3184292.jpeg?auto=compress&cs=tinysrgb&w=1200",
    "alt": "Placeholder image",
    "caption": "",
}

FIELDS = [
    f.url("url", "Image URL"),
    f.text("alt", "Alt Text"),
    f.text("caption", "Caption"),
]
