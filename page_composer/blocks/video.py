"""Bloc Video — iframe d'intégration, ou vignette cliquable à défaut."""
from typing import Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent


class VideoContent(BlockContent):
    url: str = ""
    title: str = ""
    description: str = ""
    thumbnail_url: str = ""


class VideoBlock(BaseBlock):
    type: Literal["video"] = "video"
    content: VideoContent = Field(default_factory=VideoContent)


TEMPLATE = {
    "url": "https://www.youtube.com/embed/dQw4w9WgXcQ",
    "title": "Watch Our Video",
    "description": "Learn more about what we do",
    "thumbnailUrl": "",
}

FIELDS = [
    f.url("url", "Embed URL"),
    f.text("title", "Title"),
    f.long_text("description", "Description"),
    f.url("thumbnailUrl", "Thumbnail URL"),
]
