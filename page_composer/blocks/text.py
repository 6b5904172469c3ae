"""Bloc Text — texte riche (HTML autorisé, rendu tel quel)."""
from typing import Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent


class TextContent(BlockContent):
    text: str = ""


class TextBlock(BaseBlock):
    type: Literal["text"] = "text"
    content: TextContent = Field(default_factory=TextContent)


TEMPLATE = {
    "text": "<p>Add your content here. You can write paragraphs, add formatting, and create engaging content for your visitors.</p>",
}

FIELDS = [
    f.long_text("text", "Text"),
]
