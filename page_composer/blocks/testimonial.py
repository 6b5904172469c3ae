"""Bloc Testimonial — citation client avec auteur et avatar."""
from typing import Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent


class TestimonialContent(BlockContent):
    quote: str = ""
    author: str = ""
    role: str = ""
    avatar: str = ""


class TestimonialBlock(BaseBlock):
    type: Literal["testimonial"] = "testimonial"
    content: TestimonialContent = Field(default_factory=TestimonialContent)


TEMPLATE = {
    "quote": "This product has completely transformed how we work. Highly recommended!",
    "author": "Jane Doe",
    "role": "CEO, Company Inc",
    "avatar": "https://images.pexels.com/photos/774909/pexels-photo-774909.jpeg?auto=compress&cs=tinysrgb&w=200",
}

FIELDS = [
    f.long_text("quote", "Quote"),
    f.text("author", "Author"),
    f.text("role", "Role"),
    f.url("avatar", "Avatar URL"),
]
