"""Bloc Form — formulaire de capture (champs configurables)."""
from typing import List, Literal
from pydantic import Field

from ..core import fields as f
from .base import BaseBlock, BlockContent, ContentItem

FIELD_TYPES = ["text", "email", "tel", "number", "textarea"]


class FormField(ContentItem):
    name: str = ""
    label: str = ""
    type: str = "text"
    required: bool = False


class FormContent(BlockContent):
    headline: str = ""
    description: str = ""
    submit_button_text: str = ""
    success_message: str = ""
    fields: List[FormField] = Field(default_factory=list)


class FormBlock(BaseBlock):
    type: Literal["form"] = "form"
    content: FormContent = Field(default_factory=FormContent)


TEMPLATE = {
    "headline": "Get Started Today",
    "description": "Fill out the form below and we'll get back to you shortly",
    "submitButtonText": "Submit",
    "successMessage": "Thank you! We'll be in touch soon.",
    "fields": [
        {"name": "email", "label": "Email", "type": "email", "required": True},
        {"name": "first_name", "label": "First Name", "type": "text", "required": False},
        {"name": "last_name", "label": "Last Name", "type": "text", "required": False},
    ],
}

FIELDS = [
    f.text("headline", "Headline"),
    f.long_text("description", "Description"),
    f.text("submitButtonText", "Submit Button Text"),
    f.long_text("successMessage", "Success Message"),
    f.group("fields", "Form Fields", [
        f.text("name", "Field Name"),
        f.text("label", "Label"),
        f.select("type", "Type", FIELD_TYPES),
        f.boolean("required", "Required"),
    ]),
]
