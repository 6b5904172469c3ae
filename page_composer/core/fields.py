"""
Schéma d'édition des champs d'un bloc.

Chaque variante décrit ses champs éditables : texte court, texte long, URL,
nombre, booléen, liste de choix, liste de chaînes ou groupe répétable
(features, plans, fields, images, stats).
"""
from typing import List, Literal
from pydantic import BaseModel, Field

FieldKind = Literal["text", "long_text", "url", "number", "boolean", "select", "list", "group"]


class FieldSpec(BaseModel):
    """Description d'un champ éditable (clé wire camelCase)."""
    name: str
    label: str
    kind: FieldKind = "text"
    options: List[str] = Field(default_factory=list)
    item_fields: List["FieldSpec"] = Field(default_factory=list)


def text(name: str, label: str) -> FieldSpec:
    return FieldSpec(name=name, label=label)


def long_text(name: str, label: str) -> FieldSpec:
    return FieldSpec(name=name, label=label, kind="long_text")


def url(name: str, label: str) -> FieldSpec:
    return FieldSpec(name=name, label=label, kind="url")


def boolean(name: str, label: str) -> FieldSpec:
    return FieldSpec(name=name, label=label, kind="boolean")


def select(name: str, label: str, options: List[str]) -> FieldSpec:
    return FieldSpec(name=name, label=label, kind="select", options=list(options))


def string_list(name: str, label: str) -> FieldSpec:
    """Liste de chaînes (une par ligne dans l'éditeur)."""
    return FieldSpec(name=name, label=label, kind="list")


def group(name: str, label: str, items: List[FieldSpec]) -> FieldSpec:
    """Groupe répétable : chaque entrée porte les champs `items`."""
    return FieldSpec(name=name, label=label, kind="group", item_fields=list(items))


# ── Champs de style communs à toutes les variantes ──────────────────────────

PADDING_OPTIONS   = ["none", "small", "medium", "large", "xlarge"]
ALIGNMENT_OPTIONS = ["left", "center", "right"]

STYLE_FIELDS: List[FieldSpec] = [
    FieldSpec(name="backgroundColor", label="Background Color", kind="text"),
    FieldSpec(name="textColor",       label="Text Color",       kind="text"),
    select("padding",   "Padding",        PADDING_OPTIONS),
    select("alignment", "Text Alignment", ALIGNMENT_OPTIONS),
]
