"""
Bloc de base du page composer.

Un bloc = id stable + type (discriminant) + content (propre à la variante)
+ styles (communs à toutes les variantes) + drapeaux hidden/locked + nom.
Format wire : clés camelCase (backgroundColor, ctaText…), attributs Python
en snake_case via alias.
"""
import copy
import uuid
from typing import Any, Dict, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


def new_block_id() -> str:
    """Identifiant opaque, jamais réutilisé après suppression."""
    return f"block-{uuid.uuid4().hex[:12]}"


class BlockContent(BaseModel):
    """Contenu d'un bloc. Les clés inconnues sont conservées telles quelles."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )


class ContentItem(BlockContent):
    """Entrée d'un groupe répétable (feature, plan, champ de formulaire…)."""
    pass


PaddingName   = Literal["none", "small", "medium", "large", "xlarge"]
AlignmentName = Literal["left", "center", "right"]


class BlockStyles(BaseModel):
    """Styles agnostiques de la variante — clés absentes → défauts du renderer."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    background_color: Optional[str] = None
    text_color: Optional[str] = None
    padding: Optional[PaddingName] = None
    alignment: Optional[AlignmentName] = None

    @field_validator("padding", "alignment", mode="before")
    @classmethod
    def _known_or_default(cls, v: Any, info: ValidationInfo) -> Any:
        """Valeur hors table → None (le renderer applique alors son défaut)."""
        allowed = get_args(PaddingName if info.field_name == "padding" else AlignmentName)
        return v if v in allowed else None


DEFAULT_STYLES: Dict[str, str] = {
    "backgroundColor": "",
    "textColor": "",
    "padding": "medium",
    "alignment": "left",
}


def _aliased_patch(model_cls: type, patch: Dict[str, Any]) -> Dict[str, Any]:
    """Ramène les clés d'un patch (snake_case ou camelCase) sur leur alias wire."""
    fields = model_cls.model_fields
    out = {}
    for key, value in patch.items():
        field = fields.get(key)
        out[(field.alias or key) if field is not None else key] = copy.deepcopy(value)
    return out


class BaseBlock(BaseModel):
    """Bloc de base (classe parente de toutes les variantes)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_block_id)
    type: str
    name: Optional[str] = None
    hidden: bool = False
    locked: bool = False
    styles: BlockStyles = Field(default_factory=BlockStyles)
    content: Any = None

    @property
    def display_name(self) -> str:
        return self.name or self.type.capitalize()

    def with_content(self, patch: Dict[str, Any]) -> "BaseBlock":
        """
        Fusion superficielle de `patch` dans le contenu → nouveau bloc.
        Les champs frères sont conservés. Lève ValidationError si le patch
        ne respecte pas le schéma de la variante.
        """
        content_cls = type(self.content)
        merged = self.content.model_dump(by_alias=True)
        merged.update(_aliased_patch(content_cls, patch))
        return self.model_copy(update={"content": content_cls.model_validate(merged)}, deep=True)

    def with_styles(self, patch: Dict[str, Any]) -> "BaseBlock":
        merged = self.styles.model_dump(by_alias=True)
        merged.update(_aliased_patch(BlockStyles, patch))
        return self.model_copy(update={"styles": BlockStyles.model_validate(merged)}, deep=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class UnknownBlock(BaseBlock):
    """
    Bloc dont le type n'appartient pas aux variantes connues (ou dont le
    contenu est illisible). Conservé dans la séquence, jamais rendu.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: Dict[str, Any] = Field(default_factory=dict)

    def with_content(self, patch: Dict[str, Any]) -> "BaseBlock":
        merged = dict(self.content)
        merged.update(copy.deepcopy(patch))
        return self.model_copy(update={"content": merged}, deep=True)
