"""
Schémas page-level : Theme et PageSnapshot ({blocks, theme}).

Le snapshot est l'unité échangée avec la persistance et le versioning :
format wire = JSON camelCase, tolérant (entrées illisibles → défauts).
"""
import logging
import re
from typing import Any, Dict, List, Literal

from pydantic import (
    BaseModel, ConfigDict, Field, SerializeAsAny, ValidationError, ValidationInfo, field_validator,
)
from pydantic.alias_generators import to_camel

from ..blocks import BaseBlock, parse_block, dump_block

log = logging.getLogger(__name__)

RadiusName = Literal["none", "small", "medium", "large"]

RADIUS_VALUES: Dict[str, str] = {
    "none":   "0",
    "small":  "4px",
    "medium": "8px",
    "large":  "16px",
}

# Les valeurs du thème sont recopiées dans <style> : jeu de caractères restreint
CSS_COLOR_VALUE = re.compile(r"^[#A-Za-z0-9\s(),.%-]+$")
FONT_UNSAFE     = re.compile(r"[<>{};\\]")


class Theme(BaseModel):
    """Styles globaux appliqués à tous les blocs sauf surcharge."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    primary_color: str = "#3B82F6"
    secondary_color: str = "#10B981"
    font_family: str = "Inter, sans-serif"
    border_radius: RadiusName = "medium"

    @field_validator("border_radius", mode="before")
    @classmethod
    def _radius_fallback(cls, v: Any) -> Any:
        return v if v in RADIUS_VALUES else "medium"

    @field_validator("primary_color", "secondary_color", mode="before")
    @classmethod
    def _color_fallback(cls, v: Any, info: ValidationInfo) -> Any:
        """Couleur hors jeu de caractères CSS autorisé → couleur par défaut."""
        if isinstance(v, str) and CSS_COLOR_VALUE.match(v.strip()):
            return v.strip()
        log.warning("Couleur de thème rejetée (%s) : %r", info.field_name, v)
        return cls.model_fields[info.field_name].default

    @field_validator("font_family", mode="before")
    @classmethod
    def _font_cleanup(cls, v: Any) -> Any:
        cleaned = FONT_UNSAFE.sub("", v).strip() if isinstance(v, str) else ""
        return cleaned or "Inter, sans-serif"

    @property
    def radius_css(self) -> str:
        return RADIUS_VALUES[self.border_radius]

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class PageSnapshot(BaseModel):
    """Contenu sérialisable d'une page : séquence ordonnée de blocs + thème."""
    model_config = ConfigDict(populate_by_name=True)

    blocks: List[SerializeAsAny[BaseBlock]] = Field(default_factory=list)
    theme: Theme = Field(default_factory=Theme)

    @field_validator("blocks", mode="before")
    @classmethod
    def _parse_blocks(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return []
        return [parse_block(item) for item in v]

    @field_validator("theme", mode="before")
    @classmethod
    def _parse_theme(cls, v: Any) -> Any:
        if isinstance(v, Theme):
            return v
        if not isinstance(v, dict):
            return Theme()
        try:
            return Theme.model_validate(v)
        except ValidationError as e:
            log.warning("Thème invalide (%s erreurs) — thème par défaut", e.error_count())
            return Theme()

    def to_wire(self) -> Dict[str, Any]:
        return {
            "blocks": [dump_block(b) for b in self.blocks],
            "theme": self.theme.to_wire(),
        }

    @classmethod
    def from_wire(cls, data: Any) -> "PageSnapshot":
        """Lecture tolérante : None / non-dict → snapshot vide."""
        if not isinstance(data, dict):
            return cls()
        return cls.model_validate({"blocks": data.get("blocks") or [], "theme": data.get("theme") or {}})
