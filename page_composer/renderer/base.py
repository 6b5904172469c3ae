"""
Protocol Renderer — interface pluggable pour les renderers (HTML, JSON…).
"""
from typing import Optional, Protocol, runtime_checkable

from ..blocks.base import BaseBlock
from ..core.schemas import PageSnapshot, Theme


@runtime_checkable
class Renderer(Protocol):
    def render_page(self, snapshot: PageSnapshot, title: str = "") -> str: ...
    def render_block(self, block: BaseBlock, theme: Optional[Theme] = None) -> Optional[str]: ...
