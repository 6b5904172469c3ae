"""
Session d'édition — état live d'une instance d'éditeur.

Séquence de blocs, sélection, verrou/masquage, historique undo/redo,
réordonnancement par glisser-déposer, types récemment ajoutés.

Toutes les transitions sont synchrones et ne lèvent pas : une transition
illégale (id inconnu, bloc verrouillé, index hors bornes…) est un no-op
qui retourne False (ou None pour celles qui retournent un bloc).
"""
import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from pydantic import ValidationError

from ..blocks import BLOCK_REGISTRY
from ..blocks.base import BaseBlock, new_block_id
from ..blocks.catalog import new_block
from ..core.schemas import PageSnapshot, Theme
from ..renderer.styles import PREVIEW_WIDTHS
from .history import History, clone_blocks

if TYPE_CHECKING:
    from ..library.models import CustomBlock

log = logging.getLogger(__name__)

RECENT_LIMIT = 5


class EditorSession:
    def __init__(self, blocks: Sequence[BaseBlock] = (), theme: Optional[Theme] = None):
        self.blocks: List[BaseBlock] = clone_blocks(blocks)
        self.theme: Theme = (theme or Theme()).model_copy(deep=True)
        self.selected_block_id: Optional[str] = None
        self.history = History(self.blocks)
        self.dragged_index: Optional[int] = None
        self.drag_over_index: Optional[int] = None
        self.recent_block_types: List[str] = []
        self.preview_mode: str = "desktop"

    @classmethod
    def from_snapshot(cls, snapshot: PageSnapshot) -> "EditorSession":
        return cls(snapshot.blocks, snapshot.theme)

    # ── Lecture ──────────────────────────────────────────────────────────────

    @property
    def history_index(self) -> int:
        return self.history.index

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def selected_block(self) -> Optional[BaseBlock]:
        return self.get(self.selected_block_id) if self.selected_block_id else None

    @property
    def visible_blocks(self) -> List[BaseBlock]:
        return [b for b in self.blocks if not b.hidden]

    @property
    def preview_width(self) -> str:
        return PREVIEW_WIDTHS[self.preview_mode]

    def get(self, block_id: str) -> Optional[BaseBlock]:
        i = self._index_of(block_id)
        return self.blocks[i] if i is not None else None

    def snapshot(self) -> PageSnapshot:
        """Copie profonde {blocks, theme} — indépendante de la session."""
        return PageSnapshot(blocks=clone_blocks(self.blocks), theme=self.theme.model_copy(deep=True))

    # ── Interne ──────────────────────────────────────────────────────────────

    def _index_of(self, block_id: Optional[str]) -> Optional[int]:
        for i, b in enumerate(self.blocks):
            if b.id == block_id:
                return i
        return None

    def _commit(self) -> None:
        self.history.push(self.blocks)

    def _touch_recent(self, block_type: str) -> None:
        recent = [t for t in self.recent_block_types if t != block_type]
        self.recent_block_types = [block_type] + recent[:RECENT_LIMIT - 1]

    def _drop_stale_selection(self) -> None:
        if self.selected_block_id and self._index_of(self.selected_block_id) is None:
            self.selected_block_id = None

    # ── Sélection / aperçu ───────────────────────────────────────────────────

    def select(self, block_id: str) -> bool:
        if self._index_of(block_id) is None:
            return False
        self.selected_block_id = block_id
        return True

    def deselect(self) -> None:
        self.selected_block_id = None

    def set_preview_mode(self, mode: str) -> bool:
        if mode not in PREVIEW_WIDTHS:
            return False
        self.preview_mode = mode
        return True

    def set_theme(self, theme: Theme) -> None:
        """Le thème n'est pas historisé (seule la séquence de blocs l'est)."""
        self.theme = theme.model_copy(deep=True)

    # ── Transitions sur la séquence ──────────────────────────────────────────

    def add_block(self, block_type: str) -> Optional[BaseBlock]:
        """Ajoute un bloc en fin de séquence, le sélectionne, l'historise."""
        try:
            block = new_block(block_type)
        except ValueError:
            log.warning("Ajout refusé — type de bloc inconnu : %r", block_type)
            return None
        self.blocks.append(block)
        self.selected_block_id = block.id
        self._touch_recent(block_type)
        self._commit()
        return block

    def insert_custom_block(self, custom: "CustomBlock") -> Optional[BaseBlock]:
        """Bloc de la bibliothèque : copie profonde, id neuf, ajout en fin de séquence, sélection."""
        block = custom.to_block()
        if not block.type:
            log.warning("Bloc personnalisé %s sans type — insertion refusée", custom.id)
            return None
        self.blocks.append(block)
        self.selected_block_id = block.id
        if block.type in BLOCK_REGISTRY:
            self._touch_recent(block.type)
        self._commit()
        return block

    def update_content(self, block_id: str, patch: dict) -> bool:
        """Fusion superficielle du patch dans le contenu ; les champs frères sont conservés."""
        i = self._index_of(block_id)
        if i is None:
            return False
        try:
            self.blocks[i] = self.blocks[i].with_content(patch)
        except ValidationError as e:
            log.warning("Patch de contenu refusé pour %s (%s erreurs)", block_id, e.error_count())
            return False
        self._commit()
        return True

    def update_styles(self, block_id: str, patch: dict) -> bool:
        i = self._index_of(block_id)
        if i is None:
            return False
        try:
            self.blocks[i] = self.blocks[i].with_styles(patch)
        except ValidationError as e:
            log.warning("Patch de style refusé pour %s (%s erreurs)", block_id, e.error_count())
            return False
        self._commit()
        return True

    def duplicate(self, block_id: str) -> Optional[BaseBlock]:
        """Copie profonde insérée juste après l'original, avec un id neuf."""
        i = self._index_of(block_id)
        if i is None:
            return None
        original = self.blocks[i]
        copy = original.model_copy(
            update={"id": new_block_id(), "name": f"{original.display_name} (Copy)"},
            deep=True,
        )
        self.blocks.insert(i + 1, copy)
        self.selected_block_id = copy.id
        self._commit()
        return copy

    def delete(self, block_id: str) -> bool:
        i = self._index_of(block_id)
        if i is None or self.blocks[i].locked:
            return False
        del self.blocks[i]
        if self.selected_block_id == block_id:
            self.selected_block_id = None
        self._commit()
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Retire le bloc en from_index puis l'insère en to_index."""
        n = len(self.blocks)
        if not (0 <= from_index < n and 0 <= to_index < n) or from_index == to_index:
            return False
        if self.blocks[from_index].locked:
            return False
        block = self.blocks.pop(from_index)
        self.blocks.insert(to_index, block)
        self._commit()
        return True

    def move(self, block_id: str, direction: str) -> bool:
        i = self._index_of(block_id)
        if i is None or direction not in ("up", "down"):
            return False
        return self.reorder(i, i - 1 if direction == "up" else i + 1)

    # ── Glisser-déposer ──────────────────────────────────────────────────────

    def drag_start(self, index: int) -> bool:
        """Ignoré si un glisser est déjà en cours."""
        if self.dragged_index is not None or not 0 <= index < len(self.blocks):
            return False
        self.dragged_index = index
        return True

    def drag_over(self, index: int) -> bool:
        if self.dragged_index is None:
            return False
        self.drag_over_index = index
        return True

    def drag_end(self) -> bool:
        """Valide le déplacement vers la dernière cible survolée ; remet toujours les deux pointeurs à None."""
        src, dst = self.dragged_index, self.drag_over_index
        self.dragged_index = None
        self.drag_over_index = None
        if src is None or dst is None:
            return False
        return self.reorder(src, dst)

    # ── Drapeaux ─────────────────────────────────────────────────────────────

    def toggle_hidden(self, block_id: str) -> bool:
        # Pas historisé : un undo ultérieur restaure l'état de l'entrée courante
        i = self._index_of(block_id)
        if i is None:
            return False
        b = self.blocks[i]
        self.blocks[i] = b.model_copy(update={"hidden": not b.hidden}, deep=True)
        return True

    def toggle_locked(self, block_id: str) -> bool:
        i = self._index_of(block_id)
        if i is None:
            return False
        b = self.blocks[i]
        self.blocks[i] = b.model_copy(update={"locked": not b.locked}, deep=True)
        self._commit()
        return True

    # ── Undo / redo ──────────────────────────────────────────────────────────

    def undo(self) -> bool:
        blocks = self.history.undo()
        if blocks is None:
            return False
        self.blocks = blocks
        self._drop_stale_selection()
        return True

    def redo(self) -> bool:
        blocks = self.history.redo()
        if blocks is None:
            return False
        self.blocks = blocks
        self._drop_stale_selection()
        return True

    # ── Remplacement en masse (template, import, restauration) ───────────────

    def replace_blocks(self, blocks: Sequence[BaseBlock]) -> None:
        """Remplace toute la séquence (sélection de template) ; annulable."""
        self.blocks = clone_blocks(blocks)
        self.selected_block_id = None
        self._commit()

    def append_blocks(self, blocks: Sequence[BaseBlock]) -> int:
        """Ajoute des blocs en fin de séquence (import) ; les ids en collision sont régénérés."""
        if not blocks:
            return 0
        taken = {b.id for b in self.blocks}
        for b in clone_blocks(blocks):
            if b.id in taken:
                b = b.model_copy(update={"id": new_block_id()})
            taken.add(b.id)
            self.blocks.append(b)
        self._commit()
        return len(blocks)

    def load_snapshot(self, snapshot: PageSnapshot) -> None:
        """Restauration d'une version : nouvelle édition annulable (le thème n'est pas historisé)."""
        self.theme = snapshot.theme.model_copy(deep=True)
        self.replace_blocks(snapshot.blocks)
