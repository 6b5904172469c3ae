"""
Historique undo/redo — pile linéaire de copies profondes de la séquence.

Invariants :
- chaque entrée est une copie profonde indépendante de l'état live
- push après undo tronque le futur (redo devient impossible)
"""
from typing import List, Optional, Sequence

from ..blocks.base import BaseBlock


def clone_blocks(blocks: Sequence[BaseBlock]) -> List[BaseBlock]:
    return [b.model_copy(deep=True) for b in blocks]


class History:
    def __init__(self, initial: Sequence[BaseBlock] = ()):
        self.entries: List[List[BaseBlock]] = [clone_blocks(initial)]
        self.index = 0

    def push(self, blocks: Sequence[BaseBlock]) -> None:
        del self.entries[self.index + 1:]
        self.entries.append(clone_blocks(blocks))
        self.index = len(self.entries) - 1

    @property
    def can_undo(self) -> bool:
        return self.index > 0

    @property
    def can_redo(self) -> bool:
        return self.index < len(self.entries) - 1

    def undo(self) -> Optional[List[BaseBlock]]:
        if not self.can_undo:
            return None
        self.index -= 1
        return clone_blocks(self.entries[self.index])

    def redo(self) -> Optional[List[BaseBlock]]:
        if not self.can_redo:
            return None
        self.index += 1
        return clone_blocks(self.entries[self.index])

    def __len__(self) -> int:
        return len(self.entries)
