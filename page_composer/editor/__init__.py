"""Session d'édition (undo/redo, glisser-déposer) + contrôleur de page."""
from .history import History, clone_blocks
from .session import RECENT_LIMIT, EditorSession
from .controller import BLOCK_NAME_REQUIRED, NO_CONTENT_MESSAGE, Notification, PageEditor

__all__ = [
    "History", "clone_blocks",
    "RECENT_LIMIT", "EditorSession",
    "BLOCK_NAME_REQUIRED", "NO_CONTENT_MESSAGE", "Notification", "PageEditor",
]
