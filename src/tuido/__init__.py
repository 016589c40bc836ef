"""Modal terminal todo list with undo/redo and fuzzy search."""

from .controller import Key, ModeController, ViewState
from .core import FuzzyMatcher, HistoryManager, ItemList, Mode, TodoItem
from .storage import JsonStore

__all__ = [
    "Key",
    "ModeController",
    "ViewState",
    "FuzzyMatcher",
    "HistoryManager",
    "ItemList",
    "Mode",
    "TodoItem",
    "JsonStore",
]
__version__ = "0.1.0"
