"""Core domain layer - items, history, matching and modes."""

from __future__ import annotations

from tuido.core.fuzzy import FuzzyMatcher, MatchKind, MatchResult
from tuido.core.history import HistoryManager
from tuido.core.items import ItemList, TodoItem, parse_priority
from tuido.core.modes import Mode, ModeConfig
from tuido.core.operations import (
    Delete,
    Edit,
    Insert,
    InsertMany,
    Operation,
    Reorder,
    ToggleCompleted,
)

__all__ = [
    "FuzzyMatcher",
    "MatchKind",
    "MatchResult",
    "HistoryManager",
    "ItemList",
    "TodoItem",
    "parse_priority",
    "Mode",
    "ModeConfig",
    "Operation",
    "Insert",
    "InsertMany",
    "Delete",
    "Edit",
    "ToggleCompleted",
    "Reorder",
]
