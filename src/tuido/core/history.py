"""Undo/redo history for the todo list."""

from __future__ import annotations

import logging

from tuido.core.items import ItemList
from tuido.core.operations import Operation

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 100


class HistoryManager:
    """Bounded undo and redo stacks of operations over one ItemList.

    Every mutation of the list goes through :meth:`record`. When the undo
    stack is full the oldest entry is evicted; that change can no longer be
    undone.
    """

    def __init__(self, items: ItemList, max_history_size: int = DEFAULT_HISTORY_SIZE) -> None:
        """Initialize history manager.

        Args:
            items: The list that recorded operations mutate.
            max_history_size: Maximum number of entries kept on each stack.
        """
        if max_history_size < 1:
            raise ValueError("max_history_size must be at least 1")
        self._items = items
        self._undo: list[Operation] = []
        self._redo: list[Operation] = []
        self._max_history_size = max_history_size

    def record(self, op: Operation) -> None:
        """Apply ``op`` and push it onto the undo stack.

        The redo stack is cleared. If ``op.apply`` raises, nothing is pushed.
        """
        op.apply(self._items)
        self._undo.append(op)
        if len(self._undo) > self._max_history_size:
            evicted = self._undo.pop(0)
            logger.debug("History full, evicted oldest %s", evicted.label)
        self._redo.clear()

    def undo(self) -> Operation | None:
        """Revert the most recent operation.

        Returns:
            The reverted operation, or None if there was nothing to undo.
        """
        if not self._undo:
            return None
        op = self._undo.pop()
        op.revert(self._items)
        self._push_redo(op)
        logger.debug("Undo %s", op.label)
        return op

    def redo(self) -> Operation | None:
        """Re-apply the most recently undone operation.

        Returns:
            The re-applied operation, or None if there was nothing to redo.
        """
        if not self._redo:
            return None
        op = self._redo.pop()
        op.apply(self._items)
        self._undo.append(op)
        logger.debug("Redo %s", op.label)
        return op

    def _push_redo(self, op: Operation) -> None:
        self._redo.append(op)
        if len(self._redo) > self._max_history_size:
            self._redo.pop(0)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def __len__(self) -> int:
        """Number of undoable operations."""
        return len(self._undo)
