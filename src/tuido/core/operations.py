"""Reversible mutations of an ItemList.

Each operation stores what it needs to undo itself. ``apply`` performs the
change and ``revert`` performs the inverse; applying then reverting leaves the
list exactly as it was.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from tuido.core.items import ItemList, TodoItem


class Operation(ABC):
    """An undoable unit of change."""

    label: str = "change"

    @abstractmethod
    def apply(self, items: ItemList) -> None:
        """Perform the change on ``items``."""

    @abstractmethod
    def revert(self, items: ItemList) -> None:
        """Undo the change on ``items``."""

    @property
    def focus(self) -> int | None:
        """Index the cursor should move to after applying or reverting."""
        return None


@dataclass(frozen=True)
class Insert(Operation):
    index: int
    item: TodoItem
    label = "insert"

    def apply(self, items: ItemList) -> None:
        items.insert(self.index, self.item)

    def revert(self, items: ItemList) -> None:
        items.remove(self.index)

    @property
    def focus(self) -> int | None:
        return self.index


@dataclass(frozen=True)
class InsertMany(Operation):
    """Insert several items; ``entries`` hold final positions, ascending."""

    entries: tuple[tuple[int, TodoItem], ...]
    label = "paste"

    def apply(self, items: ItemList) -> None:
        for index, item in self.entries:
            items.insert(index, item)

    def revert(self, items: ItemList) -> None:
        for index, _ in reversed(self.entries):
            items.remove(index)

    @property
    def focus(self) -> int | None:
        return self.entries[0][0] if self.entries else None


@dataclass(frozen=True)
class Delete(Operation):
    """Delete one or more items.

    ``entries`` are ``(index, item)`` pairs in ascending index order, each
    index referring to the list before deletion. Removal runs back to front
    and reinsertion front to back so every item returns to its own slot.
    """

    entries: tuple[tuple[int, TodoItem], ...]
    label = "delete"

    @classmethod
    def at(cls, items: ItemList, indices: list[int]) -> Delete:
        return cls(tuple((i, items[i]) for i in sorted(set(indices))))

    def apply(self, items: ItemList) -> None:
        for index, _ in reversed(self.entries):
            items.remove(index)

    def revert(self, items: ItemList) -> None:
        for index, item in self.entries:
            items.insert(index, item)

    @property
    def focus(self) -> int | None:
        return self.entries[0][0] if self.entries else None


@dataclass(frozen=True)
class Edit(Operation):
    """Replace a single item (text, priority or note change)."""

    index: int
    before: TodoItem
    after: TodoItem
    label = "edit"

    def apply(self, items: ItemList) -> None:
        items.replace(self.index, self.after)

    def revert(self, items: ItemList) -> None:
        items.replace(self.index, self.before)

    @property
    def focus(self) -> int | None:
        return self.index


@dataclass(frozen=True)
class ToggleCompleted(Operation):
    """Flip completion on ``indices``; ``previous`` holds the prior states."""

    indices: tuple[int, ...]
    previous: tuple[bool, ...]
    label = "toggle"

    @classmethod
    def at(cls, items: ItemList, indices: list[int]) -> ToggleCompleted:
        ordered = tuple(sorted(set(indices)))
        return cls(ordered, tuple(items[i].completed for i in ordered))

    def _set(self, items: ItemList, states: list[bool]) -> None:
        for index, state in zip(self.indices, states):
            item = items[index]
            if item.completed != state:
                items.replace(index, item.toggled())

    def apply(self, items: ItemList) -> None:
        self._set(items, [not state for state in self.previous])

    def revert(self, items: ItemList) -> None:
        self._set(items, list(self.previous))

    @property
    def focus(self) -> int | None:
        return self.indices[0] if self.indices else None


@dataclass(frozen=True)
class Reorder(Operation):
    """Swap the whole sequence (sorting, opening another file)."""

    before: tuple[TodoItem, ...]
    after: tuple[TodoItem, ...]
    label = "reorder"

    def apply(self, items: ItemList) -> None:
        items.restore(self.after)

    def revert(self, items: ItemList) -> None:
        items.restore(self.before)

    @property
    def focus(self) -> int | None:
        return 0
