"""Todo items and the ordered list that holds them."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Any

from tuido.errors import InputRejected

_PRIORITY_RE = re.compile(r"^\(([A-Za-z])\)\s*")


def parse_priority(text: str) -> tuple[str | None, str]:
    """Split a leading ``(X)`` priority marker off ``text``.

    Returns:
        ``(priority, remaining_text)``. Lowercase markers are normalized to
        uppercase. Text without a marker is returned unchanged.
    """
    match = _PRIORITY_RE.match(text)
    if match is None:
        return None, text
    return match.group(1).upper(), text[match.end():].strip()


@dataclass(frozen=True)
class TodoItem:
    """A single todo entry. Instances are immutable; edits produce copies."""

    text: str
    completed: bool = False
    priority: str | None = None
    note: str | None = None

    @classmethod
    def parse(cls, raw: str) -> TodoItem:
        """Build an item from user input, extracting the priority marker.

        Raises:
            InputRejected: If no text remains after marker extraction.
        """
        priority, text = parse_priority(raw.strip())
        if not text:
            raise InputRejected("Todo text cannot be empty")
        return cls(text=text, priority=priority)

    @property
    def raw_text(self) -> str:
        """Text with the priority marker re-attached, as the editor shows it."""
        if self.priority:
            return f"({self.priority}) {self.text}"
        return self.text

    def with_raw_text(self, raw: str) -> TodoItem:
        """Copy with text and priority replaced from ``raw``."""
        parsed = TodoItem.parse(raw)
        return replace(self, text=parsed.text, priority=parsed.priority)

    def with_note(self, note: str) -> TodoItem:
        """Copy with the note replaced. Blank notes are stored as no note."""
        return replace(self, note=note if note.strip() else None)

    def toggled(self) -> TodoItem:
        return replace(self, completed=not self.completed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TodoItem:
        """Build an item from a persisted record.

        Raises:
            ValueError: If the record is not a mapping or has no usable text.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValueError("record has no text")
        priority = data.get("priority")
        if priority is not None:
            if not isinstance(priority, str) or len(priority) != 1 or not priority.isalpha():
                raise ValueError(f"invalid priority: {priority!r}")
            priority = priority.upper()
        note = data.get("note")
        if note is not None and not isinstance(note, str):
            raise ValueError(f"invalid note: {note!r}")
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"invalid completed flag: {completed!r}")
        return cls(
            text=text,
            completed=completed,
            priority=priority,
            note=note or None,
        )


class ItemList:
    """Ordered sequence of todo items.

    The list only enforces index bounds; selection and visual anchors are
    owned by the mode controller.
    """

    def __init__(self, items: Iterable[TodoItem] = ()) -> None:
        self._items: list[TodoItem] = list(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TodoItem]:
        return iter(self._items)

    def __getitem__(self, index: int) -> TodoItem:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ItemList):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"ItemList({self._items!r})"

    def insert(self, index: int, item: TodoItem) -> None:
        if not 0 <= index <= len(self._items):
            raise IndexError(f"insert index {index} out of range")
        self._items.insert(index, item)

    def remove(self, index: int) -> TodoItem:
        return self._items.pop(index)

    def replace(self, index: int, item: TodoItem) -> TodoItem:
        """Swap the item at ``index``, returning the previous one."""
        previous = self._items[index]
        self._items[index] = item
        return previous

    def snapshot(self) -> tuple[TodoItem, ...]:
        """Immutable copy of the current sequence, safe to hand to readers."""
        return tuple(self._items)

    def restore(self, items: Iterable[TodoItem]) -> None:
        self._items = list(items)

    def last_index(self) -> int | None:
        return len(self._items) - 1 if self._items else None


def sorted_by_priority(items: Iterable[TodoItem]) -> list[TodoItem]:
    """Stable sort: A first, Z last, unprioritized after every letter."""
    return sorted(items, key=lambda item: (item.priority is None, item.priority or ""))


def sorted_by_completion(items: Iterable[TodoItem]) -> list[TodoItem]:
    """Stable sort with completed items first."""
    return sorted(items, key=lambda item: not item.completed)
