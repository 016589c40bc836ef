"""Modal key handling for the todo editor.

The controller owns the item list, the undo history and all transient editor
state (selection, visual anchor, text buffer, pending two-key prefix). Every
key is processed to completion before the next one arrives.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from tuido.commands import CommandInterpreter
from tuido.core.fuzzy import FuzzyMatcher
from tuido.core.history import DEFAULT_HISTORY_SIZE, HistoryManager
from tuido.core.items import ItemList, TodoItem
from tuido.core.modes import Mode
from tuido.core.operations import (
    Delete,
    Edit,
    Insert,
    InsertMany,
    Operation,
    ToggleCompleted,
)
from tuido.errors import InputRejected

if TYPE_CHECKING:
    from tuido.storage import JsonStore

logger = logging.getLogger(__name__)

PREFIX_KEYS = ("g", "d")


class Effects(Protocol):
    """Application-level side effects the controller may trigger."""

    def quit(self) -> None: ...

    def run_shell(self, command: str) -> None: ...

    def show_help(self) -> None: ...


@dataclass(frozen=True)
class Key:
    """A key press: Textual-style key name plus the printable character, if any."""

    name: str
    char: str | None = None

    @classmethod
    def parse(cls, token: str) -> Key:
        """Single characters are printable keys; anything else is a key name."""
        if len(token) == 1:
            return cls(token, token)
        if token == "space":
            return cls(token, " ")
        return cls(token)

    @property
    def symbol(self) -> str:
        return self.char if self.is_printable else self.name

    @property
    def is_printable(self) -> bool:
        return self.char is not None and self.char.isprintable()


@dataclass(frozen=True)
class ViewState:
    """Read-only snapshot handed to the renderer."""

    items: tuple[TodoItem, ...]
    mode: Mode
    selected: int | None
    visual_range: tuple[int, int] | None
    buffer: str
    message: str
    dirty: bool
    count: int


class ModeController:
    """Interprets keys according to the current mode."""

    def __init__(
        self,
        items: ItemList,
        store: JsonStore,
        effects: Effects,
        matcher: FuzzyMatcher | None = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
        prefix_timeout: float | None = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the controller.

        Args:
            items: The list to edit, usually loaded from ``store``.
            store: Persistence for ``:w`` and ``:open``.
            effects: Quit, shell and help handlers supplied by the UI.
            matcher: Fuzzy matcher for ``/`` search.
            history_size: Capacity of the undo and redo stacks.
            prefix_timeout: Seconds allowed between the two keys of ``gg`` or
                ``dd``. None disables the timeout.
            clock: Monotonic time source.
        """
        self.items = items
        self.store = store
        self.effects = effects
        self.history = HistoryManager(items, history_size)
        self.matcher = matcher or FuzzyMatcher()
        self.commands = CommandInterpreter(self)

        self.mode = Mode.NORMAL
        self.selected: int | None = 0 if len(items) else None
        self.anchor: int | None = None
        self.buffer = ""
        self.message = ""

        self._prefix_timeout = prefix_timeout
        self._clock = clock
        self._pending: tuple[str, float] | None = None
        self._count = 0
        self._clipboard: tuple[TodoItem, ...] = ()
        self._last_action: str | None = None
        self._saved = items.snapshot()

        self._normal_actions: dict[str, Callable[[], None]] = {
            "G": self.select_last,
            "$": self.select_last,
            "i": self._start_insert,
            "A": self._start_insert,
            "e": self._start_edit,
            "o": self._start_note_edit,
            "v": self._start_visual,
            "/": lambda: self._enter_text_mode(Mode.SEARCH, ""),
            ":": lambda: self._enter_text_mode(Mode.COMMAND, ""),
            "x": self.toggle_selected,
            "u": self.undo,
            "ctrl+r": self.redo,
            "y": self.yank_selected,
            "p": self.paste,
            ".": self.repeat_last_action,
            "q": lambda: self.commands.quit(force=False),
            "?": self.effects.show_help,
        }

    # -- state queries -----------------------------------------------------

    @property
    def dirty(self) -> bool:
        """True if the list differs from what was last loaded or saved."""
        return self.items.snapshot() != self._saved

    def mark_saved(self) -> None:
        self._saved = self.items.snapshot()

    @property
    def visual_range(self) -> tuple[int, int] | None:
        if self.mode != Mode.VISUAL or self.anchor is None or self.selected is None:
            return None
        return min(self.anchor, self.selected), max(self.anchor, self.selected)

    def view(self) -> ViewState:
        return ViewState(
            items=self.items.snapshot(),
            mode=self.mode,
            selected=self.selected,
            visual_range=self.visual_range,
            buffer=self.buffer,
            message=self.message,
            dirty=self.dirty,
            count=self._count,
        )

    def set_message(self, message: str) -> None:
        self.message = message

    # -- dispatch ----------------------------------------------------------

    def handle_key(self, key: Key | str) -> None:
        """Process one key press in the current mode."""
        if isinstance(key, str):
            key = Key.parse(key)
        if self.mode == Mode.NORMAL:
            self._handle_normal(key)
        elif self.mode == Mode.VISUAL:
            self._handle_visual(key)
        else:
            self._handle_text(key)

    def _take_prefix(self, symbol: str) -> bool:
        """Track ``gg`` / ``dd``. Returns True when ``symbol`` completes a pair."""
        pending, self._pending = self._pending, None
        now = self._clock()
        if pending is not None and pending[0] == symbol:
            if self._prefix_timeout is None or now - pending[1] <= self._prefix_timeout:
                return True
        if symbol in PREFIX_KEYS:
            self._pending = (symbol, now)
        return False

    def _handle_normal(self, key: Key) -> None:
        symbol = key.symbol
        completed_pair = self._take_prefix(symbol)

        if symbol.isdigit() and len(symbol) == 1 and (symbol != "0" or self._count):
            self._count = self._count * 10 + int(symbol)
            return
        count = max(self._count, 1)
        self._count = 0

        if symbol in ("j", "down"):
            self.move(count)
        elif symbol in ("k", "up"):
            self.move(-count)
        elif symbol == "0":
            self.select_first()
        elif symbol == "g":
            if completed_pair:
                self.select_first()
        elif symbol == "d":
            if completed_pair:
                self.delete_selected()
        elif symbol in self._normal_actions:
            self._normal_actions[symbol]()

    def _handle_visual(self, key: Key) -> None:
        symbol = key.symbol
        if symbol in ("j", "down"):
            self.move(1)
        elif symbol in ("k", "up"):
            self.move(-1)
        elif symbol == "x":
            self._toggle(self._range_indices())
            self._exit_visual()
        elif symbol == "d":
            self._delete(self._range_indices())
            self._exit_visual()
        elif symbol == "y":
            self._yank(self._range_indices())
            self._exit_visual()
        elif symbol == "escape":
            self._exit_visual()

    def _handle_text(self, key: Key) -> None:
        if key.name == "escape":
            self._leave_text_mode()
        elif key.name == "backspace":
            self.buffer = self.buffer[:-1]
        elif key.name == "enter":
            self._commit()
        elif key.is_printable:
            self.buffer += key.char

    # -- navigation --------------------------------------------------------

    def _clamp(self, index: int | None) -> int | None:
        if not len(self.items):
            return None
        if index is None:
            return 0
        return max(0, min(index, len(self.items) - 1))

    def move(self, delta: int) -> None:
        if self.selected is None:
            self.selected = self._clamp(None)
            return
        self.selected = self._clamp(self.selected + delta)

    def select_first(self) -> None:
        self.selected = self._clamp(0)

    def select_last(self) -> None:
        self.selected = self.items.last_index()

    # -- mode transitions --------------------------------------------------

    def _enter_text_mode(self, mode: Mode, initial: str) -> None:
        logger.debug("Entering %s mode", mode.label)
        self.mode = mode
        self.buffer = initial
        self.message = ""

    def _leave_text_mode(self) -> None:
        self.mode = Mode.NORMAL
        self.buffer = ""

    def _start_insert(self) -> None:
        self._enter_text_mode(Mode.INSERT, "")

    def _start_edit(self) -> None:
        if self.selected is None:
            return
        self._enter_text_mode(Mode.EDIT, self.items[self.selected].raw_text)

    def _start_note_edit(self) -> None:
        if self.selected is None:
            return
        self._enter_text_mode(Mode.NOTE_EDIT, self.items[self.selected].note or "")

    def _start_visual(self) -> None:
        if self.selected is None:
            return
        self.mode = Mode.VISUAL
        self.anchor = self.selected

    def _exit_visual(self) -> None:
        self.mode = Mode.NORMAL
        self.anchor = None

    def _range_indices(self) -> list[int]:
        bounds = self.visual_range
        if bounds is None:
            return []
        return list(range(bounds[0], bounds[1] + 1))

    # -- commits -----------------------------------------------------------

    def _commit(self) -> None:
        mode, text = self.mode, self.buffer
        if mode == Mode.SEARCH:
            self._leave_text_mode()
            self.search(text)
        elif mode == Mode.COMMAND:
            self._leave_text_mode()
            self.commands.execute(text)
        else:
            try:
                if mode == Mode.INSERT:
                    self._commit_insert(text)
                elif mode == Mode.EDIT:
                    self._commit_edit(text)
                elif mode == Mode.NOTE_EDIT:
                    self._commit_note(text)
            except InputRejected as e:
                # Stay in the mode with the buffer intact so it can be fixed.
                self.message = str(e)
                return
            self._leave_text_mode()

    def _commit_insert(self, text: str) -> None:
        item = TodoItem.parse(text)
        index = self.selected + 1 if self.selected is not None else len(self.items)
        self.record(Insert(index, item))
        self.selected = index
        self.message = "TODO added"

    def _commit_edit(self, text: str) -> None:
        if self.selected is None:
            return
        before = self.items[self.selected]
        after = before.with_raw_text(text)
        if after == before:
            return
        self.record(Edit(self.selected, before, after))
        self.message = "TODO updated"

    def _commit_note(self, text: str) -> None:
        if self.selected is None:
            return
        before = self.items[self.selected]
        after = before.with_note(text)
        if after == before:
            return
        self.record(Edit(self.selected, before, after))
        self.message = "Note saved" if after.note else "Note removed"

    def search(self, query: str) -> int | None:
        """Select the best fuzzy match for ``query``."""
        if not query:
            return None
        index = self.matcher.search(query, (item.text for item in self.items))
        if index is None:
            self.message = f"Pattern not found: {query}"
        else:
            self.selected = index
            self.message = f"/{query}"
        return index

    # -- mutations ---------------------------------------------------------

    def record(self, op: Operation) -> None:
        """Apply ``op`` through the history so it can be undone."""
        self.history.record(op)

    def toggle_selected(self) -> None:
        if self.selected is not None:
            self._toggle([self.selected])

    def delete_selected(self) -> None:
        if self.selected is not None:
            self._delete([self.selected])

    def _toggle(self, indices: list[int]) -> None:
        if not indices:
            return
        self.record(ToggleCompleted.at(self.items, indices))
        self._last_action = "toggle"
        self.message = "TODO toggled" if len(indices) == 1 else f"{len(indices)} todos toggled"

    def _delete(self, indices: list[int]) -> None:
        if not indices:
            return
        op = Delete.at(self.items, indices)
        self._clipboard = tuple(item for _, item in op.entries)
        self.record(op)
        self.selected = self._clamp(op.focus)
        self._last_action = "delete"
        self.message = "TODO deleted" if len(indices) == 1 else f"{len(indices)} todos deleted"

    def delete_indices(self, indices: list[int]) -> None:
        """Delete ``indices`` as one undoable operation."""
        if not indices:
            return
        op = Delete.at(self.items, indices)
        self.record(op)
        self.selected = self._clamp(op.focus)

    def yank_selected(self) -> None:
        if self.selected is not None:
            self._yank([self.selected])

    def _yank(self, indices: list[int]) -> None:
        if not indices:
            return
        self._clipboard = tuple(self.items[i] for i in indices)
        self.message = "TODO yanked" if len(indices) == 1 else f"{len(indices)} todos yanked"

    def paste(self) -> None:
        if not self._clipboard:
            self.message = "Nothing to paste"
            return
        start = self.selected + 1 if self.selected is not None else len(self.items)
        entries = tuple((start + offset, item) for offset, item in enumerate(self._clipboard))
        self.record(InsertMany(entries))
        self.selected = start
        self.message = f"Pasted {len(entries)} todos"

    def repeat_last_action(self) -> None:
        if self._last_action == "toggle":
            self.toggle_selected()
        elif self._last_action == "delete":
            self.delete_selected()

    def record_whole_list(self, op: Operation) -> None:
        """Record an operation that rewrites the whole list and reset the selection."""
        self.record(op)
        self.selected = self._clamp(0)

    def undo(self) -> None:
        if not self.history.can_undo():
            self.message = "Already at oldest change"
            return
        op = self.history.undo()
        self.selected = self._clamp(op.focus)
        self.message = f"Undo: {op.label}"

    def redo(self) -> None:
        if not self.history.can_redo():
            self.message = "Already at newest change"
            return
        op = self.history.redo()
        self.selected = self._clamp(op.focus)
        self.message = f"Redo: {op.label}"
