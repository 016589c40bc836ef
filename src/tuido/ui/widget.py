"""Widgets that draw the editor state.

Rendering is read-only: every widget takes a :class:`ViewState` snapshot and
never touches the controller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.containers import VerticalScroll
from textual.widgets import Static

from tuido.core.modes import Mode
from tuido.utils.theme import CURSOR_BACKGROUND, PRIORITY_COLORS, VISUAL_BACKGROUND

if TYPE_CHECKING:
    from tuido.controller import ViewState
    from tuido.core.items import TodoItem

MODE_COLORS = {
    Mode.NORMAL: "cyan",
    Mode.INSERT: "green",
    Mode.EDIT: "green",
    Mode.VISUAL: "magenta",
    Mode.NOTE_EDIT: "cyan",
    Mode.SEARCH: "blue",
    Mode.COMMAND: "yellow",
}


def item_style(item: TodoItem) -> str:
    if item.completed:
        return "dim strike"
    if item.priority:
        color = PRIORITY_COLORS.get(item.priority)
        return f"bold {color}" if color else "bold"
    return ""


def render_items(view: ViewState, show_notes: bool = True) -> Text:
    """Render the list with checkbox, cursor, visual range and notes."""
    text = Text()
    if not view.items:
        text.append("  No todos. Press i to add one.", style="dim italic")
        return text

    low, high = view.visual_range or (-1, -1)
    for index, item in enumerate(view.items):
        is_cursor = index == view.selected
        style = item_style(item)
        if low <= index <= high:
            style += f" on {VISUAL_BACKGROUND}"
        elif is_cursor:
            style += f" on {CURSOR_BACKGROUND}"

        checkbox = "[✓]" if item.completed else "[ ]"
        marker = "❯ " if is_cursor else "  "
        line = f"{marker}{checkbox} {item.raw_text}"
        if item.note and not (is_cursor and show_notes):
            line += " ›"
        if index:
            text.append("\n")
        text.append(line, style=style.strip())

        if item.note and is_cursor and show_notes:
            for note_line in item.note.splitlines():
                text.append(f"\n        {note_line}", style="italic dim")
    return text


def render_status(view: ViewState) -> Text:
    """Mode indicator, message and progress on one line."""
    text = Text()
    text.append(f"-- {view.mode.label} --", style=f"bold {MODE_COLORS[view.mode]}")
    if view.count:
        text.append(f" {view.count}", style="bold")
    if view.dirty:
        text.append(" [+]", style="yellow")
    if view.message:
        style = "red" if view.message.startswith(("Error", "Unknown", "Invalid")) else ""
        text.append(f"  {view.message}", style=style)

    total = len(view.items)
    done = sum(1 for item in view.items if item.completed)
    percent = done * 100 // total if total else 0
    text.append(f"  {done}/{total} ({percent}%)", style="dim")
    return text


def render_prompt(view: ViewState) -> Text:
    """The active text buffer with its prompt character, empty outside text modes."""
    if not view.mode.has_buffer:
        return Text("")
    text = Text()
    text.append(f"{view.mode.prompt_char} ", style=f"bold {MODE_COLORS[view.mode]}")
    text.append(view.buffer)
    text.append("█", style="blink")
    return text


class TodoListView(VerticalScroll):
    """Scrollable list of todo items."""

    can_focus = False

    DEFAULT_CSS = """
    TodoListView {
        height: 1fr;
        border: round $primary;
        border-title-color: $accent;
        padding: 0 1;
    }
    """

    def __init__(self, show_notes: bool = True, **kwargs) -> None:
        super().__init__(**kwargs)
        self._show_notes = show_notes
        self._body = Static("", id="todo-body")
        self.border_title = "TODOs"

    def compose(self):
        yield self._body

    def show(self, view: ViewState) -> None:
        self._body.update(render_items(view, self._show_notes))
        if view.selected is not None:
            # Assumes one line per item; notes below the cursor are ignored.
            self.scroll_to(y=max(view.selected - 2, 0), animate=False)


class PromptLine(Static):
    DEFAULT_CSS = """
    PromptLine {
        height: 1;
        padding: 0 1;
    }
    """

    def show(self, view: ViewState) -> None:
        self.update(render_prompt(view))


class StatusLine(Static):
    DEFAULT_CSS = """
    StatusLine {
        height: 1;
        padding: 0 1;
        background: $surface;
    }
    """

    def show(self, view: ViewState) -> None:
        self.update(render_status(view))
