"""Textual widgets for the todo editor."""

from __future__ import annotations

from tuido.ui.help import HELP_TEXT, HelpScreen
from tuido.ui.widget import (
    PromptLine,
    StatusLine,
    TodoListView,
    render_items,
    render_prompt,
    render_status,
)

__all__ = [
    "HELP_TEXT",
    "HelpScreen",
    "PromptLine",
    "StatusLine",
    "TodoListView",
    "render_items",
    "render_prompt",
    "render_status",
]
