"""Input modes of the todo editor."""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class ModeConfig:
    """Static description of an input mode."""

    name: str
    label: str
    prompt_char: str | None


class Mode(enum.Enum):
    """Available input modes."""

    NORMAL = ModeConfig("normal", "NORMAL", None)
    INSERT = ModeConfig("insert", "INSERT", "+")
    EDIT = ModeConfig("edit", "EDIT", "~")
    VISUAL = ModeConfig("visual", "VISUAL", None)
    NOTE_EDIT = ModeConfig("note_edit", "NOTE EDIT", "#")
    SEARCH = ModeConfig("search", "SEARCH", "/")
    COMMAND = ModeConfig("command", "COMMAND", ":")

    @property
    def label(self) -> str:
        return self.value.label

    @property
    def prompt_char(self) -> str | None:
        """Character shown before the text buffer, None for modes without one."""
        return self.value.prompt_char

    @property
    def has_buffer(self) -> bool:
        """True if keys in this mode edit a text buffer."""
        return self.value.prompt_char is not None
