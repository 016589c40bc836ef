"""The ``:`` command language."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from tuido.core.items import sorted_by_completion, sorted_by_priority
from tuido.core.operations import Reorder
from tuido.errors import CommandUnrecognized, report_errors
from tuido.export import ExportFormat, export_items

if TYPE_CHECKING:
    from tuido.controller import ModeController

logger = logging.getLogger(__name__)

UNSAVED_WARNING = "Error: unsaved changes. Use :q! to quit without saving"


class CommandInterpreter:
    """Parses and runs commands entered in command mode.

    Errors raised by a command are reported in the status line and never
    escape :meth:`execute`.
    """

    def __init__(self, controller: ModeController) -> None:
        self._ctl = controller
        self._commands: dict[str, Callable[[str], None]] = {
            "q": lambda _: self.quit(force=False),
            "quit": lambda _: self.quit(force=False),
            "q!": lambda _: self.quit(force=True),
            "quit!": lambda _: self.quit(force=True),
            "w": self.write,
            "write": self.write,
            "wq": self.write_quit,
            "x": self.write_quit,
            "clear": self.clear_completed,
            "sort": self.sort,
            "open": self.open,
            "export": self.export,
            "help": lambda _: self._ctl.effects.show_help(),
        }

    def execute(self, line: str) -> None:
        """Run one command line such as ``sort priority`` or ``! ls``."""
        with report_errors(self._ctl.set_message):
            self._dispatch(line.strip())

    def _dispatch(self, line: str) -> None:
        if not line:
            return
        if line.startswith("!"):
            self.shell(line[1:].strip())
            return
        name, _, arg = line.partition(" ")
        handler = self._commands.get(name.lower())
        if handler is None:
            raise CommandUnrecognized(f"Unknown command: {line}")
        logger.debug("Command %s %r", name, arg)
        handler(arg.strip())

    def quit(self, force: bool) -> None:
        if self._ctl.dirty and not force:
            self._ctl.set_message(UNSAVED_WARNING)
            return
        self._ctl.effects.quit()

    def write(self, path: str = "") -> None:
        """Save to the store file, or to ``path`` if given."""
        target = self._ctl.store.save(self._ctl.items, path or None)
        self._ctl.mark_saved()
        self._ctl.set_message(f"Saved to {target}")

    def write_quit(self, path: str = "") -> None:
        # A failed save raises before quitting, leaving the editor open.
        self.write(path)
        self._ctl.effects.quit()

    def clear_completed(self, _: str = "") -> None:
        indices = [i for i, item in enumerate(self._ctl.items) if item.completed]
        if not indices:
            self._ctl.set_message("No completed todos")
            return
        self._ctl.delete_indices(indices)
        self._ctl.set_message(f"Removed {len(indices)} completed todos")

    def sort(self, key: str = "") -> None:
        if key == "":
            ordered, label = sorted_by_completion(self._ctl.items), "completion status"
        elif key.lower() == "priority":
            ordered, label = sorted_by_priority(self._ctl.items), "priority"
        else:
            raise CommandUnrecognized(f"Unknown sort key: {key} (use :sort or :sort priority)")
        before = self._ctl.items.snapshot()
        after = tuple(ordered)
        if after != before:
            self._ctl.record_whole_list(Reorder(before, after))
        self._ctl.set_message(f"Sorted by {label}")

    def open(self, path: str = "") -> None:
        if not path:
            self._ctl.set_message("Usage: :open <filename>")
            return
        loaded = tuple(self._ctl.store.read(path))
        self._ctl.record_whole_list(Reorder(self._ctl.items.snapshot(), loaded))
        self._ctl.set_message(f"Loaded from {path}")

    def export(self, path: str = "") -> None:
        if not path:
            self._ctl.set_message("Usage: :export <filename> (.txt or .md)")
            return
        fmt = ExportFormat.from_path(path)
        target = export_items(self._ctl.items.snapshot(), fmt, path)
        self._ctl.set_message(f"Exported to {target}")

    def shell(self, command: str) -> None:
        if not command:
            self._ctl.set_message("Usage: :! <command>")
            return
        self._ctl.effects.run_shell(command)
