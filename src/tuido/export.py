"""Export the todo list to todo.txt or Markdown."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from pathlib import Path

from tuido.core.items import TodoItem
from tuido.errors import ExportFailure


class ExportFormat(enum.Enum):
    TODO_TXT = ".txt"
    MARKDOWN = ".md"

    @classmethod
    def from_path(cls, path: str | Path) -> ExportFormat:
        """Pick the format from the file suffix.

        Raises:
            ExportFailure: If the suffix is not .txt or .md.
        """
        suffix = Path(path).suffix.lower()
        for fmt in cls:
            if fmt.value == suffix:
                return fmt
        raise ExportFailure(f"Unsupported format: {path} (use .txt or .md)")


def render_todotxt(items: Iterable[TodoItem]) -> str:
    lines = []
    for item in items:
        line = ""
        if item.completed:
            line += "x "
        if item.priority:
            line += f"({item.priority}) "
        lines.append(line + item.text)
    return "".join(f"{line}\n" for line in lines)


def render_markdown(items: Iterable[TodoItem]) -> str:
    out = "# TODOs\n\n"
    for item in items:
        checkbox = "[x]" if item.completed else "[ ]"
        out += f"- {checkbox} {item.raw_text}\n"
        if item.note:
            for line in item.note.splitlines():
                out += f"  > {line}\n"
    return out


_RENDERERS = {
    ExportFormat.TODO_TXT: render_todotxt,
    ExportFormat.MARKDOWN: render_markdown,
}


def export_items(
    items: Iterable[TodoItem], fmt: ExportFormat, path: str | Path
) -> Path:
    """Write ``items`` to ``path`` in ``fmt``. Does not touch editor state.

    Raises:
        ExportFailure: If the file cannot be written.
    """
    target = Path(path).expanduser()
    try:
        target.write_text(_RENDERERS[fmt](items), encoding="utf-8")
    except OSError as e:
        raise ExportFailure(f"Error exporting to {target}: {e.strerror or e}") from e
    return target
