"""Help screen listing keys and commands."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

HELP_TEXT = """\
[b]Normal mode[/b]
  j / k, Down / Up   move down / up (a count such as 5j repeats)
  gg / G             first / last item (also 0 / $)
  i / A              add a todo after the cursor, (A)-(Z) prefix sets priority
  e                  edit the selected todo
  o                  edit the note of the selected todo
  x                  toggle completed
  dd                 delete
  y / p              yank / paste after the cursor
  .                  repeat the last toggle or delete
  v                  visual mode (j / k extend, x toggle, d delete, y yank)
  /                  fuzzy search, Enter jumps to the best match
  u / ctrl+r         undo / redo
  :                  command mode
  q / ctrl+q         quit (refused with unsaved changes, :q! forces)

[b]Text modes[/b]
  Enter commits, Esc cancels, Backspace deletes a character

[b]Commands[/b]
  :w \\[path]          save to the store file or to path
  :q  :q!  :wq       quit, force quit, save and quit
  :clear             remove completed todos
  :sort              completed first
  :sort priority     by priority, unprioritized last
  :open <path>       load todos from path (undoable)
  :export <path>     export as todo.txt (.txt) or Markdown (.md)
  :! <command>       run a shell command
  :help              this screen
"""


class HelpScreen(ModalScreen[None]):
    """Scrollable key reference. Esc or q closes it."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen VerticalScroll {
        width: 80;
        height: 80%;
        border: round $accent;
        background: $surface;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("q", "dismiss", "Close", show=False),
        Binding("j", "scroll_down", "Down", show=False),
        Binding("k", "scroll_up", "Up", show=False),
    ]

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static(HELP_TEXT)

    def action_scroll_down(self) -> None:
        self.query_one(VerticalScroll).scroll_down()

    def action_scroll_up(self) -> None:
        self.query_one(VerticalScroll).scroll_up()
