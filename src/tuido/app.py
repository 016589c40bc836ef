import argparse
import logging

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding

from tuido.config import TuidoConfig, get_store_path, load_config
from tuido.controller import Key, ModeController
from tuido.core.fuzzy import FuzzyMatcher
from tuido.core.items import ItemList
from tuido.execution import ShellExecutor
from tuido.storage import JsonStore
from tuido.ui import HelpScreen, PromptLine, StatusLine, TodoListView
from tuido.utils.theme import create_tuido_theme

logger = logging.getLogger(__name__)


class TuidoApp(App):
    TITLE = "tuido"

    BINDINGS = [
        Binding("ctrl+q", "request_quit", "Quit", priority=True),
    ]

    def __init__(self, config: TuidoConfig, store: JsonStore, items: ItemList):
        self.config = config
        self.controller = ModeController(
            items,
            store,
            effects=self,
            matcher=FuzzyMatcher(config.max_search_distance),
            history_size=config.history_size,
            prefix_timeout=config.prefix_timeout,
        )
        self._shell = ShellExecutor()
        super().__init__()

    def compose(self) -> ComposeResult:
        yield TodoListView(show_notes=self.config.show_notes, id="todos")
        yield PromptLine(id="prompt")
        yield StatusLine(id="status")

    def on_mount(self) -> None:
        self.register_theme(create_tuido_theme())
        self.theme = "tuido"
        self.refresh_view()

    def refresh_view(self) -> None:
        """Redraw every widget from a fresh controller snapshot."""
        view = self.controller.view()
        self.query_one(TodoListView).show(view)
        self.query_one(PromptLine).show(view)
        self.query_one(StatusLine).show(view)

    def on_key(self, event: events.Key) -> None:
        # Keys belong to the help screen while it is open.
        if len(self.screen_stack) > 1:
            return
        event.stop()
        event.prevent_default()
        char = event.character if event.is_printable else None
        self.controller.handle_key(Key(event.key, char))
        self.refresh_view()

    def action_request_quit(self) -> None:
        """ctrl+q behaves like :q and is refused with unsaved changes."""
        self.controller.commands.quit(force=False)
        self.refresh_view()

    # Effects used by the controller.

    def quit(self) -> None:
        self.exit()

    def show_help(self) -> None:
        self.push_screen(HelpScreen())

    def run_shell(self, command: str) -> None:
        self.controller.set_message(f"Running: {command}")
        self.run_worker(self._run_shell(command), group="shell", exclusive=True)

    async def _run_shell(self, command: str) -> None:
        result = await self._shell.execute(
            command, on_output=self._show_shell_line, on_error=self._show_shell_line
        )
        self.controller.set_message(result.summary())
        self.refresh_view()

    def _show_shell_line(self, line: str) -> None:
        # Latest output line while the command is still running.
        self.controller.set_message(f"> {line.strip()}")
        self.refresh_view()


def main():
    """Main entry point for the tuido command."""
    parser = argparse.ArgumentParser(description="Modal terminal todo list")
    parser.add_argument(
        "--file", default=None, metavar="PATH", help="Todo store to open (default ~/.tuido.json)"
    )
    parser.add_argument(
        "--inline", action="store_true", default=None, help="Run inline instead of full screen"
    )
    parser.add_argument(
        "--logging", action="store_true", default=None, help="Enable logging"
    )
    args = parser.parse_args()

    # Load configuration from ~/.config/tuido/init.py
    config, config_error = load_config()

    # Command-line arguments override config
    if args.file is not None:
        config.store_path = args.file
    if args.inline:
        config.inline = True
    if args.logging:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            filename="tuido.log",
            filemode="a",  # append mode
        )

    store = JsonStore(get_store_path(config))
    items, load_error = store.load()
    app = TuidoApp(config, store, items)

    if load_error:
        app.controller.set_message(load_error)
    elif len(items):
        app.controller.set_message(f"Loaded {len(items)} todos from {store.path}")

    # Show config error if any (as a notification once app starts)
    if config_error:
        app.call_later(
            lambda: app.notify(
                f"Config error: {config_error}", severity="warning", timeout=10
            )
        )

    if config.inline:
        app.run(inline=True, inline_no_clear=True)
    else:
        app.run()


if __name__ == "__main__":
    main()
