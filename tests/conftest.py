"""Shared fixtures for tuido tests."""

import pytest

from tuido.controller import ModeController
from tuido.core.items import ItemList, TodoItem
from tuido.storage import JsonStore


class FakeEffects:
    """Records the side effects the controller asks for."""

    def __init__(self):
        self.quit_calls = 0
        self.help_calls = 0
        self.shell_commands = []

    def quit(self):
        self.quit_calls += 1

    def run_shell(self, command):
        self.shell_commands.append(command)

    def show_help(self):
        self.help_calls += 1


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def tmp_store_file(tmp_path):
    """Provide a temporary todo store path."""
    return tmp_path / "todos.json"


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Provide a temporary config directory."""
    config_dir = tmp_path / "config" / "tuido"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def effects():
    return FakeEffects()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_controller(tmp_store_file, effects, clock):
    """Build a controller over the given item texts."""

    def _make(*texts, **kwargs):
        items = ItemList(TodoItem.parse(text) for text in texts)
        return ModeController(
            items, JsonStore(tmp_store_file), effects=effects, clock=clock, **kwargs
        )

    return _make


@pytest.fixture
def press():
    """Feed key tokens to a controller: single characters or key names."""

    def _press(controller, *tokens):
        for token in tokens:
            controller.handle_key(token)

    return _press


@pytest.fixture
def type_text():
    """Type every character of a string into a controller."""

    def _type(controller, text):
        for ch in text:
            controller.handle_key(ch)

    return _type
