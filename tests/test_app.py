"""Tests for the Textual application shell."""

import pytest

from tuido.app import TuidoApp
from tuido.commands import UNSAVED_WARNING
from tuido.config import TuidoConfig
from tuido.core.items import ItemList, TodoItem
from tuido.storage import JsonStore


@pytest.fixture
def app(tmp_store_file):
    return TuidoApp(TuidoConfig(), JsonStore(tmp_store_file), ItemList([TodoItem("a")]))


class TestQuitKey:
    @pytest.mark.asyncio
    async def test_ctrl_q_refused_with_unsaved_changes(self, app, tmp_store_file):
        async with app.run_test() as pilot:
            await pilot.press("x", "ctrl+q")
            assert app.controller.message == UNSAVED_WARNING
            assert app.return_code is None
            await pilot.press(":", "w", "enter", "ctrl+q")
        assert tmp_store_file.exists()
        assert app.return_code == 0

    @pytest.mark.asyncio
    async def test_ctrl_q_when_clean(self, app):
        async with app.run_test() as pilot:
            await pilot.press("ctrl+q")
        assert app.return_code == 0


class TestShellLines:
    def test_latest_line_shown(self, app, monkeypatch):
        monkeypatch.setattr(app, "refresh_view", lambda: None)
        app._show_shell_line("building...\n")
        assert app.controller.message == "> building..."
