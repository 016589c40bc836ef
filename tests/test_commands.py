"""Tests for the ``:`` command language."""

import json

import pytest

from tuido.commands import UNSAVED_WARNING
from tuido.core.items import TodoItem


def texts(ctl):
    return [item.text for item in ctl.items]


@pytest.fixture
def run(press, type_text):
    """Type ``:line`` followed by enter."""

    def _run(ctl, line):
        press(ctl, ":")
        type_text(ctl, line)
        press(ctl, "enter")

    return _run


class TestQuit:
    def test_quit_clean(self, make_controller, run, effects):
        ctl = make_controller("a")
        run(ctl, "q")
        assert effects.quit_calls == 1

    def test_quit_dirty_refused(self, make_controller, press, run, effects):
        ctl = make_controller("a")
        press(ctl, "x")
        run(ctl, "quit")
        assert effects.quit_calls == 0
        assert ctl.message == UNSAVED_WARNING

    def test_force_quit(self, make_controller, press, run, effects):
        ctl = make_controller("a")
        press(ctl, "x")
        run(ctl, "q!")
        assert effects.quit_calls == 1


class TestWrite:
    def test_write_saves_and_marks_clean(self, make_controller, press, run, tmp_store_file):
        ctl = make_controller("a", "b")
        press(ctl, "x")
        run(ctl, "w")
        assert not ctl.dirty
        assert ctl.message == f"Saved to {tmp_store_file}"
        data = json.loads(tmp_store_file.read_text())
        assert [record["completed"] for record in data] == [True, False]

    def test_write_to_path(self, make_controller, run, tmp_path, tmp_store_file):
        ctl = make_controller("a")
        target = tmp_path / "copy.json"
        run(ctl, f"write {target}")
        assert target.exists()
        assert not tmp_store_file.exists()

    def test_write_quit(self, make_controller, press, run, effects, tmp_store_file):
        ctl = make_controller("a")
        press(ctl, "x")
        run(ctl, "wq")
        assert tmp_store_file.exists()
        assert effects.quit_calls == 1

    def test_write_quit_stays_open_on_failure(self, make_controller, press, run, effects, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        ctl = make_controller("a")
        run(ctl, f"x {blocker / 'todos.json'}")
        assert effects.quit_calls == 0
        assert ctl.message.startswith("Error saving to")

    def test_undo_after_save_makes_dirty(self, make_controller, press, run):
        ctl = make_controller("a")
        press(ctl, "x")
        run(ctl, "w")
        press(ctl, "u")
        assert ctl.dirty


class TestClear:
    def test_removes_completed(self, make_controller, press, run):
        ctl = make_controller("a", "b", "c", "d")
        press(ctl, "x", "j", "j", "x")
        run(ctl, "clear")
        assert texts(ctl) == ["b", "d"]
        assert ctl.message == "Removed 2 completed todos"
        press(ctl, "u")
        assert texts(ctl) == ["a", "b", "c", "d"]

    def test_nothing_completed(self, make_controller, run):
        ctl = make_controller("a")
        run(ctl, "clear")
        assert ctl.message == "No completed todos"
        assert len(ctl.history) == 0


class TestSort:
    def test_sort_by_completion(self, make_controller, press, run):
        ctl = make_controller("a", "b", "c")
        press(ctl, "G", "x")
        run(ctl, "sort")
        assert texts(ctl) == ["c", "a", "b"]
        assert ctl.selected == 0
        assert ctl.message == "Sorted by completion status"

    def test_sort_by_priority(self, make_controller, run):
        ctl = make_controller("plain", "(B) bee", "(A) ay")
        run(ctl, "sort priority")
        assert texts(ctl) == ["ay", "bee", "plain"]
        assert ctl.message == "Sorted by priority"

    def test_sort_is_undoable(self, make_controller, run, press):
        ctl = make_controller("(B) bee", "(A) ay")
        run(ctl, "sort priority")
        press(ctl, "u")
        assert texts(ctl) == ["bee", "ay"]

    def test_already_sorted_not_recorded(self, make_controller, run):
        ctl = make_controller("(A) ay", "(B) bee")
        run(ctl, "sort priority")
        assert len(ctl.history) == 0

    def test_unknown_sort_key(self, make_controller, run):
        ctl = make_controller("a")
        run(ctl, "sort size")
        assert ctl.message.startswith("Unknown sort key: size")


class TestOpen:
    def test_open_replaces_list(self, make_controller, press, run, tmp_path):
        other = tmp_path / "other.json"
        other.write_text(json.dumps([{"text": "loaded"}]))
        ctl = make_controller("a", "b")
        run(ctl, f"open {other}")
        assert texts(ctl) == ["loaded"]
        assert ctl.message == f"Loaded from {other}"
        press(ctl, "u")
        assert texts(ctl) == ["a", "b"]

    def test_open_missing_file(self, make_controller, run, tmp_path):
        ctl = make_controller("a")
        run(ctl, f"open {tmp_path / 'nope.json'}")
        assert texts(ctl) == ["a"]
        assert ctl.message.startswith("Error opening")

    def test_open_undecodable_file(self, make_controller, run, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_bytes(b"\xff\xfe garbage")
        ctl = make_controller("a")
        run(ctl, f"open {bad}")
        assert texts(ctl) == ["a"]
        assert ctl.message == f"Invalid file format in {bad}"
        assert len(ctl.history) == 0

    def test_open_without_path(self, make_controller, run):
        ctl = make_controller("a")
        run(ctl, "open")
        assert ctl.message == "Usage: :open <filename>"


class TestExport:
    def test_export_markdown(self, make_controller, run, tmp_path):
        ctl = make_controller("(A) a")
        target = tmp_path / "out.md"
        run(ctl, f"export {target}")
        assert target.read_text() == "# TODOs\n\n- [ ] (A) a\n"
        assert ctl.message == f"Exported to {target}"
        assert len(ctl.history) == 0
        assert not ctl.dirty

    def test_export_bad_format(self, make_controller, run, tmp_path):
        ctl = make_controller("a")
        run(ctl, f"export {tmp_path / 'out.csv'}")
        assert ctl.message.startswith("Unsupported format")

    def test_export_without_path(self, make_controller, run):
        ctl = make_controller("a")
        run(ctl, "export")
        assert ctl.message == "Usage: :export <filename> (.txt or .md)"


class TestMisc:
    def test_shell(self, make_controller, run, effects):
        ctl = make_controller()
        run(ctl, "!ls -la")
        assert effects.shell_commands == ["ls -la"]

    def test_shell_without_command(self, make_controller, run, effects):
        ctl = make_controller()
        run(ctl, "! ")
        assert effects.shell_commands == []
        assert ctl.message == "Usage: :! <command>"

    def test_help(self, make_controller, run, effects):
        ctl = make_controller()
        run(ctl, "help")
        assert effects.help_calls == 1

    def test_unknown(self, make_controller, run):
        ctl = make_controller("a")
        run(ctl, "frobnicate now")
        assert ctl.message == "Unknown command: frobnicate now"
        assert texts(ctl) == ["a"]

    def test_empty_line(self, make_controller, run):
        ctl = make_controller("a")
        run(ctl, "")
        assert ctl.message == ""

    def test_execute_directly(self, make_controller):
        ctl = make_controller("a")
        ctl.items.insert(1, TodoItem("b"))
        ctl.commands.execute("  clear  ")
        assert ctl.message == "No completed todos"
