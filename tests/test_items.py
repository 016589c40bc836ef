"""Tests for TodoItem, priority parsing and ItemList."""

import pytest

from tuido.core.items import (
    ItemList,
    TodoItem,
    parse_priority,
    sorted_by_completion,
    sorted_by_priority,
)
from tuido.errors import InputRejected


class TestParsePriority:
    def test_marker_extracted(self):
        assert parse_priority("(A) Buy milk") == ("A", "Buy milk")

    def test_no_marker_unchanged(self):
        assert parse_priority("Buy milk") == (None, "Buy milk")

    def test_lowercase_marker_normalized(self):
        assert parse_priority("(c) call mom") == ("C", "call mom")

    def test_any_letter(self):
        assert parse_priority("(Q) quarterly report") == ("Q", "quarterly report")

    def test_marker_not_at_start_is_text(self):
        assert parse_priority("Buy (A) milk") == (None, "Buy (A) milk")

    def test_multi_letter_is_not_marker(self):
        assert parse_priority("(AB) x") == (None, "(AB) x")

    def test_marker_without_space(self):
        assert parse_priority("(B)Pay rent") == ("B", "Pay rent")


class TestTodoItemParse:
    def test_parse_with_priority(self):
        item = TodoItem.parse("(A) Buy milk")
        assert item.priority == "A"
        assert item.text == "Buy milk"
        assert item.completed is False
        assert item.note is None

    def test_parse_without_priority(self):
        item = TodoItem.parse("Buy milk")
        assert item.priority is None
        assert item.text == "Buy milk"

    def test_empty_rejected(self):
        with pytest.raises(InputRejected):
            TodoItem.parse("   ")

    def test_marker_only_rejected(self):
        with pytest.raises(InputRejected):
            TodoItem.parse("(A)  ")

    def test_raw_text_reattaches_marker(self):
        assert TodoItem.parse("(B) Walk dog").raw_text == "(B) Walk dog"
        assert TodoItem.parse("Walk dog").raw_text == "Walk dog"


class TestTodoItemCopies:
    def test_with_raw_text_keeps_completion_and_note(self):
        item = TodoItem("old", completed=True, priority="A", note="n")
        edited = item.with_raw_text("new text")
        assert edited == TodoItem("new text", completed=True, priority=None, note="n")

    def test_blank_note_becomes_none(self):
        item = TodoItem("x", note="something")
        assert item.with_note("   ").note is None
        assert item.with_note("").note is None

    def test_toggled(self):
        assert TodoItem("x").toggled().completed is True
        assert TodoItem("x", completed=True).toggled().completed is False


class TestSerialization:
    def test_dict_roundtrip(self):
        item = TodoItem("Buy milk", completed=True, priority="A", note="2 liters")
        assert TodoItem.from_dict(item.to_dict()) == item

    def test_missing_optional_fields(self):
        assert TodoItem.from_dict({"text": "a"}) == TodoItem("a")

    def test_extra_fields_ignored(self):
        item = TodoItem.from_dict({"text": "a", "completed": False, "note_expanded": True})
        assert item == TodoItem("a")

    def test_invalid_priority(self):
        with pytest.raises(ValueError):
            TodoItem.from_dict({"text": "a", "priority": "AB"})

    def test_completed_must_be_bool(self):
        with pytest.raises(ValueError):
            TodoItem.from_dict({"text": "a", "completed": "false"})
        with pytest.raises(ValueError):
            TodoItem.from_dict({"text": "a", "completed": 1})

    def test_missing_text(self):
        with pytest.raises(ValueError):
            TodoItem.from_dict({"completed": True})

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            TodoItem.from_dict(["text"])


class TestItemList:
    def test_insert_and_remove(self):
        items = ItemList([TodoItem("a"), TodoItem("c")])
        items.insert(1, TodoItem("b"))
        assert [i.text for i in items] == ["a", "b", "c"]
        assert items.remove(0) == TodoItem("a")
        assert len(items) == 2

    def test_insert_out_of_range(self):
        items = ItemList()
        with pytest.raises(IndexError):
            items.insert(1, TodoItem("a"))

    def test_replace_returns_previous(self):
        items = ItemList([TodoItem("a")])
        assert items.replace(0, TodoItem("b")) == TodoItem("a")
        assert items[0] == TodoItem("b")

    def test_snapshot_is_detached(self):
        items = ItemList([TodoItem("a")])
        snap = items.snapshot()
        items.insert(0, TodoItem("b"))
        assert snap == (TodoItem("a"),)

    def test_last_index(self):
        assert ItemList().last_index() is None
        assert ItemList([TodoItem("a"), TodoItem("b")]).last_index() == 1


class TestSorting:
    def test_priority_sort_is_stable(self):
        items = [
            TodoItem("none1"),
            TodoItem("b1", priority="B"),
            TodoItem("a1", priority="A"),
            TodoItem("none2"),
            TodoItem("b2", priority="B"),
            TodoItem("z1", priority="Z"),
        ]
        assert [i.text for i in sorted_by_priority(items)] == [
            "a1", "b1", "b2", "z1", "none1", "none2",
        ]

    def test_unprioritized_after_every_letter(self):
        items = [TodoItem("plain"), TodoItem("z", priority="Z")]
        assert [i.text for i in sorted_by_priority(items)] == ["z", "plain"]

    def test_completion_sort_puts_completed_first_stably(self):
        items = [
            TodoItem("open1"),
            TodoItem("done1", completed=True),
            TodoItem("open2"),
            TodoItem("done2", completed=True),
        ]
        assert [i.text for i in sorted_by_completion(items)] == [
            "done1", "done2", "open1", "open2",
        ]
