from __future__ import annotations

from typing import Callable, Sequence

import pytest

from line_editor.buffer import (
    MAX_LINES,
    MAX_UNDO,
    NOT_FOUND,
    Cursor,
    EditError,
    EditResult,
    LineBuffer,
    Transaction,
)


def make_buffer(lines: Sequence[str] = (), **kwargs) -> LineBuffer:
    return LineBuffer.from_lines(lines, **kwargs)


def test_load_truncates_to_capacity_without_history() -> None:
    buffer = make_buffer([f"line {i}" for i in range(MAX_LINES + 5)])

    assert len(buffer) == MAX_LINES
    assert buffer.line(MAX_LINES - 1) == f"line {MAX_LINES - 1}"
    assert not buffer.can_undo()


def test_search_returns_first_match_position() -> None:
    buffer = make_buffer(["abc", "xfoox", "bar", "foo"])

    assert buffer.search("foo") == Cursor(1, 1)


def test_search_without_match_returns_sentinel() -> None:
    buffer = make_buffer(["abc", "bar"])

    cursor = buffer.search("foo")

    assert cursor == NOT_FOUND
    assert tuple(cursor) == (-1, -1)
    assert not cursor.found


def test_insert_line_shifts_following_lines() -> None:
    buffer = make_buffer(["a", "c"])

    assert buffer.insert_line(1, "x")
    assert buffer.lines == ("a", "x", "c")


def test_insert_line_allows_append_at_length() -> None:
    buffer = make_buffer(["a"])

    assert buffer.insert_line(1, "b")
    assert buffer.lines == ("a", "b")


def test_insert_line_rejects_bad_positions() -> None:
    buffer = make_buffer(["a"])

    for position in (-1, 2):
        result = buffer.insert_line(position, "x")
        assert not result
        assert result.error is EditError.INDEX_OUT_OF_RANGE
    assert buffer.lines == ("a",)
    assert not buffer.can_undo()


def test_capacity_invariant_holds_for_repeated_inserts() -> None:
    buffer = make_buffer()
    for i in range(MAX_LINES):
        assert buffer.insert_line(len(buffer), str(i))
    before = buffer.lines
    undo_depth = buffer.history.undo_depth

    result = buffer.insert_line(0, "overflow")

    assert result.error is EditError.CAPACITY_EXCEEDED
    assert len(buffer) == MAX_LINES
    assert buffer.lines == before
    assert buffer.history.undo_depth == undo_depth


def test_capacity_checked_before_position() -> None:
    buffer = make_buffer(["a", "b"], max_lines=2)

    assert buffer.insert_line(99, "x").error is EditError.CAPACITY_EXCEEDED


def test_delete_line_shifts_following_lines() -> None:
    buffer = make_buffer(["a", "b", "c"])

    assert buffer.delete_line(1)
    assert buffer.lines == ("a", "c")


def test_delete_line_rejects_out_of_range() -> None:
    buffer = make_buffer(["a"])

    assert buffer.delete_line(1).error is EditError.INDEX_OUT_OF_RANGE
    assert buffer.delete_line(-1).error is EditError.INDEX_OUT_OF_RANGE
    assert not buffer.can_undo()


def test_insert_word_at_cursor_and_past_end() -> None:
    buffer = make_buffer(["hello world"])

    assert buffer.insert_word(Cursor(0, 5), ",")
    assert buffer.lines == ("hello, world",)
    assert buffer.insert_word(Cursor(0, 100), "!")
    assert buffer.lines == ("hello, world!",)


def test_insert_word_rejects_invalid_cursor() -> None:
    buffer = make_buffer(["hello"])

    assert buffer.insert_word(NOT_FOUND, "x").error is EditError.INDEX_OUT_OF_RANGE
    assert buffer.insert_word(Cursor(0, -1), "x").error is EditError.INDEX_OUT_OF_RANGE
    assert buffer.lines == ("hello",)


def test_update_word_only_touches_cursor_line() -> None:
    buffer = make_buffer(["foo bar", "foo baz"])

    assert buffer.update_word(Cursor(1, 0), "foo", "qux")
    assert buffer.lines == ("foo bar", "qux baz")


def test_update_word_searches_from_cursor_column() -> None:
    buffer = make_buffer(["foo and foo"])

    assert buffer.update_word(Cursor(0, 1), "foo", "bar")
    assert buffer.lines == ("foo and bar",)


def test_update_word_does_not_look_into_next_line() -> None:
    buffer = make_buffer(["abc", "foo"])

    result = buffer.update_word(Cursor(0, 0), "foo", "bar")

    assert result.error is EditError.WORD_NOT_FOUND
    assert buffer.lines == ("abc", "foo")
    assert not buffer.can_undo()


def test_update_word_can_grow_and_shrink_line() -> None:
    buffer = make_buffer(["a cat sat"])

    assert buffer.update_word(Cursor(0, 0), "cat", "tiger")
    assert buffer.lines == ("a tiger sat",)
    assert buffer.update_word(Cursor(0, 0), "tiger", "ox")
    assert buffer.lines == ("a ox sat",)


def test_delete_word_removes_occurrence() -> None:
    buffer = make_buffer(["one two three"])

    assert buffer.delete_word(Cursor(0, 0), "two ")
    assert buffer.lines == ("one three",)
    assert buffer.delete_word(Cursor(0, 0), "four").error is EditError.WORD_NOT_FOUND


def test_undo_then_redo_restores_pre_and_post_states() -> None:
    buffer = make_buffer(["a", "b", "c"])
    before = buffer.lines
    assert buffer.delete_line(0)
    after = buffer.lines

    assert buffer.undo()
    assert buffer.lines == before
    assert buffer.redo()
    assert buffer.lines == after


def test_undo_and_redo_report_empty_history() -> None:
    buffer = make_buffer(["a"])

    assert buffer.undo().error is EditError.HISTORY_EMPTY
    assert buffer.redo().error is EditError.HISTORY_EMPTY


def test_new_edit_after_undo_invalidates_redo() -> None:
    buffer = make_buffer(["a"])
    assert buffer.insert_line(1, "b")
    assert buffer.undo()

    assert buffer.insert_line(0, "z")

    assert buffer.redo().error is EditError.HISTORY_EMPTY
    assert buffer.lines == ("z", "a")


def test_history_is_bounded_to_max_undo() -> None:
    buffer = make_buffer()
    for i in range(MAX_UNDO + 2):
        assert buffer.insert_line(len(buffer), str(i))

    for _ in range(MAX_UNDO):
        assert buffer.undo()
    assert buffer.undo().error is EditError.HISTORY_EMPTY
    assert buffer.lines == ("0", "1")


def test_snapshots_do_not_alias_live_lines() -> None:
    buffer = make_buffer(["a"])
    assert buffer.insert_line(1, "b")
    assert buffer.insert_word(Cursor(0, 1), "!")

    assert buffer.undo()
    assert buffer.lines == ("a", "b")
    assert buffer.undo()
    assert buffer.lines == ("a",)


EDITS: dict[str, Callable[[LineBuffer], EditResult]] = {
    "insert_line": lambda buffer: buffer.insert_line(1, "new"),
    "insert_word": lambda buffer: buffer.insert_word(Cursor(0, 3), "!"),
    "update_word": lambda buffer: buffer.update_word(Cursor(1, 0), "foo", "quux"),
    "delete_line": lambda buffer: buffer.delete_line(0),
    "delete_word": lambda buffer: buffer.delete_word(Cursor(1, 2), "foo"),
}


@pytest.mark.parametrize("name", sorted(EDITS))
def test_undo_redo_inverse_law_for_every_edit(name: str) -> None:
    buffer = make_buffer(["abc", "foo foo", "bar"])
    before = buffer.lines

    assert EDITS[name](buffer)
    after = buffer.lines
    assert after != before

    assert buffer.undo()
    assert buffer.lines == before
    assert buffer.redo()
    assert buffer.lines == after


def test_full_undo_then_redo_cycle_through_bounded_history() -> None:
    buffer = make_buffer()
    states = [buffer.lines]
    for i in range(MAX_UNDO + 1):
        assert buffer.insert_line(len(buffer), str(i))
        states.append(buffer.lines)

    for expected in reversed(states[-MAX_UNDO - 1 : -1]):
        assert buffer.undo()
        assert buffer.lines == expected
    assert buffer.undo().error is EditError.HISTORY_EMPTY

    for expected in states[-MAX_UNDO:]:
        assert buffer.redo()
        assert buffer.lines == expected
    assert buffer.redo().error is EditError.HISTORY_EMPTY
    assert buffer.history.undo_depth == MAX_UNDO


def test_transaction_records_nothing_when_block_raises() -> None:
    buffer = make_buffer(["a"])

    with pytest.raises(RuntimeError):
        with Transaction(buffer, "broken"):
            raise RuntimeError("edit failed")

    assert not buffer.can_undo()
    with Transaction(buffer, "noop"):
        pass
    assert buffer.history.pop_undo().lines == ("a",)
