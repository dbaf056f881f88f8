"""Line buffer engine: bounded line storage with snapshot undo/redo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Iterable, List, Optional, Tuple

from .errors import EditError, EditResult
from .history import SnapshotHistory
from .state import MAX_LINES, MAX_UNDO, NOT_FOUND, Cursor, Snapshot
from .validation import (
    check_cursor,
    check_insert_position,
    check_line_index,
    find_from_cursor,
)


class LineBuffer:
    """Owns the live line sequence and applies validated edits to it.

    Every mutating call validates first; a rejected call touches neither the
    lines nor the history. Accepted calls snapshot the previous state for
    undo before changing anything.
    """

    def __init__(
        self,
        *,
        max_lines: int = MAX_LINES,
        history: Optional[SnapshotHistory] = None,
        max_undo: int = MAX_UNDO,
    ) -> None:
        if max_lines < 0:
            raise ValueError(f"max_lines must not be negative, got {max_lines}.")
        self.max_lines = max_lines
        self.history = history or SnapshotHistory(max_undo)
        self._lines: List[str] = []

    @classmethod
    def from_lines(cls, lines: Iterable[str], **kwargs) -> "LineBuffer":
        buffer = cls(**kwargs)
        buffer.load(lines)
        return buffer

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self._lines)

    @property
    def is_full(self) -> bool:
        return len(self._lines) >= self.max_lines

    def __len__(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> str:
        return self._lines[index]

    def snapshot(self) -> Snapshot:
        return Snapshot.capture(self._lines)

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def load(self, lines: Iterable[str]) -> int:
        """Replace the contents with at most ``max_lines`` lines."""

        kept: List[str] = []
        for line in lines:
            if len(kept) >= self.max_lines:
                break
            kept.append(line)
        self._lines = kept
        return len(kept)

    def search(self, word: str) -> Cursor:
        for index, line in enumerate(self._lines):
            column = line.find(word)
            if column != -1:
                return Cursor(index, column)
        return NOT_FOUND

    def insert_line(self, position: int, text: str) -> EditResult:
        label = "insert_line"
        error = check_insert_position(self._lines, position, max_lines=self.max_lines)
        if error is not None:
            return EditResult.failure(label, error)
        with Transaction(self, label):
            self._lines.insert(position, text)
        return EditResult.success(label)

    def insert_word(self, cursor: Cursor, word: str) -> EditResult:
        label = "insert_word"
        error = check_cursor(self._lines, cursor)
        if error is not None:
            return EditResult.failure(label, error)
        with Transaction(self, label):
            line = self._lines[cursor.line]
            column = min(cursor.column, len(line))
            self._lines[cursor.line] = line[:column] + word + line[column:]
        return EditResult.success(label)

    def update_word(self, cursor: Cursor, old_word: str, new_word: str) -> EditResult:
        return self._replace_word(cursor, old_word, new_word, label="update_word")

    def delete_word(self, cursor: Cursor, word: str) -> EditResult:
        return self._replace_word(cursor, word, "", label="delete_word")

    def delete_line(self, index: int) -> EditResult:
        label = "delete_line"
        error = check_line_index(self._lines, index)
        if error is not None:
            return EditResult.failure(label, error)
        with Transaction(self, label):
            del self._lines[index]
        return EditResult.success(label)

    def undo(self) -> EditResult:
        snapshot = self.history.pop_undo()
        if snapshot is None:
            return EditResult.failure("undo", EditError.HISTORY_EMPTY)
        self.history.push_redo(self._lines)
        self._lines = list(snapshot.lines)
        return EditResult.success("undo")

    def redo(self) -> EditResult:
        snapshot = self.history.pop_redo()
        if snapshot is None:
            return EditResult.failure("redo", EditError.HISTORY_EMPTY)
        self.history.push_undo(self._lines)
        self._lines = list(snapshot.lines)
        return EditResult.success("redo")

    def _replace_word(
        self, cursor: Cursor, target: str, replacement: str, *, label: str
    ) -> EditResult:
        error = check_cursor(self._lines, cursor)
        if error is not None:
            return EditResult.failure(label, error)
        found = find_from_cursor(self._lines, cursor, target)
        if found == -1:
            return EditResult.failure(label, EditError.WORD_NOT_FOUND)
        with Transaction(self, label):
            line = self._lines[cursor.line]
            self._lines[cursor.line] = (
                line[:found] + replacement + line[found + len(target) :]
            )
        return EditResult.success(label)


class Transaction(AbstractContextManager["Transaction"]):
    """Records the pre-edit state for undo once the wrapped block completes.

    A block that raises leaves no history entry behind.
    """

    def __init__(self, buffer: LineBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._before = buffer.snapshot()

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer.history.record_for_undo(self._before.lines)
        return False


__all__ = ["LineBuffer", "Transaction"]
