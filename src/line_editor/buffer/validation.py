"""Validation helpers shared across buffer operations."""

from __future__ import annotations

from typing import Optional, Sequence

from .errors import EditError
from .state import Cursor


def check_line_index(lines: Sequence[str], index: int) -> Optional[EditError]:
    if index < 0 or index >= len(lines):
        return EditError.INDEX_OUT_OF_RANGE
    return None


def check_insert_position(
    lines: Sequence[str], position: int, *, max_lines: int
) -> Optional[EditError]:
    if len(lines) >= max_lines:
        return EditError.CAPACITY_EXCEEDED
    if position < 0 or position > len(lines):
        return EditError.INDEX_OUT_OF_RANGE
    return None


def check_cursor(lines: Sequence[str], cursor: Cursor) -> Optional[EditError]:
    error = check_line_index(lines, cursor.line)
    if error is not None:
        return error
    if cursor.column < 0:
        return EditError.INDEX_OUT_OF_RANGE
    return None


def find_from_cursor(lines: Sequence[str], cursor: Cursor, word: str) -> int:
    """Offset of ``word`` on the cursor's line at or after its column, or -1."""

    return lines[cursor.line].find(word, cursor.column)
