"""Cursor and snapshot value types shared by the buffer engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

MAX_LINES = 25
MAX_UNDO = 3


@dataclass(frozen=True, slots=True)
class Cursor:
    """Position inside the buffer as ``(line, column)``.

    ``Cursor()`` is the "not found / unset" sentinel ``(-1, -1)``.
    """

    line: int = -1
    column: int = -1

    @property
    def found(self) -> bool:
        return self.line >= 0 and self.column >= 0

    def __iter__(self):
        yield self.line
        yield self.column


NOT_FOUND = Cursor()


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Immutable copy of every buffer line at one point in time."""

    lines: Tuple[str, ...] = ()

    @classmethod
    def capture(cls, lines: Iterable[str]) -> "Snapshot":
        return cls(lines=tuple(lines))

    def __len__(self) -> int:
        return len(self.lines)
