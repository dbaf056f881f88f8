"""Failure kinds reported by buffer operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EditError(str, Enum):
    CAPACITY_EXCEEDED = "capacity_exceeded"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    WORD_NOT_FOUND = "word_not_found"
    HISTORY_EMPTY = "history_empty"


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of a buffer operation; truthy when the edit was applied."""

    ok: bool
    label: str
    error: Optional[EditError] = None

    @classmethod
    def success(cls, label: str) -> "EditResult":
        return cls(ok=True, label=label)

    @classmethod
    def failure(cls, label: str, error: EditError) -> "EditResult":
        return cls(ok=False, label=label, error=error)

    def __bool__(self) -> bool:
        return self.ok
