"""Bounded undo/redo snapshot history."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator, Optional

from .state import MAX_UNDO, Snapshot


class BoundedStack:
    """LIFO stack of snapshots that drops its oldest entries when full."""

    def __init__(self, depth: int = MAX_UNDO) -> None:
        if depth < 1:
            raise ValueError(f"History depth must be at least 1, got {depth}.")
        self.depth = depth
        self._entries: Deque[Snapshot] = deque()

    def evict(self) -> int:
        """Drop oldest entries until there is room for one more push."""

        evicted = 0
        while len(self._entries) >= self.depth:
            self._entries.popleft()
            evicted += 1
        return evicted

    def push(self, snapshot: Snapshot) -> None:
        self.evict()
        self._entries.append(snapshot)

    def pop(self) -> Optional[Snapshot]:
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[Snapshot]:
        if not self._entries:
            return None
        return self._entries[-1]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self._entries)


class SnapshotHistory:
    """Undo and redo stacks sharing the same depth bound.

    ``record_for_undo`` is the entry point for ordinary edits and invalidates
    the redo line. ``push_undo``/``push_redo`` are reserved for undo and redo
    themselves and leave the opposite stack alone.
    """

    def __init__(self, depth: int = MAX_UNDO) -> None:
        self._undo = BoundedStack(depth)
        self._redo = BoundedStack(depth)

    @property
    def depth(self) -> int:
        return self._undo.depth

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def record_for_undo(self, state: Iterable[str]) -> None:
        self._undo.push(Snapshot.capture(state))
        self._redo.clear()

    def push_undo(self, state: Iterable[str]) -> None:
        self._undo.push(Snapshot.capture(state))

    def push_redo(self, state: Iterable[str]) -> None:
        self._redo.push(Snapshot.capture(state))

    def pop_undo(self) -> Optional[Snapshot]:
        return self._undo.pop()

    def pop_redo(self) -> Optional[Snapshot]:
        return self._redo.pop()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
