"""Line buffer engine and its bounded snapshot history."""

from .buffer import LineBuffer, Transaction
from .errors import EditError, EditResult
from .history import BoundedStack, SnapshotHistory
from .state import MAX_LINES, MAX_UNDO, NOT_FOUND, Cursor, Snapshot

__all__ = [
    "LineBuffer",
    "Transaction",
    "EditError",
    "EditResult",
    "BoundedStack",
    "SnapshotHistory",
    "Cursor",
    "Snapshot",
    "NOT_FOUND",
    "MAX_LINES",
    "MAX_UNDO",
]
