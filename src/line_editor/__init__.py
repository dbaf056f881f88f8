"""Bounded line-oriented text editor with snapshot undo/redo."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "runtime",
    "session",
    "storage",
]

__version__ = "0.1.0"
