"""Storage collaborators that feed and persist buffer lines."""

from .files import (
    StorageUnavailable,
    open_or_create,
    read_lines,
    resolve_path,
    write_lines,
)

__all__ = [
    "StorageUnavailable",
    "open_or_create",
    "read_lines",
    "resolve_path",
    "write_lines",
]
