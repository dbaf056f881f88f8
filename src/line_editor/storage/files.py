"""File-backed loader and writer for buffer lines."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Union

PathLike = Union[str, Path]

# Undecodable bytes round-trip through lone surrogates instead of failing.
ENCODING = "utf-8"
ERRORS = "surrogateescape"


class StorageUnavailable(RuntimeError):
    """Raised when the backing file cannot be opened, created, or written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


def resolve_path(filename: str, directory: Optional[PathLike] = None) -> Path:
    """Join ``directory`` and ``filename``, creating the directory if needed."""

    if directory is None:
        return Path(filename)
    folder = Path(directory)
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageUnavailable(
            f"Cannot create directory {folder}", path=folder
        ) from exc
    return folder / filename


def read_lines(path: PathLike, limit: Optional[int] = None) -> List[str]:
    target = Path(path)
    lines: List[str] = []
    try:
        with target.open("r", encoding=ENCODING, errors=ERRORS) as handle:
            for raw in handle:
                if limit is not None and len(lines) >= limit:
                    break
                lines.append(raw[:-1] if raw.endswith("\n") else raw)
    except OSError as exc:
        raise StorageUnavailable(f"Cannot read {target}", path=target) from exc
    return lines


def open_or_create(path: PathLike, limit: Optional[int] = None) -> List[str]:
    """Read ``path`` or create it empty when it does not exist yet."""

    target = Path(path)
    if target.exists():
        return read_lines(target, limit)
    try:
        target.touch()
    except OSError as exc:
        raise StorageUnavailable(f"Cannot create {target}", path=target) from exc
    return []


def write_lines(path: PathLike, lines: Iterable[str]) -> None:
    """Overwrite ``path`` with one ``\\n``-terminated line per entry."""

    target = Path(path)
    try:
        with target.open("w", encoding=ENCODING, errors=ERRORS) as handle:
            for line in lines:
                handle.write(f"{line}\n")
    except OSError as exc:
        raise StorageUnavailable(f"Cannot write {target}", path=target) from exc


__all__ = [
    "StorageUnavailable",
    "open_or_create",
    "read_lines",
    "resolve_path",
    "write_lines",
]
