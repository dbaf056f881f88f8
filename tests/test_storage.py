from __future__ import annotations

from pathlib import Path

import pytest

from line_editor.storage import (
    StorageUnavailable,
    open_or_create,
    read_lines,
    resolve_path,
    write_lines,
)


def test_write_then_read_round_trips(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    lines = ["first", "", "  indented", "last line"]

    write_lines(target, lines)

    assert target.read_text(encoding="utf-8") == "first\n\n  indented\nlast line\n"
    assert read_lines(target) == lines


def test_read_lines_honours_limit(tmp_path: Path) -> None:
    target = tmp_path / "long.txt"
    target.write_text("".join(f"{i}\n" for i in range(10)), encoding="utf-8")

    assert read_lines(target, limit=3) == ["0", "1", "2"]


def test_read_lines_keeps_unterminated_last_line(tmp_path: Path) -> None:
    target = tmp_path / "tail.txt"
    target.write_text("a\nb", encoding="utf-8")

    assert read_lines(target) == ["a", "b"]


def test_open_or_create_creates_missing_file(tmp_path: Path) -> None:
    target = tmp_path / "new.txt"

    assert open_or_create(target) == []
    assert target.exists()


def test_resolve_path_creates_directory(tmp_path: Path) -> None:
    folder = tmp_path / "nested" / "docs"

    path = resolve_path("file.txt", folder)

    assert folder.is_dir()
    assert path == folder / "file.txt"


def test_resolve_path_without_directory() -> None:
    assert resolve_path("file.txt") == Path("file.txt")


def test_open_or_create_reports_unavailable_storage(tmp_path: Path) -> None:
    target = tmp_path / "missing-dir" / "file.txt"

    with pytest.raises(StorageUnavailable) as info:
        open_or_create(target)

    assert info.value.path == target


def test_write_lines_reports_unavailable_storage(tmp_path: Path) -> None:
    with pytest.raises(StorageUnavailable):
        write_lines(tmp_path, ["a"])


def test_undecodable_bytes_survive_read_and_write(tmp_path: Path) -> None:
    target = tmp_path / "latin1.txt"
    target.write_bytes(b"caf\xe9\nplain\n")

    lines = read_lines(target)
    write_lines(target, lines)

    assert lines[1] == "plain"
    assert target.read_bytes() == b"caf\xe9\nplain\n"
