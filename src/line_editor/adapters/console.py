"""Interactive stdin/stdout host for the line editor."""

from __future__ import annotations

import argparse
from typing import Callable, Optional, Sequence

from line_editor.commands import HELP_TEXT, CommandResult, execute
from line_editor.runtime import telemetry
from line_editor.runtime.settings import EditorSettings
from line_editor.session import EditorSession
from line_editor.storage import StorageUnavailable, resolve_path

PROMPT = "Enter command: "


class ConsoleHost:
    """Reads command lines, dispatches them, and writes their results."""

    def __init__(
        self,
        session: EditorSession,
        *,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.session = session
        self._read_line = read_line
        self._write = write

    def show_help(self) -> None:
        for line in HELP_TEXT:
            self._write(line)
        self._write("")

    def run(self) -> None:
        while True:
            try:
                raw = self._read_line(PROMPT)
            except EOFError:
                break
            result = execute(self.session, raw)
            self.render(result)
            if result.exit:
                break

    def render(self, result: CommandResult) -> None:
        for line in result.lines:
            self._write(line)
        if result.message:
            self._write(result.message)


def _parse_args(
    argv: Optional[Sequence[str]], settings: EditorSettings
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="line-editor", description="Edit up to a fixed number of lines of a file."
    )
    parser.add_argument(
        "filename",
        nargs="?",
        default=settings.filename,
        help=f"File to edit (default: {settings.filename})",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory holding the file; created when missing (default: .)",
    )
    return parser.parse_args(argv)


def configure_telemetry(settings: EditorSettings) -> None:
    if settings.log_preset:
        telemetry.configure(preset=settings.log_preset)


def open_session(
    filename: str, directory: Optional[str], settings: EditorSettings
) -> EditorSession:
    folder = directory if directory is not None else settings.directory
    path = resolve_path(filename, folder)
    return EditorSession.open(
        path, settings=settings.with_overrides(filename=filename, directory=folder)
    )


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    settings = EditorSettings.from_env()
    args = _parse_args(argv, settings)
    try:
        configure_telemetry(settings)
    except ValueError as exc:
        write(f"Error: {exc}")
        return 1
    try:
        session = open_session(args.filename, args.directory, settings)
    except StorageUnavailable as exc:
        telemetry.record_event(
            "session.open_failed", level="error", data={"reason": str(exc)}
        )
        write(f"Error: Cannot create/open file {exc.path}")
        return 1

    with session:
        host = ConsoleHost(session, read_line=read_line, write=write)
        host.show_help()
        host.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main())
