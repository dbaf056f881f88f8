"""Executable Textual app that hosts the line editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_editor.adapters.textual.app"
    ) from exc

from line_editor.adapters.console import configure_telemetry, open_session
from line_editor.runtime.settings import EditorSettings
from line_editor.session import EditorSession
from line_editor.storage import StorageUnavailable

from .controller import TextualLineEditorAdapter, TextualUIHooks


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""


class LineEditorApp(App[int]):
    """Buffer view, status line, and a command prompt."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: auto;
		min-height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self._state = UIState()
        self.adapter: TextualLineEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Input(placeholder="Enter command (help for a list)", id="command-line")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            request_exit=lambda: self.exit(0),
            log=self._log_line,
        )
        self.adapter = TextualLineEditorAdapter(self.session, hooks)
        self._update_status(f"Editing {self.session.path}")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        self.adapter.submit(event.value)
        event.input.value = ""

    def _update_buffer(self, lines: Sequence[str]) -> None:
        self._state.buffer_text = "\n".join(lines)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self.log(line)


def _parse_args(
    argv: Optional[Sequence[str]], settings: EditorSettings
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the line editor Textual app.")
    parser.add_argument("filename", nargs="?", default=settings.filename)
    parser.add_argument("directory", nargs="?", default=None)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = EditorSettings.from_env()
    args = _parse_args(argv, settings)
    try:
        configure_telemetry(settings)
        session = open_session(args.filename, args.directory, settings)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    except StorageUnavailable as exc:
        print(f"Error: Cannot create/open file {exc.path}")
        return 1
    with session:
        LineEditorApp(session).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual demo
    raise SystemExit(main())
