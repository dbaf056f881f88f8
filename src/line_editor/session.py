"""Editor session: one buffer bound to one backing file."""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Optional

from line_editor.buffer import EditResult, LineBuffer
from line_editor.runtime import telemetry
from line_editor.runtime.settings import EditorSettings
from line_editor.storage import open_or_create, write_lines


class EditorSession(AbstractContextManager["EditorSession"]):
    """Explicitly constructed editing session with an open/close lifecycle."""

    def __init__(
        self,
        path: Path | str,
        *,
        settings: Optional[EditorSettings] = None,
        buffer: Optional[LineBuffer] = None,
    ) -> None:
        self.path = Path(path)
        self.settings = settings or EditorSettings()
        if buffer is None:
            buffer = LineBuffer(
                max_lines=self.settings.max_lines, max_undo=self.settings.max_undo
            )
        self.buffer = buffer
        self.dirty = False
        self.closed = False

    @classmethod
    def open(
        cls, path: Path | str, *, settings: Optional[EditorSettings] = None
    ) -> "EditorSession":
        """Load ``path`` (creating it when missing) into a fresh session."""

        session = cls(path, settings=settings)
        with telemetry.span(
            "session::open",
            component="session",
            metadata={"path": session.path},
        ):
            lines = open_or_create(session.path, limit=session.buffer.max_lines)
            loaded = session.buffer.load(lines)
        telemetry.record_event(
            "session.open", data={"path": session.path, "lines": loaded}
        )
        return session

    def track(self, result: EditResult) -> EditResult:
        """Mark the session dirty when ``result`` changed the buffer."""

        self._ensure_open()
        if result.ok:
            self.dirty = True
        return result

    def save(self) -> None:
        self._ensure_open()
        with telemetry.span(
            "session::save",
            component="session",
            metadata={"path": self.path},
        ):
            write_lines(self.path, self.buffer.lines)
        self.dirty = False
        telemetry.record_event(
            "session.save", data={"path": self.path, "lines": len(self.buffer)}
        )

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        telemetry.record_event(
            "session.close", data={"path": self.path, "dirty": self.dirty}
        )

    def _ensure_open(self) -> None:
        if self.closed:
            raise RuntimeError(f"Session for {self.path} is closed.")

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


__all__ = ["EditorSession"]
