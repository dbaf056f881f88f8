"""UI-free controller that wires an editor session into Textual callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence

from line_editor.commands import CommandResult, execute, format_line
from line_editor.session import EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[Sequence[str]], None]
    update_status: Callable[[str], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualLineEditorAdapter:
    """Feeds submitted command lines to the session and refreshes the UI."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._refresh_buffer()

    def submit(self, command: str) -> CommandResult:
        self._log_state("command ->", command=command)
        result = execute(self.session, command)
        status = result.message or result.status
        if result.lines and result.status != "display":
            status = "\n".join(result.lines)
        self.hooks.update_status(status)
        self._refresh_buffer()
        self._log_state(
            "result <-",
            status=result.status,
            message=result.message,
            error=result.error.value if result.error else None,
        )
        if result.exit:
            self.hooks.request_exit()
        return result

    def _refresh_buffer(self) -> None:
        rendered = [
            format_line(index, line)
            for index, line in enumerate(self.session.buffer.lines)
        ]
        self.hooks.update_buffer(rendered)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.session.buffer
        return {
            "path": str(self.session.path),
            "lines": len(buffer),
            "undo": buffer.history.undo_depth,
            "redo": buffer.history.redo_depth,
            "dirty": self.session.dirty,
        }


__all__ = ["TextualLineEditorAdapter", "TextualUIHooks"]
