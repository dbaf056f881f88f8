"""Textual command surface mapped onto buffer operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from line_editor.buffer import Cursor, EditError, EditResult
from line_editor.runtime import telemetry
from line_editor.session import EditorSession
from line_editor.storage import StorageUnavailable

CommandHandler = Callable[[EditorSession, str], "CommandResult"]

HELP_TEXT: Tuple[str, ...] = (
    "Line Editor Commands:",
    "display - Show buffer contents",
    "insert <line_number> <text> - Insert line",
    "search <word> - Search for word",
    "update <old_word> <new_word> - Replace word",
    "delete <line_number> - Delete line",
    "deleteword <word> - Delete first occurrence of word",
    "insertword <line_number> <position> <word> - Insert word into line",
    "undo - Undo last operation",
    "redo - Redo last operation",
    "save - Save changes",
    "help - Show this help",
    "exit - Exit editor",
)


@dataclass(slots=True)
class CommandResult:
    """Outcome of one command line, ready for a host to render."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    lines: Tuple[str, ...] = ()
    exit: bool = False
    error: Optional[EditError] = None


def format_line(index: int, text: str) -> str:
    return f'[Line No{index + 1}:] "{text}"'


def execute(session: EditorSession, raw: str) -> CommandResult:
    parts = raw.split(maxsplit=1)
    if not parts:
        return CommandResult(consumed=False, status="command_empty")
    command = parts[0]
    rest = parts[1] if len(parts) > 1 else ""
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _unknown_command(command)
    with telemetry.span(
        f"command::{command}",
        component="commands",
        metadata={"path": session.path},
    ) as handle:
        result = handler(session, rest)
        if result.error is not None:
            handle.reject(result.error.value)
            telemetry.record_event(
                "command.rejected",
                level="warning",
                data={"command": command, "error": result.error.value},
            )
    return result


def _unknown_command(command: str) -> CommandResult:
    telemetry.record_event("command.unknown", data={"command": command})
    return CommandResult(
        consumed=False, status="command_unknown", message="Unknown command"
    )


def _usage(syntax: str) -> CommandResult:
    return CommandResult(
        consumed=True, status="command_usage", message=f"Usage: {syntax}"
    )


def _parse_line_number(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except ValueError:
        return None


def _edit_outcome(
    result: EditResult, *, success: str, failure: str
) -> CommandResult:
    if result.ok:
        return CommandResult(consumed=True, status=result.label, message=success)
    return CommandResult(
        consumed=True,
        status=f"{result.label}_failed",
        message=failure,
        error=result.error,
    )


def _word_not_found(label: str) -> CommandResult:
    return CommandResult(
        consumed=True,
        status=f"{label}_failed",
        message="Word not found",
        error=EditError.WORD_NOT_FOUND,
    )


def _handle_display(session: EditorSession, args: str) -> CommandResult:
    del args
    lines = tuple(
        format_line(index, line) for index, line in enumerate(session.buffer.lines)
    )
    return CommandResult(consumed=True, status="display", lines=lines)


def _handle_insert(session: EditorSession, args: str) -> CommandResult:
    words = args.split(maxsplit=1)
    number_text = words[0] if words else ""
    # One separator after the number; the rest of the line is kept as typed.
    line_text = args[len(number_text) + 1 :]
    number = _parse_line_number(number_text)
    if number is None:
        return _usage("insert <line_number> <text>")
    result = session.track(session.buffer.insert_line(number - 1, line_text))
    return _edit_outcome(
        result, success=f"Inserted line {number}", failure="Failed to insert line"
    )


def _handle_search(session: EditorSession, args: str) -> CommandResult:
    words = args.split()
    if not words:
        return _usage("search <word>")
    cursor = session.buffer.search(words[0])
    if not cursor.found:
        return _word_not_found("search")
    return CommandResult(
        consumed=True,
        status="search",
        message=f"Found at line {cursor.line + 1}, position {cursor.column}",
    )


def _handle_update(session: EditorSession, args: str) -> CommandResult:
    words = args.split()
    if len(words) < 2:
        return _usage("update <old_word> <new_word>")
    old_word, new_word = words[0], words[1]
    # Always the first occurrence in the buffer, never an earlier search result.
    cursor = session.buffer.search(old_word)
    if not cursor.found:
        return _word_not_found("update_word")
    result = session.track(session.buffer.update_word(cursor, old_word, new_word))
    return _edit_outcome(
        result,
        success=f"Updated line {cursor.line + 1}",
        failure="Failed to update word",
    )


def _handle_delete(session: EditorSession, args: str) -> CommandResult:
    words = args.split()
    number = _parse_line_number(words[0]) if words else None
    if number is None:
        return _usage("delete <line_number>")
    result = session.track(session.buffer.delete_line(number - 1))
    return _edit_outcome(
        result, success=f"Deleted line {number}", failure="Failed to delete line"
    )


def _handle_delete_word(session: EditorSession, args: str) -> CommandResult:
    words = args.split()
    if not words:
        return _usage("deleteword <word>")
    cursor = session.buffer.search(words[0])
    if not cursor.found:
        return _word_not_found("delete_word")
    result = session.track(session.buffer.delete_word(cursor, words[0]))
    return _edit_outcome(
        result,
        success=f"Deleted word from line {cursor.line + 1}",
        failure="Failed to delete word",
    )


def _handle_insert_word(session: EditorSession, args: str) -> CommandResult:
    words: List[str] = args.split(maxsplit=2)
    syntax = "insertword <line_number> <position> <word>"
    if len(words) < 3:
        return _usage(syntax)
    number = _parse_line_number(words[0])
    column = _parse_line_number(words[1])
    if number is None or column is None:
        return _usage(syntax)
    result = session.track(
        session.buffer.insert_word(Cursor(number - 1, column), words[2])
    )
    return _edit_outcome(
        result,
        success=f"Inserted word into line {number}",
        failure="Failed to insert word",
    )


def _handle_undo(session: EditorSession, args: str) -> CommandResult:
    del args
    result = session.track(session.buffer.undo())
    return _edit_outcome(result, success="Undone", failure="Nothing to undo")


def _handle_redo(session: EditorSession, args: str) -> CommandResult:
    del args
    result = session.track(session.buffer.redo())
    return _edit_outcome(result, success="Redone", failure="Nothing to redo")


def _handle_save(session: EditorSession, args: str) -> CommandResult:
    del args
    try:
        session.save()
    except StorageUnavailable as exc:
        telemetry.record_event(
            "command.save_failed", level="error", data={"reason": str(exc)}
        )
        return CommandResult(
            consumed=True, status="save_failed", message="Failed to save changes"
        )
    return CommandResult(consumed=True, status="save", message="Changes saved")


def _handle_help(session: EditorSession, args: str) -> CommandResult:
    del session, args
    return CommandResult(consumed=True, status="help", lines=HELP_TEXT)


def _handle_exit(session: EditorSession, args: str) -> CommandResult:
    del args
    message = "Unsaved changes discarded" if session.dirty else None
    return CommandResult(consumed=True, status="exit", message=message, exit=True)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "display": _handle_display,
    "insert": _handle_insert,
    "search": _handle_search,
    "update": _handle_update,
    "delete": _handle_delete,
    "deleteword": _handle_delete_word,
    "insertword": _handle_insert_word,
    "undo": _handle_undo,
    "redo": _handle_redo,
    "save": _handle_save,
    "help": _handle_help,
    "exit": _handle_exit,
    "quit": _handle_exit,
}


__all__ = ["CommandResult", "HELP_TEXT", "execute", "format_line"]
