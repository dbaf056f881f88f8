"""Command surface translating text commands into buffer edits."""

from .dispatcher import HELP_TEXT, CommandResult, execute, format_line

__all__ = ["CommandResult", "HELP_TEXT", "execute", "format_line"]
