"""Textual host for the line editor."""

from .controller import TextualLineEditorAdapter, TextualUIHooks

__all__ = ["TextualLineEditorAdapter", "TextualUIHooks"]
