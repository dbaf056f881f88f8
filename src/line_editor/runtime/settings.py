"""Environment-driven editor settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from line_editor.buffer import MAX_LINES, MAX_UNDO

ENV_PREFIX = "LINE_EDITOR_"
DEFAULT_FILENAME = "file.txt"
DEFAULT_DIRECTORY = "."


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed >= 1 else fallback


@dataclass(frozen=True, slots=True)
class EditorSettings:
    filename: str = DEFAULT_FILENAME
    directory: str = DEFAULT_DIRECTORY
    max_lines: int = MAX_LINES
    max_undo: int = MAX_UNDO
    log_preset: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        source = os.environ if env is None else env
        return cls(
            filename=source.get(f"{ENV_PREFIX}FILE", DEFAULT_FILENAME),
            directory=source.get(f"{ENV_PREFIX}DIR", DEFAULT_DIRECTORY),
            max_lines=_env_int(source, "MAX_LINES", MAX_LINES),
            max_undo=_env_int(source, "MAX_UNDO", MAX_UNDO),
            log_preset=source.get(f"{ENV_PREFIX}LOG_PRESET") or None,
        )

    def with_overrides(
        self, *, filename: Optional[str] = None, directory: Optional[str] = None
    ) -> "EditorSettings":
        return replace(
            self,
            filename=filename or self.filename,
            directory=directory or self.directory,
        )

    @property
    def path(self) -> Path:
        return Path(self.directory) / self.filename
