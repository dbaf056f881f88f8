"""Structured logging for the editor, backed by telelog.

``configure(preset=None)`` builds the active telelog config, either from a
named preset or from ``LINE_EDITOR_*`` environment variables. Callers use
``get_logger``, ``record_event`` and the ``span`` context manager.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LINE_EDITOR_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "line_editor")

# Keys map onto ``tl.Config.with_<key>``; applied in insertion order.
PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {
        "min_level": "DEBUG",
        "console_output": True,
        "colored_output": True,
        "json_format": False,
    },
    "production": {
        "min_level": "INFO",
        "console_output": False,
        "file_output": "line_editor.log",
        "buffering": True,
    },
    "performance": {
        "min_level": "DEBUG",
        "console_output": False,
        "buffering": True,
        "json_format": True,
        "file_output": "line_editor-performance.log",
    },
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    raw = _env(name)
    return raw is not None and raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def preset_options(preset: str) -> Dict[str, Any]:
    try:
        options = dict(PRESETS[preset.lower()])
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}'.") from None
    if "file_output" in options:
        options["file_output"] = _env("LOG_FILE") or options["file_output"]
    return options


def env_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "min_level": (_env("LOG_LEVEL") or "INFO").upper(),
    }
    # The console host shares stdout with the prompt, so console logging is opt-in.
    console = _env_flag("CONSOLE_LOG") and not _env_flag("DISABLE_CONSOLE")
    options["console_output"] = console
    if console:
        options["colored_output"] = not _env_flag("NO_COLOR")
    if _env_flag("LOG_JSON"):
        options["json_format"] = True
    log_file = _env("LOG_FILE")
    if log_file:
        options["file_output"] = log_file
    if _env_flag("LOG_BUFFERED"):
        options["buffering"] = True
        options["buffer_size"] = int(_env("LOG_BUFFER_SIZE") or "2048")
    return options


def build_config(preset: Optional[str] = None) -> Any:
    options = preset_options(preset) if preset else env_options()
    config = tl.Config()
    for key, value in options.items():
        getattr(config, f"with_{key}")(value)
    config.with_profiling(True)
    return config


def configure(*, preset: Optional[str] = None) -> None:
    """Replace the active config and drop cached loggers."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = build_config(preset)
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = build_config()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    with_data = getattr(log, f"{level}_with", None)
    if with_data is not None:
        with_data(message, [(str(k), _stringify(v)) for k, v in payload.items()])
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level.lower(), f"event::{name}", payload)


@dataclass
class SpanHandle:
    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def _payload(self, **extra: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload(reason=reason))

    def reject(self, reason: str) -> None:
        _emit(self.logger, "warning", "span::reject", self._payload(reason=reason))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``, tracked as ``component`` when given.

    ``metadata`` is attached as logger context only while the block runs.
    """

    log = get_logger(logger_name)
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    handle = SpanHandle(
        logger=log, span_name=name, component_name=component, metadata=context
    )
    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(log.track_component(component))
            stack.enter_context(log.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in context:
            log.remove_context(key)


configure()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "env_options",
    "get_logger",
    "preset_options",
    "record_event",
    "span",
]
