"""Logging for tapedeck, backed by telelog.

Textual owns the terminal while the player runs, so the default ``tui``
preset writes to a log file and never to the console. ``development`` logs
everything to a coloured console, for driving the key engine without the app.

Components log through two helpers: ``record_event`` for one-off events and
``span`` for profiled blocks whose fields are logged when the block closes.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ROOT_LOGGER = "tapedeck"
LOG_FILE_ENV = "TAPEDECK_LOG_FILE"
LOG_LEVEL_ENV = "TAPEDECK_LOG_LEVEL"
DEFAULT_LOG_FILE = "tapedeck.log"
PRESETS = ("tui", "development")

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _build_config(preset: str) -> Any:
    if preset not in PRESETS:
        raise ValueError(f"Unknown log preset {preset!r}; expected one of {PRESETS}")

    config = tl.Config()
    if preset == "tui":
        config.with_min_level((os.getenv(LOG_LEVEL_ENV) or "INFO").upper())
        config.with_console_output(False)
        config.with_file_output(os.getenv(LOG_FILE_ENV) or DEFAULT_LOG_FILE)
    else:
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    config.with_profiling(True)
    return config


def configure(preset: str = "tui") -> None:
    """Switch every tapedeck logger to ``preset``."""

    global _config
    _config = _build_config(preset)
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _config
    key = name or ROOT_LOGGER
    logger = _loggers.get(key)
    if logger is None:
        if _config is None:
            _config = _build_config("tui")
        logger = _loggers[key] = tl.Logger.with_config(key, _config)
    return logger


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        return " ".join(_text(item) for item in value)
    return str(value)


def _write(logger: Any, level: str, message: str, fields: Mapping[str, Any]) -> None:
    pairs = [(str(key), _text(value)) for key, value in fields.items()]
    level = level.lower()
    with_fields = getattr(logger, f"{level}_with", None)
    if with_fields is not None:
        with_fields(message, pairs)
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level {level!r}")
    plain(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value fields."""

    _write(
        get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})}
    )


@dataclass
class SpanHandle:
    """Fields gathered while a span is open."""

    logger: Any
    name: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.fields[key] = value

    def close(self) -> None:
        _write(self.logger, "debug", f"span::{self.name}", self.fields)

    def fail(self, reason: str) -> None:
        _write(
            self.logger,
            "error",
            f"span::{self.name}::fail",
            {**self.fields, "reason": reason},
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and log its fields once it finishes.

    ``metadata`` is pushed as logger context while the block runs and seeds
    the handle's fields. ``component`` also tracks the block as a telelog
    component. An exception escaping the block is logged and re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(log, name, dict(metadata or {}))
    with ExitStack() as stack:
        for key, value in (metadata or {}).items():
            log.add_context(key, _text(value))
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        handle.close()


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
