"""User configuration: sequence timeout and per-context key bindings.

Example ``config.toml``::

    [keys]
    sequence_timeout_ms = 800

    [keys.global]
    quit = ["q", "shift-z shift-q"]

    [keys.queue]
    clear_queue = "d d"

Actions named under a context replace that context's default specs for the
action; everything else keeps its default binding.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

from tapedeck.actions import Action
from tapedeck.keymaps import (
    DEFAULT_BINDINGS,
    DEFAULT_TIMEOUT_MS,
    Keymap,
    compile_keymap,
    find_shadowed_sequences,
    format_sequence,
)
from tapedeck.runtime import telemetry

ENV_CONFIG_PATH = "TAPEDECK_CONFIG"

Bindings = Mapping[str, Mapping[Action, Sequence[str]]]


class ConfigError(ValueError):
    """Raised when the configuration file cannot be used."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


def default_config_path() -> Path:
    override = os.getenv(ENV_CONFIG_PATH)
    if override:
        return Path(override).expanduser()
    base = os.getenv("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "tapedeck" / "config.toml"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved settings, ready to compile into a ``Keymap``."""

    sequence_timeout_ms: int = DEFAULT_TIMEOUT_MS
    bindings: Bindings = field(default_factory=lambda: DEFAULT_BINDINGS)
    source: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.sequence_timeout_ms <= 0:
            raise ConfigError(
                "sequence_timeout_ms must be positive", path=self.source
            )

    def compile(self, *, logger_name: str | None = None) -> Keymap:
        """Compile bindings and warn about sequences a single key shadows."""

        keymap = compile_keymap(self.bindings, logger_name=logger_name)
        for context in keymap:
            for sequence, command, shadow in find_shadowed_sequences(
                keymap[context]
            ):
                telemetry.record_event(
                    "keymaps.shadowed_sequence",
                    level="warning",
                    data={
                        "context": context,
                        "sequence": format_sequence(sequence),
                        "command": _command_name(command),
                        "shadowed_by": _command_name(shadow),
                    },
                    logger_name=logger_name,
                )
        return keymap


def _command_name(command: object) -> str:
    return command.value if isinstance(command, Action) else str(command)


def load_config(path: Path | str | None = None) -> Settings:
    """Read ``path`` (or the default location) into ``Settings``.

    A missing file yields the built-in defaults.
    """

    config_path = Path(path).expanduser() if path else default_config_path()
    if not config_path.exists():
        telemetry.record_event(
            "config.defaults", level="debug", data={"path": str(config_path)}
        )
        return Settings()

    try:
        with open(config_path, "rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}", path=config_path) from exc

    settings = settings_from_dict(data, source=config_path)
    telemetry.record_event(
        "config.loaded",
        data={
            "path": str(config_path),
            "timeout_ms": settings.sequence_timeout_ms,
        },
    )
    return settings


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """Where settings come from, plus command-line overrides to reapply.

    The path is resolved once so a reload reads the same file even if it did
    not exist when the app started.
    """

    path: Path
    timeout_ms: Optional[int] = None

    @classmethod
    def from_cli(
        cls, path: Path | str | None = None, *, timeout_ms: Optional[int] = None
    ) -> "ConfigSource":
        resolved = Path(path).expanduser() if path else default_config_path()
        return cls(path=resolved, timeout_ms=timeout_ms)

    def load(self) -> Settings:
        settings = load_config(self.path)
        if self.timeout_ms is not None:
            settings = replace(settings, sequence_timeout_ms=self.timeout_ms)
        return settings


def settings_from_dict(
    data: Mapping[str, Any], *, source: Path | None = None
) -> Settings:
    keys = data.get("keys", {})
    if not isinstance(keys, Mapping):
        raise ConfigError("[keys] must be a table", path=source)

    timeout = keys.get("sequence_timeout_ms", DEFAULT_TIMEOUT_MS)
    if isinstance(timeout, bool) or not isinstance(timeout, int):
        raise ConfigError("sequence_timeout_ms must be an integer", path=source)

    overrides: Dict[str, Dict[Action, tuple[str, ...]]] = {}
    for context, section in keys.items():
        if context == "sequence_timeout_ms":
            continue
        if not isinstance(section, Mapping):
            raise ConfigError(f"[keys.{context}] must be a table", path=source)
        overrides[context] = _parse_section(context, section, source)

    return Settings(
        sequence_timeout_ms=timeout,
        bindings=merge_bindings(DEFAULT_BINDINGS, overrides),
        source=source,
    )


def _parse_section(
    context: str, section: Mapping[str, Any], source: Path | None
) -> Dict[Action, tuple[str, ...]]:
    parsed: Dict[Action, tuple[str, ...]] = {}
    for name, specs in section.items():
        try:
            action = Action.from_name(name)
        except ValueError:
            telemetry.record_event(
                "config.unknown_action",
                level="warning",
                data={"context": context, "action": name},
            )
            continue
        if isinstance(specs, str):
            specs = [specs]
        if not isinstance(specs, list) or not all(isinstance(s, str) for s in specs):
            raise ConfigError(
                f"keys.{context}.{name} must be a string or list of strings",
                path=source,
            )
        parsed[action] = tuple(specs)
    return parsed


def merge_bindings(defaults: Bindings, overrides: Bindings) -> Bindings:
    """Layer ``overrides`` onto ``defaults`` per context.

    An overridden action drops all of its default specs, and overridden
    actions are ordered after the defaults so their chords win on collision.
    """

    merged: Dict[str, Mapping[Action, Sequence[str]]] = {}
    for context in dict.fromkeys((*defaults, *overrides)):
        base = defaults.get(context, {})
        user = overrides.get(context, {})
        layer = {action: specs for action, specs in base.items() if action not in user}
        layer.update(user)
        merged[context] = MappingProxyType(layer)
    return MappingProxyType(merged)


__all__ = [
    "ConfigError",
    "ConfigSource",
    "ENV_CONFIG_PATH",
    "Settings",
    "default_config_path",
    "load_config",
    "merge_bindings",
    "settings_from_dict",
]
