"""Executable Textual shell that drives the key engine.

The audio-server client is not wired in here: dispatched commands are shown
in the activity pane so bindings can be exercised against a live terminal.
"""

from __future__ import annotations

import argparse
from collections import deque
from typing import Deque, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use tapedeck.adapters.textual.app"
    ) from exc

from tapedeck.actions import Action
from tapedeck.config import ConfigError, ConfigSource, Settings
from tapedeck.keymaps import Command
from tapedeck.runtime import telemetry

from .controller import KeyController, PlayerUIHooks

TICK_INTERVAL = 0.05
ACTIVITY_LINES = 200


class TapedeckApp(App[None]):
    """Key-driven player shell."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#activity {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    def __init__(self, settings: Settings, source: ConfigSource) -> None:
        super().__init__()
        self._settings = settings
        self._source = source
        self._activity: Deque[str] = deque(maxlen=ACTIVITY_LINES)
        self._activity_widget: Static | None = None
        self._status_widget: Static | None = None
        self.controller: KeyController | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="main"):
            self._activity_widget = Static("", id="activity")
            yield self._activity_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget

    def on_mount(self) -> None:
        hooks = PlayerUIHooks(
            dispatch=self._dispatch,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.controller = KeyController(self._settings, hooks)
        self._update_status(self.controller.status_text())
        self.set_interval(TICK_INTERVAL, self._tick)

    def _tick(self) -> None:
        if self.controller:
            self.controller.tick()

    def on_key(self, event: events.Key) -> None:
        if not self.controller:
            return
        self.controller.handle_textual_key(event.key, character=event.character)
        event.stop()

    def _dispatch(self, command: Command) -> None:
        name = command.value if isinstance(command, Action) else str(command)
        self._append_activity(f"-> {name}")
        if command is Action.QUIT:
            self.exit()
        elif command is Action.REFRESH:
            self._reload()

    def _reload(self) -> None:
        if not self.controller:
            return
        try:
            settings = self._source.load()
        except ConfigError as exc:
            telemetry.record_event(
                "config.reload_failed", level="error", data={"error": str(exc)}
            )
            self._append_activity(f"!! {exc}")
            return
        self._settings = settings
        self.controller.reload(settings)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _append_activity(self, line: str) -> None:
        self._activity.append(line)
        if self._activity_widget:
            self._activity_widget.update("\n".join(self._activity))

    def _log_line(self, line: str) -> None:
        telemetry.record_event("ui.line", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the tapedeck terminal player.")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.toml (default: $TAPEDECK_CONFIG or XDG config dir)",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="Override keys.sequence_timeout_ms",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default="tui",
        help="Telemetry preset (default: tui, logs to a file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    try:
        source = ConfigSource.from_cli(args.config, timeout_ms=args.timeout_ms)
        settings = source.load()
    except ConfigError as exc:
        raise SystemExit(f"tapedeck: {exc}") from exc
    TapedeckApp(settings, source).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
