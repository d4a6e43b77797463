from __future__ import annotations

from typing import List

import pytest

from tapedeck.actions import Action, PanelFocus, ViewMode
from tapedeck.adapters.textual import (
    KeyController,
    PlayerUIHooks,
    ViewState,
    chord_from_textual_key,
)
from tapedeck.config import Settings, settings_from_dict
from tapedeck.keymaps import KeyChord, Modifier, NamedKey, parse_chord


class FakeClock:
    def __init__(self) -> None:
        self.now = 10.0

    def __call__(self) -> float:
        return self.now


def make_controller(
    settings: Settings | None = None,
) -> tuple[KeyController, List[object], List[str], FakeClock]:
    dispatched: List[object] = []
    statuses: List[str] = []
    clock = FakeClock()
    hooks = PlayerUIHooks(
        dispatch=dispatched.append,
        update_status=statuses.append,
    )
    controller = KeyController(settings or Settings(), hooks, clock=clock)
    return controller, dispatched, statuses, clock


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("g", "g", "g"),
        ("G", "G", "shift-g"),
        ("space", " ", "space"),
        ("shift+space", " ", "shift-space"),
        ("shift+z", "z", "shift-z"),
        ("shift+z", "Z", "shift-z"),
        ("greater_than_sign", ">", ">"),
        ("shift+greater_than_sign", ">", ">"),
        ("minus", "-", "-"),
        ("ctrl+c", "\x03", "ctrl-c"),
        ("ctrl+left", None, "ctrl-left"),
        ("shift+down", None, "shift-down"),
        ("escape", "\x1b", "esc"),
        ("enter", "\r", "enter"),
        ("pagedown", None, "pagedown"),
        ("backtab", None, "shift-tab"),
    ],
)
def test_chord_from_textual_key(key: str, character: str | None, expected: str) -> None:
    assert chord_from_textual_key(key, character) == parse_chord(expected)


def test_chord_from_textual_key_unmapped() -> None:
    assert chord_from_textual_key("super+x", None) is None
    assert chord_from_textual_key("volume_up", None) is None


def test_controller_fires_shift_space_binding() -> None:
    settings = settings_from_dict({"keys": {"global": {"refresh": "shift-space"}}})
    controller, dispatched, _, _ = make_controller(settings)

    assert controller.handle_textual_key("shift+space", character=" ") is Action.REFRESH
    assert dispatched == [Action.REFRESH]


def test_view_state_selects_context() -> None:
    view = ViewState()
    assert view.context == "queue"

    assert view.apply(Action.SWITCH_TO_TRACKS) is True
    assert view.context == "artists"

    view.apply(Action.SWITCH_PANEL_RIGHT)
    assert view.context == "albums"

    view.apply(Action.CYCLE_MODE_LEFT)
    assert view.mode is ViewMode.QUEUE
    assert view.apply(Action.TOGGLE_PLAY_PAUSE) is False


def test_controller_dispatches_single_key() -> None:
    controller, dispatched, statuses, _ = make_controller()

    command = controller.handle_textual_key("space", character=" ")

    assert command is Action.TOGGLE_PLAY_PAUSE
    assert dispatched == [Action.TOGGLE_PLAY_PAUSE]
    assert statuses[-1] == "queue"


def test_controller_shows_pending_sequence() -> None:
    controller, dispatched, statuses, _ = make_controller()

    controller.handle_textual_key("g", character="g")

    assert dispatched == []
    assert statuses[-1].startswith("queue | g")

    controller.handle_textual_key("g", character="g")

    assert dispatched == [Action.GO_TO_TOP]
    assert statuses[-1] == "queue"


def test_controller_tick_clears_expired_sequence() -> None:
    controller, dispatched, statuses, clock = make_controller()
    controller.handle_textual_key("g", character="g")

    clock.now += 0.5
    controller.tick()
    assert controller.engine.is_awaiting() is True

    clock.now += 0.6
    assert controller.tick() is None
    assert controller.engine.is_awaiting() is False
    assert statuses[-1] == "queue"
    assert dispatched == []


def test_controller_follows_view_switches() -> None:
    controller, dispatched, _, _ = make_controller()

    controller.handle_textual_key("2", character="2")
    assert controller.context == "artists"

    controller.handle_textual_key("l", character="l")
    assert controller.context == "albums"

    controller.handle_textual_key("l", character="l")
    assert dispatched == [
        Action.SWITCH_TO_TRACKS,
        Action.SWITCH_PANEL_RIGHT,
        Action.TOGGLE_ALBUM_EXPANSION,
    ]


def test_controller_focus_resets_pending_sequence() -> None:
    controller, _, _, _ = make_controller()
    controller.handle_textual_key("g", character="g")

    controller.focus(ViewMode.TRACKS, PanelFocus.ALBUMS)

    assert controller.context == "albums"
    assert controller.engine.is_awaiting() is False


def test_controller_reload_swaps_keymap() -> None:
    controller, dispatched, _, _ = make_controller()
    controller.handle_textual_key("g", character="g")

    controller.reload(
        settings_from_dict(
            {"keys": {"sequence_timeout_ms": 400, "global": {"quit": "ctrl-q"}}}
        )
    )

    assert controller.engine.is_awaiting() is False
    assert controller.engine.timeout_ms == 400
    assert controller.handle_textual_key("q", character="q") is None
    assert controller.handle_chord(KeyChord(Modifier.CTRL, "q")) is Action.QUIT
    assert dispatched == [Action.QUIT]


def test_controller_logs_unmapped_keys() -> None:
    lines: List[str] = []
    hooks = PlayerUIHooks(dispatch=lambda _command: None, log=lines.append)
    controller = KeyController(Settings(), hooks)

    assert controller.handle_textual_key("super+x") is None
    assert controller.handle_chord(KeyChord(Modifier.NONE, NamedKey.F12)) is None
    assert any("unmapped" in line for line in lines)
    assert any(line.startswith("key -> chord=f12") for line in lines)
