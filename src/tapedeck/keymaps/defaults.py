"""Built-in key bindings for every player context."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Sequence

from tapedeck.actions import Action

from .compiler import GLOBAL_CONTEXT, compile_keymap
from .models import Keymap

QUEUE_CONTEXT = "queue"
ARTISTS_CONTEXT = "artists"
ALBUMS_CONTEXT = "albums"

CONTEXTS: tuple[str, ...] = (
    GLOBAL_CONTEXT,
    QUEUE_CONTEXT,
    ARTISTS_CONTEXT,
    ALBUMS_CONTEXT,
)

ContextBindings = Mapping[Action, Sequence[str]]

GLOBAL_BINDINGS: ContextBindings = {
    Action.TOGGLE_PLAY_PAUSE: ("space", "p"),
    Action.NEXT: (">", "shift-j", "shift-down"),
    Action.PREVIOUS: ("<", "shift-k", "shift-up"),
    Action.VOLUME_UP: ("=", "+"),
    Action.VOLUME_DOWN: ("-", "_"),
    Action.TOGGLE_MUTE: ("m",),
    # ctrl-h/ctrl-l cycle views, so seeking lives on shift.
    Action.CYCLE_MODE_RIGHT: ("ctrl-l", "ctrl-right"),
    Action.CYCLE_MODE_LEFT: ("ctrl-h", "ctrl-left"),
    Action.SEEK_FORWARD: ("shift-l", "shift-right"),
    Action.SEEK_BACKWARD: ("shift-h", "shift-left"),
    Action.CLEAR_QUEUE: ("d",),
    Action.REPEAT: ("r",),
    Action.RANDOM: ("z",),
    Action.SINGLE: ("s",),
    Action.CONSUME: ("c",),
    Action.QUIT: ("esc", "q", "ctrl-c", "shift-z shift-z"),
    Action.REFRESH: ("u",),
    Action.SWITCH_TO_QUEUE: ("1",),
    Action.SWITCH_TO_TRACKS: ("2",),
}

_LIST_BINDINGS: ContextBindings = {
    Action.GO_TO_TOP: ("g g", "home"),
    Action.GO_TO_BOTTOM: ("shift-g", "end"),
}

QUEUE_BINDINGS: ContextBindings = {
    **_LIST_BINDINGS,
    Action.QUEUE_DOWN: ("j", "down"),
    Action.QUEUE_UP: ("k", "up"),
    Action.PLAY_SELECTED: ("enter", "l", "right"),
    Action.REMOVE_FROM_QUEUE: ("x", "backspace"),
    Action.MOVE_UP_IN_QUEUE: ("ctrl-k", "ctrl-up"),
    Action.MOVE_DOWN_IN_QUEUE: ("ctrl-j", "ctrl-down"),
}

_TRACKS_BINDINGS: ContextBindings = {
    **_LIST_BINDINGS,
    Action.SWITCH_PANEL_LEFT: ("h", "left"),
    Action.NAVIGATE_DOWN: ("j", "down"),
    Action.NAVIGATE_UP: ("k", "up"),
    Action.ADD_SONG_TO_QUEUE: ("a", "enter"),
}

ARTISTS_BINDINGS: ContextBindings = {
    **_TRACKS_BINDINGS,
    Action.SWITCH_PANEL_RIGHT: ("l", "right"),
}

ALBUMS_BINDINGS: ContextBindings = {
    **_TRACKS_BINDINGS,
    Action.TOGGLE_ALBUM_EXPANSION: ("l", "right"),
}

DEFAULT_BINDINGS: Mapping[str, ContextBindings] = MappingProxyType(
    {
        GLOBAL_CONTEXT: GLOBAL_BINDINGS,
        QUEUE_CONTEXT: QUEUE_BINDINGS,
        ARTISTS_CONTEXT: ARTISTS_BINDINGS,
        ALBUMS_CONTEXT: ALBUMS_BINDINGS,
    }
)


def load_default_keymap(*, logger_name: str | None = None) -> Keymap:
    """Compile ``DEFAULT_BINDINGS`` with every view inheriting the globals."""

    return compile_keymap(DEFAULT_BINDINGS, logger_name=logger_name)


__all__ = [
    "ALBUMS_CONTEXT",
    "ARTISTS_CONTEXT",
    "CONTEXTS",
    "DEFAULT_BINDINGS",
    "GLOBAL_CONTEXT",
    "QUEUE_CONTEXT",
    "load_default_keymap",
]
