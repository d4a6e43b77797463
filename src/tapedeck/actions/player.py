"""Player command vocabulary and the view state that selects binding contexts."""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """Commands handed to the player's dispatcher."""

    # Playback
    TOGGLE_PLAY_PAUSE = "toggle_play_pause"
    NEXT = "next"
    PREVIOUS = "previous"
    SEEK_FORWARD = "seek_forward"
    SEEK_BACKWARD = "seek_backward"
    VOLUME_UP = "volume_up"
    VOLUME_DOWN = "volume_down"
    TOGGLE_MUTE = "toggle_mute"

    # Playback options
    REPEAT = "repeat"
    RANDOM = "random"
    SINGLE = "single"
    CONSUME = "consume"

    # Views
    CYCLE_MODE_RIGHT = "cycle_mode_right"
    CYCLE_MODE_LEFT = "cycle_mode_left"
    SWITCH_TO_QUEUE = "switch_to_queue"
    SWITCH_TO_TRACKS = "switch_to_tracks"
    SWITCH_PANEL_LEFT = "switch_panel_left"
    SWITCH_PANEL_RIGHT = "switch_panel_right"

    # Navigation
    NAVIGATE_UP = "navigate_up"
    NAVIGATE_DOWN = "navigate_down"
    GO_TO_TOP = "go_to_top"
    GO_TO_BOTTOM = "go_to_bottom"
    TOGGLE_ALBUM_EXPANSION = "toggle_album_expansion"

    # Queue
    QUEUE_UP = "queue_up"
    QUEUE_DOWN = "queue_down"
    PLAY_SELECTED = "play_selected"
    REMOVE_FROM_QUEUE = "remove_from_queue"
    MOVE_UP_IN_QUEUE = "move_up_in_queue"
    MOVE_DOWN_IN_QUEUE = "move_down_in_queue"
    ADD_SONG_TO_QUEUE = "add_song_to_queue"
    CLEAR_QUEUE = "clear_queue"

    # Application
    REFRESH = "refresh"
    QUIT = "quit"

    @classmethod
    def from_name(cls, name: str) -> "Action":
        """Look up an action by its config name, e.g. ``"go_to_top"``."""

        return cls(name.strip().lower().replace("-", "_"))


class ViewMode(str, Enum):
    QUEUE = "queue"
    TRACKS = "tracks"


class PanelFocus(str, Enum):
    ARTISTS = "artists"
    ALBUMS = "albums"


__all__ = ["Action", "ViewMode", "PanelFocus"]
