"""Bridges Textual key events and timer ticks to the sequence engine."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from tapedeck.actions import Action, PanelFocus, ViewMode
from tapedeck.config import Settings
from tapedeck.keymaps import (
    Command,
    KeyChord,
    Modifier,
    SequenceEngine,
    format_sequence,
    parse_chord,
)
from tapedeck.keymaps.defaults import QUEUE_CONTEXT

KEYMAP_LOGGER = "tapedeck.keymaps"

_TEXTUAL_MODIFIERS = {"ctrl": "ctrl", "alt": "alt", "meta": "alt", "shift": "shift"}
_TEXTUAL_ALIASES = {"backtab": "shift-tab", "minus": "-", "plus": "+"}


def chord_from_textual_key(
    key: str, character: Optional[str] = None
) -> Optional[KeyChord]:
    """Translate a Textual ``Key`` event's ``key``/``character`` into a chord.

    Printable characters typed without ctrl/alt are taken from ``character``
    so ``>`` or ``Z`` map the same way a spec string would; everything else
    goes through the spec parser using Textual's key name. A reported
    ``shift`` is kept for space and letters only; a symbol's character is
    already the shifted one.
    """

    *raw_mods, name = key.split("+")
    modifiers = []
    for raw in raw_mods:
        if not raw:
            continue
        mapped = _TEXTUAL_MODIFIERS.get(raw.lower())
        if mapped is None:
            return None
        modifiers.append(mapped)

    if (
        character
        and len(character) == 1
        and character.isprintable()
        and not {"ctrl", "alt"} & set(modifiers)
    ):
        shifted = "shift" in modifiers
        if character == " ":
            return KeyChord(Modifier.SHIFT if shifted else Modifier.NONE, " ")
        if shifted and character.isalpha():
            return parse_chord(f"shift-{character}")
        return parse_chord(character)

    name = _TEXTUAL_ALIASES.get(name, name)
    token = "-".join([*modifiers, name]) if modifiers else name
    return parse_chord(token)


@dataclass(slots=True)
class ViewState:
    """Which view and panel has focus; selects the binding context."""

    mode: ViewMode = ViewMode.QUEUE
    focus: PanelFocus = PanelFocus.ARTISTS

    @property
    def context(self) -> str:
        if self.mode is ViewMode.QUEUE:
            return QUEUE_CONTEXT
        return self.focus.value

    def apply(self, command: Command) -> bool:
        """Follow view-switching commands. Returns whether the view changed."""

        before = (self.mode, self.focus)
        if command is Action.SWITCH_TO_QUEUE:
            self.mode = ViewMode.QUEUE
        elif command is Action.SWITCH_TO_TRACKS:
            self.mode = ViewMode.TRACKS
        elif command in (Action.CYCLE_MODE_LEFT, Action.CYCLE_MODE_RIGHT):
            # Two views, so cycling either way flips between them.
            self.mode = (
                ViewMode.TRACKS if self.mode is ViewMode.QUEUE else ViewMode.QUEUE
            )
        elif command is Action.SWITCH_PANEL_LEFT:
            self.focus = PanelFocus.ARTISTS
        elif command is Action.SWITCH_PANEL_RIGHT:
            self.focus = PanelFocus.ALBUMS
        return before != (self.mode, self.focus)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class PlayerUIHooks:
    """Callbacks the controller invokes on the hosting UI."""

    dispatch: Callable[[Command], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class KeyController:
    """Owns one ``SequenceEngine`` plus the view state that picks its context."""

    settings: Settings
    hooks: PlayerUIHooks
    clock: Callable[[], float] = time.monotonic
    view: ViewState = field(default_factory=ViewState)
    engine: SequenceEngine = field(init=False)

    def __post_init__(self) -> None:
        self.engine = SequenceEngine(
            self.settings.compile(logger_name=KEYMAP_LOGGER),
            timeout_ms=self.settings.sequence_timeout_ms,
            clock=self.clock,
            logger_name=KEYMAP_LOGGER,
        )

    @property
    def context(self) -> str:
        return self.view.context

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[Command]:
        chord = chord_from_textual_key(key, character)
        if chord is None:
            self.hooks.log(f"key -> {key!r} unmapped")
            return None
        return self.handle_chord(chord)

    def handle_chord(self, chord: KeyChord) -> Optional[Command]:
        context = self.context
        command = self.engine.resolve(chord, context)
        self.hooks.log(
            f"key -> chord={chord.token} context={context} command={command!r}"
        )
        if command is not None:
            self._emit(command)
        self.hooks.update_status(self.status_text())
        return command

    def tick(self, now: Optional[float] = None) -> Optional[Command]:
        """Per-frame hook; forwards the engine's timeout check."""

        was_awaiting = self.engine.is_awaiting()
        command = self.engine.tick(now)
        if command is not None:
            self._emit(command)
        if was_awaiting and not self.engine.is_awaiting():
            self.hooks.log("timeout -> pending sequence cleared")
            self.hooks.update_status(self.status_text())
        return command

    def focus(self, mode: ViewMode, focus: Optional[PanelFocus] = None) -> None:
        """Move focus from outside the keymap, e.g. a mouse click."""

        self.view.mode = mode
        if focus is not None:
            self.view.focus = focus
        self.engine.reset()
        self.hooks.update_status(self.status_text())

    def reload(self, settings: Settings) -> None:
        keymap = settings.compile(logger_name=KEYMAP_LOGGER)
        self.settings = settings
        self.engine.swap_keymap(keymap, timeout_ms=settings.sequence_timeout_ms)
        self.hooks.log(f"reload -> {settings.source or 'defaults'}")
        self.hooks.update_status(self.status_text())

    def status_text(self) -> str:
        pending = self.engine.pending_sequence()
        if pending:
            return f"{self.context} | {format_sequence(pending)} …"
        return self.context

    def _emit(self, command: Command) -> None:
        if self.view.apply(command):
            self.hooks.log(f"view -> {self.context}")
        self.hooks.dispatch(command)


__all__ = [
    "KeyController",
    "PlayerUIHooks",
    "ViewState",
    "chord_from_textual_key",
]
