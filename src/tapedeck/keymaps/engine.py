"""Sequential key resolution: single chords plus timed multi-chord sequences."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from tapedeck.runtime import telemetry

from .models import (
    BindingTable,
    Command,
    KeyChord,
    KeySequence,
    Keymap,
    format_sequence,
)

DEFAULT_TIMEOUT_MS = 1000

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class Idle:
    """No sequence in progress."""


@dataclass(frozen=True, slots=True)
class Awaiting:
    """A prefix of at least one configured sequence has been typed."""

    partial: KeySequence
    deadline: float

    def __post_init__(self) -> None:
        if not self.partial:
            raise ValueError("Awaiting requires a non-empty partial sequence")


EngineState = Union[Idle, Awaiting]

IDLE = Idle()
_NO_SEQUENCE: KeySequence = ()


class SequenceEngine:
    """Turns chords into commands for whichever context the caller names.

    Owned by one event loop; ``resolve`` and ``tick`` must not run
    concurrently. Idle chords with a single binding resolve through one
    dict lookup; ``sequences`` is only scanned while a sequence is pending.
    """

    def __init__(
        self,
        keymap: Keymap,
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        clock: Clock = time.monotonic,
        logger_name: str | None = None,
    ) -> None:
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        self._keymap = keymap
        self._timeout = timeout_ms / 1000.0
        self._clock = clock
        self._logger_name = logger_name
        self._state: EngineState = IDLE

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def keymap(self) -> Keymap:
        return self._keymap

    @property
    def timeout_ms(self) -> int:
        return round(self._timeout * 1000)

    def is_awaiting(self) -> bool:
        return isinstance(self._state, Awaiting)

    def pending_sequence(self) -> KeySequence:
        state = self._state
        if isinstance(state, Awaiting):
            return state.partial
        return _NO_SEQUENCE

    def resolve(self, chord: KeyChord, context: str) -> Optional[Command]:
        """Feed one chord; return the command it completes, if any."""

        with telemetry.span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"chord": chord.token, "context": context},
        ) as handle:
            table = self._keymap.table(context)
            now = self._clock()
            state = self._state
            if isinstance(state, Awaiting):
                if now >= state.deadline:
                    handle.add_metadata("expired", format_sequence(state.partial))
                    self._state = IDLE
                else:
                    return self._continue(state, chord, table, now, handle)
            return self._resolve_idle(chord, table, now, handle)

    def tick(self, now: Optional[float] = None) -> Optional[Command]:
        """Cancel a pending sequence whose deadline has passed.

        Always returns ``None``: a timeout abandons the partial sequence and
        never fires a binding for it.
        """

        state = self._state
        if not isinstance(state, Awaiting):
            return None
        if now is None:
            now = self._clock()
        if now >= state.deadline:
            self._state = IDLE
            telemetry.record_event(
                "keymaps.sequence_timeout",
                level="debug",
                data={"partial": format_sequence(state.partial)},
                logger_name=self._logger_name,
            )
        return None

    def reset(self) -> None:
        self._state = IDLE

    def swap_keymap(self, keymap: Keymap, *, timeout_ms: int | None = None) -> None:
        """Install a freshly compiled keymap, dropping any pending sequence."""

        if timeout_ms is not None:
            if timeout_ms <= 0:
                raise ValueError("timeout_ms must be positive")
            self._timeout = timeout_ms / 1000.0
        self._keymap = keymap
        self._state = IDLE
        telemetry.record_event(
            "keymaps.swap",
            level="debug",
            data={"contexts": tuple(keymap)},
            logger_name=self._logger_name,
        )

    def _resolve_idle(
        self,
        chord: KeyChord,
        table: BindingTable,
        now: float,
        handle: telemetry.SpanHandle,
    ) -> Optional[Command]:
        command = table.single.get(chord)
        if command is not None:
            handle.add_metadata("status", "single")
            return command
        if chord in table.heads:
            self._state = Awaiting(partial=(chord,), deadline=now + self._timeout)
            handle.add_metadata("status", "pending")
            return None
        handle.add_metadata("status", "miss")
        return None

    def _continue(
        self,
        state: Awaiting,
        chord: KeyChord,
        table: BindingTable,
        now: float,
        handle: telemetry.SpanHandle,
    ) -> Optional[Command]:
        candidate = state.partial + (chord,)
        command, extends = table.match_sequence(candidate)
        if command is not None:
            self._state = IDLE
            handle.add_metadata("status", "match")
            handle.add_metadata("sequence", format_sequence(candidate))
            return command
        if extends:
            self._state = Awaiting(partial=candidate, deadline=now + self._timeout)
            handle.add_metadata("status", "pending")
            return None
        # The breaking chord is consumed, not replayed as a fresh input.
        self._state = IDLE
        handle.add_metadata("status", "abandoned")
        handle.add_metadata("sequence", format_sequence(candidate))
        return None


__all__ = [
    "Awaiting",
    "DEFAULT_TIMEOUT_MS",
    "EngineState",
    "IDLE",
    "Idle",
    "SequenceEngine",
]
