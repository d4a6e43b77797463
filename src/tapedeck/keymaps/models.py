"""Value types for chords, sequences, and compiled binding tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from types import MappingProxyType
from typing import Hashable, Mapping, Tuple, Union

Command = Hashable


class Modifier(IntFlag):
    """Modifier mask carried by every chord."""

    NONE = 0
    CTRL = 1
    ALT = 2
    SHIFT = 4


class NamedKey(Enum):
    """Non-printable keys a chord can name."""

    ESC = "esc"
    ENTER = "enter"
    TAB = "tab"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    INSERT = "insert"
    DELETE = "delete"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"


Key = Union[str, NamedKey]

_MODIFIER_ORDER: tuple[tuple[Modifier, str], ...] = (
    (Modifier.CTRL, "ctrl"),
    (Modifier.ALT, "alt"),
    (Modifier.SHIFT, "shift"),
)


@dataclass(frozen=True, slots=True)
class KeyChord:
    """One key press plus its modifier mask."""

    modifiers: Modifier
    key: Key

    def __post_init__(self) -> None:
        if not isinstance(self.key, (str, NamedKey)):
            raise TypeError("chord key must be a character or NamedKey")
        if isinstance(self.key, str) and len(self.key) != 1:
            raise ValueError(f"chord key must be one character, got {self.key!r}")
        object.__setattr__(self, "modifiers", Modifier(self.modifiers))

    @property
    def token(self) -> str:
        """Spec token that parses back to this chord."""

        if self.key == " ":
            name = "space"
        elif self.key == "-":
            name = "-"
        elif isinstance(self.key, NamedKey):
            name = self.key.value
        else:
            name = self.key
        mods = self.modifiers
        # Upper-case letters already imply shift.
        if isinstance(self.key, str) and self.key.isalpha() and self.key.isupper():
            mods = mods & ~Modifier.SHIFT
        prefix = "".join(
            f"{label}-" for flag, label in _MODIFIER_ORDER if mods & flag
        )
        return f"{prefix}{name}"

    def __str__(self) -> str:
        return self.token


KeySequence = Tuple[KeyChord, ...]


def format_sequence(sequence: KeySequence) -> str:
    return " ".join(chord.token for chord in sequence)


@dataclass(frozen=True, slots=True)
class BindingTable:
    """Compiled bindings for one context.

    ``single`` answers idle lookups in one hash probe; ``sequences`` holds
    every binding of two or more chords in configuration order and ``heads``
    indexes their first chords.
    """

    single: Mapping[KeyChord, Command] = field(default_factory=dict)
    sequences: tuple[tuple[KeySequence, Command], ...] = ()
    heads: frozenset[KeyChord] = field(init=False)

    def __post_init__(self) -> None:
        for sequence, _command in self.sequences:
            if len(sequence) < 2:
                raise ValueError(
                    "sequence bindings need at least two chords; "
                    "single chords belong in `single`"
                )
        object.__setattr__(self, "single", MappingProxyType(dict(self.single)))
        object.__setattr__(
            self, "heads", frozenset(sequence[0] for sequence, _ in self.sequences)
        )

    def match_sequence(self, candidate: KeySequence) -> tuple[Command | None, bool]:
        """Scan ``sequences`` for ``candidate``.

        Returns ``(command, False)`` on the first exact match, ``(None, True)``
        when ``candidate`` is a strict prefix of some sequence, otherwise
        ``(None, False)``.
        """

        size = len(candidate)
        extends = False
        for sequence, command in self.sequences:
            if len(sequence) < size:
                continue
            if sequence[:size] != candidate:
                continue
            if len(sequence) == size:
                return command, False
            extends = True
        return None, extends

    def __len__(self) -> int:
        return len(self.single) + len(self.sequences)


EMPTY_TABLE = BindingTable()


class Keymap(Mapping[str, BindingTable]):
    """Read-only context name -> ``BindingTable`` mapping.

    Unknown contexts resolve to ``fallback`` (an empty table by default) so
    callers never need to special-case a context nobody configured.
    """

    __slots__ = ("_tables", "_fallback")

    def __init__(
        self,
        tables: Mapping[str, BindingTable] | None = None,
        *,
        fallback: BindingTable | None = None,
    ) -> None:
        self._tables = MappingProxyType(dict(tables or {}))
        self._fallback = fallback if fallback is not None else EMPTY_TABLE

    def table(self, context: str) -> BindingTable:
        return self._tables.get(context, self._fallback)

    def __getitem__(self, context: str) -> BindingTable:
        return self._tables[context]

    def __iter__(self):
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"Keymap(contexts={tuple(self._tables)!r})"


__all__ = [
    "BindingTable",
    "Command",
    "EMPTY_TABLE",
    "Key",
    "KeyChord",
    "KeySequence",
    "Keymap",
    "Modifier",
    "NamedKey",
    "format_sequence",
]
