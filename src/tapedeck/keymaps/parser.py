"""Parse human-written key specs such as ``ctrl-c`` or ``shift-z shift-z``."""

from __future__ import annotations

from typing import Optional

from tapedeck.runtime import telemetry

from .models import KeyChord, KeySequence, Modifier, NamedKey

SEPARATOR = "-"

MODIFIER_NAMES: dict[str, Modifier] = {
    "ctrl": Modifier.CTRL,
    "alt": Modifier.ALT,
    "shift": Modifier.SHIFT,
}

_NAMED_KEYS: dict[str, NamedKey] = {key.value: key for key in NamedKey}
_NAMED_KEYS.update(
    {
        "escape": NamedKey.ESC,
        "return": NamedKey.ENTER,
        "page_up": NamedKey.PAGE_UP,
        "page_down": NamedKey.PAGE_DOWN,
        "del": NamedKey.DELETE,
        "ins": NamedKey.INSERT,
    }
)


def _split_token(token: str) -> tuple[list[str], str]:
    # A trailing separator binds the minus key itself: "-", "ctrl--".
    if token == SEPARATOR:
        return [], SEPARATOR
    if token.endswith(SEPARATOR + SEPARATOR):
        return token[:-2].split(SEPARATOR), SEPARATOR
    *modifiers, key = token.split(SEPARATOR)
    return modifiers, key


def parse_chord(token: str) -> Optional[KeyChord]:
    """Return the chord ``token`` denotes, or ``None`` when it is malformed."""

    token = token.strip()
    if not token:
        return None

    modifier_names, name = _split_token(token)
    mask = Modifier.NONE
    for raw in modifier_names:
        flag = MODIFIER_NAMES.get(raw.lower())
        if flag is None:
            return None
        mask |= flag

    if len(name) == 1:
        if name.isalpha() and name.isupper():
            mask |= Modifier.SHIFT
        elif mask & Modifier.SHIFT:
            name = name.upper()
            # Some letters upper-case to several code points ("ß" -> "SS").
            if len(name) != 1:
                return None
        return KeyChord(mask, name)

    lowered = name.lower()
    if lowered == "space":
        return KeyChord(mask, " ")
    named = _NAMED_KEYS.get(lowered)
    if named is None:
        return None
    return KeyChord(mask, named)


def parse_sequence(spec: str, *, logger_name: str | None = None) -> KeySequence:
    """Parse a whitespace-separated spec, skipping tokens that do not parse."""

    chords: list[KeyChord] = []
    for token in spec.split():
        chord = parse_chord(token)
        if chord is None:
            telemetry.record_event(
                "keymaps.parse.dropped",
                level="debug",
                data={"token": token, "spec": spec},
                logger_name=logger_name,
            )
            continue
        chords.append(chord)
    return tuple(chords)


__all__ = ["MODIFIER_NAMES", "SEPARATOR", "parse_chord", "parse_sequence"]
