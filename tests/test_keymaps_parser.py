from __future__ import annotations

import pytest

from tapedeck.keymaps import KeyChord, Modifier, NamedKey, parse_chord, parse_sequence


def test_plain_character() -> None:
    assert parse_chord("g") == KeyChord(Modifier.NONE, "g")


def test_modifiers_combine() -> None:
    chord = parse_chord("ctrl-alt-delete")

    assert chord == KeyChord(Modifier.CTRL | Modifier.ALT, NamedKey.DELETE)


def test_shift_uppercases_and_matches_bare_capital() -> None:
    shifted = parse_chord("shift-z")

    assert shifted == KeyChord(Modifier.SHIFT, "Z")
    assert parse_chord("Z") == shifted


def test_named_keys_and_space() -> None:
    assert parse_chord("esc") == KeyChord(Modifier.NONE, NamedKey.ESC)
    assert parse_chord("Escape") == KeyChord(Modifier.NONE, NamedKey.ESC)
    assert parse_chord("enter") == KeyChord(Modifier.NONE, NamedKey.ENTER)
    assert parse_chord("space") == KeyChord(Modifier.NONE, " ")
    assert parse_chord("shift-down") == KeyChord(Modifier.SHIFT, NamedKey.DOWN)
    assert parse_chord("f5") == KeyChord(Modifier.NONE, NamedKey.F5)


def test_minus_key() -> None:
    assert parse_chord("-") == KeyChord(Modifier.NONE, "-")
    assert parse_chord("ctrl--") == KeyChord(Modifier.CTRL, "-")


@pytest.mark.parametrize(
    "token",
    ["hyper-x", "ctrl-", "ctrl-nope", "", "gg", "shift-ß", "shift-ŉ", "ctrl-shift-ﬁ"],
)
def test_malformed_tokens_return_none(token: str) -> None:
    assert parse_chord(token) is None


def test_chord_token_round_trips() -> None:
    for token in ("ctrl-c", "Z", "space", "shift-up", "alt-x", "ctrl--", "ctrl-Z"):
        chord = parse_chord(token)
        assert chord is not None
        assert parse_chord(chord.token) == chord


def test_parse_sequence_splits_on_whitespace() -> None:
    g = KeyChord(Modifier.NONE, "g")

    assert parse_sequence("g g") == (g, g)
    assert parse_sequence("  g \t g ") == (g, g)


def test_parse_sequence_drops_bad_tokens() -> None:
    z = KeyChord(Modifier.SHIFT, "Z")

    assert parse_sequence("shift-z bogus-key shift-z") == (z, z)
    assert parse_sequence("nope-a nope-b") == ()


def test_chord_rejects_multi_character_keys() -> None:
    with pytest.raises(ValueError):
        KeyChord(Modifier.NONE, "gg")
    with pytest.raises(TypeError):
        KeyChord(Modifier.NONE, 7)  # type: ignore[arg-type]


def test_lowercase_only_letters_parse_without_shift() -> None:
    assert parse_chord("ß") == KeyChord(Modifier.NONE, "ß")
    assert parse_chord("alt-ß") == KeyChord(Modifier.ALT, "ß")


def test_parse_sequence_skips_letters_without_single_uppercase() -> None:
    g = KeyChord(Modifier.NONE, "g")

    assert parse_sequence("g shift-ß g") == (g, g)
