from __future__ import annotations

from tapedeck.actions import Action
from tapedeck.keymaps import (
    KeyChord,
    SequenceEngine,
    find_shadowed_sequences,
    load_default_keymap,
    parse_chord,
)
from tapedeck.keymaps.defaults import CONTEXTS


def chord(token: str) -> KeyChord:
    parsed = parse_chord(token)
    assert parsed is not None
    return parsed


def test_default_keymap_compiles_every_context() -> None:
    keymap = load_default_keymap()

    assert set(keymap) == set(CONTEXTS)


def test_default_keymap_has_no_shadowed_sequences() -> None:
    keymap = load_default_keymap()

    for context in keymap:
        assert find_shadowed_sequences(keymap[context]) == []


def test_global_bindings_reach_every_view() -> None:
    keymap = load_default_keymap()

    for context in ("queue", "artists", "albums"):
        assert keymap.table(context).single[chord("space")] is Action.TOGGLE_PLAY_PAUSE
        assert keymap.table(context).single[chord("q")] is Action.QUIT


def test_right_key_depends_on_panel_focus() -> None:
    keymap = load_default_keymap()

    assert keymap.table("queue").single[chord("l")] is Action.PLAY_SELECTED
    assert keymap.table("artists").single[chord("l")] is Action.SWITCH_PANEL_RIGHT
    assert keymap.table("albums").single[chord("right")] is Action.TOGGLE_ALBUM_EXPANSION


def test_default_sequences_resolve() -> None:
    engine = SequenceEngine(load_default_keymap(), clock=lambda: 0.0)

    assert engine.resolve(chord("g"), "queue") is None
    assert engine.resolve(chord("g"), "queue") is Action.GO_TO_TOP
    assert engine.resolve(chord("Z"), "albums") is None
    assert engine.resolve(chord("Z"), "albums") is Action.QUIT
    assert engine.resolve(chord("G"), "artists") is Action.GO_TO_BOTTOM


def test_shift_seek_and_ctrl_cycle_are_distinct() -> None:
    table = load_default_keymap().table("global")

    assert table.single[chord("shift-l")] is Action.SEEK_FORWARD
    assert table.single[chord("ctrl-l")] is Action.CYCLE_MODE_RIGHT
    assert table.single[chord("shift-down")] is Action.NEXT
