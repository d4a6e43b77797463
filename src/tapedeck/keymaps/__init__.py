"""Key spec parsing, binding tables, and the sequence resolution engine."""

from .models import (
    BindingTable,
    Command,
    KeyChord,
    KeySequence,
    Keymap,
    Modifier,
    NamedKey,
    format_sequence,
)
from .parser import parse_chord, parse_sequence
from .compiler import (
    GLOBAL_CONTEXT,
    compile_keymap,
    compile_table,
    find_shadowed_sequences,
)
from .engine import DEFAULT_TIMEOUT_MS, Awaiting, EngineState, Idle, SequenceEngine
from .defaults import DEFAULT_BINDINGS, load_default_keymap

__all__ = [
    "Awaiting",
    "BindingTable",
    "Command",
    "DEFAULT_BINDINGS",
    "DEFAULT_TIMEOUT_MS",
    "EngineState",
    "GLOBAL_CONTEXT",
    "Idle",
    "KeyChord",
    "KeySequence",
    "Keymap",
    "Modifier",
    "NamedKey",
    "SequenceEngine",
    "compile_keymap",
    "compile_table",
    "find_shadowed_sequences",
    "format_sequence",
    "load_default_keymap",
    "parse_chord",
    "parse_sequence",
]
