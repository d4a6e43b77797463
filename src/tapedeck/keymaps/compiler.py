"""Compile configured command -> spec lists into per-context binding tables."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Sequence

from tapedeck.runtime import telemetry

from .models import BindingTable, Command, KeyChord, KeySequence, Keymap
from .parser import parse_sequence

BindingSpecs = Mapping[Command, Sequence[str]]

GLOBAL_CONTEXT = "global"


def _iter_specs(bindings: BindingSpecs) -> Iterable[tuple[Command, str]]:
    for command, specs in bindings.items():
        if isinstance(specs, str):
            specs = (specs,)
        for spec in specs:
            yield command, spec


def compile_table(
    *layers: BindingSpecs, logger_name: str | None = None
) -> BindingTable:
    """Build one ``BindingTable`` from one or more binding layers.

    Layers are applied in order, so a later layer's single chord replaces an
    earlier one bound to the same chord. Specs that parse to nothing are
    dropped.
    """

    single: Dict[KeyChord, Command] = {}
    sequences: list[tuple[KeySequence, Command]] = []
    with telemetry.span(
        "keymaps::compile_table",
        logger_name=logger_name,
        component="keymaps",
        metadata={"layers": len(layers)},
    ) as handle:
        dropped = 0
        for layer in layers:
            for command, spec in _iter_specs(layer):
                sequence = parse_sequence(spec, logger_name=logger_name)
                if not sequence:
                    dropped += 1
                    telemetry.record_event(
                        "keymaps.compile.empty_spec",
                        level="debug",
                        data={"spec": spec, "command": command},
                        logger_name=logger_name,
                    )
                elif len(sequence) == 1:
                    single[sequence[0]] = command
                else:
                    sequences.append((sequence, command))
        table = BindingTable(single=single, sequences=tuple(sequences))
        handle.add_metadata("single", len(table.single))
        handle.add_metadata("sequences", len(table.sequences))
        handle.add_metadata("dropped", dropped)
        return table


def compile_keymap(
    contexts: Mapping[str, BindingSpecs],
    *,
    base_context: Optional[str] = GLOBAL_CONTEXT,
    logger_name: str | None = None,
) -> Keymap:
    """Compile every context into a fresh ``Keymap``.

    Each context other than ``base_context`` is layered on top of the base
    context's bindings, and contexts missing from ``contexts`` resolve to the
    base table. Pass ``base_context=None`` to compile contexts in isolation.
    """

    base = contexts.get(base_context, {}) if base_context is not None else {}
    tables: Dict[str, BindingTable] = {}
    for name, bindings in contexts.items():
        if base_context is None or name == base_context:
            tables[name] = compile_table(bindings, logger_name=logger_name)
        else:
            tables[name] = compile_table(base, bindings, logger_name=logger_name)
    fallback = tables.get(base_context) if base_context is not None else None
    return Keymap(tables, fallback=fallback)


def find_shadowed_sequences(
    table: BindingTable,
) -> list[tuple[KeySequence, Command, Command]]:
    """List sequences whose first chord already has a single-chord binding.

    Such sequences can never fire because the single binding is resolved
    first. Each entry is ``(sequence, sequence_command, shadowing_command)``.
    """

    shadowed: list[tuple[KeySequence, Command, Command]] = []
    for sequence, command in table.sequences:
        head = sequence[0]
        if head in table.single:
            shadowed.append((sequence, command, table.single[head]))
    return shadowed


__all__ = [
    "BindingSpecs",
    "GLOBAL_CONTEXT",
    "compile_keymap",
    "compile_table",
    "find_shadowed_sequences",
]
