"""Notation registry.

Binds each supported notation name to its decode/encode pair. This is the
boundary the CLI and the file helpers consume; the codec modules themselves
never look anything up here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, get_args

from adapters.ssa import from_ssa, to_ssa
from adapters.trace import from_trace, to_trace
from parse.canonical import parse
from render.canonical import format_symbol

if TYPE_CHECKING:
    from collections.abc import Callable

    from model.symbol import Symbol

NotationName = Literal["canonical", "ssa", "trace"]

CANONICAL = "canonical"
SSA = "ssa"
TRACE = "trace"

NOTATION_NAMES: tuple[str, ...] = get_args(NotationName)

# Spellings accepted on the command line in addition to the names above.
NOTATION_ALIASES: dict[str, str] = {
    "stack": TRACE,
    "stacktrace": TRACE,
}


@dataclass(frozen=True)
class NotationSpec:
    """Decode/encode pair for one notation."""

    name: str
    decode: Callable[[str], Symbol]
    encode: Callable[[Symbol], str]
    lossless: bool
    description: str


NOTATION_SPECS: dict[str, NotationSpec] = {
    CANONICAL: NotationSpec(
        name=CANONICAL,
        decode=parse,
        encode=format_symbol,
        lossless=True,
        description="pkg.(*Type[T]).Method·lit2[Args]@context{meta}",
    ),
    SSA: NotationSpec(
        name=SSA,
        decode=from_ssa,
        encode=to_ssa,
        lossless=False,
        description="pkg.init#1, main.main$1, pkg.Function@file.go:12:1",
    ),
    TRACE: NotationSpec(
        name=TRACE,
        decode=from_trace,
        encode=to_trace,
        lossless=False,
        description="pkg.init.func1, main.main.func2 /path/file.go:12",
    ),
}


def get_notation(name: str) -> NotationSpec:
    """Look up a notation by name or alias.

    Raises:
        ValueError: If the name is not a known notation.
    """
    canonical_name = NOTATION_ALIASES.get(name, name)
    try:
        return NOTATION_SPECS[canonical_name]
    except KeyError as exc:
        valid = ", ".join(sorted([*NOTATION_NAMES, *NOTATION_ALIASES]))
        msg = f"Unknown notation '{name}'. Valid notations: {valid}"
        raise ValueError(msg) from exc


__all__ = [
    "CANONICAL",
    "NOTATION_ALIASES",
    "NOTATION_NAMES",
    "NOTATION_SPECS",
    "SSA",
    "TRACE",
    "NotationName",
    "NotationSpec",
    "get_notation",
]
