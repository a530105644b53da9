"""Self round-trip verification for symbol list files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contract.notations import CANONICAL, get_notation
from contract.validation import iter_symbol_lines
from parse.errors import SymbolError

if TYPE_CHECKING:
    from pathlib import Path

    from contract.notations import NotationSpec

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundTripMismatch:
    line: int
    text: str
    rendered: str
    reason: str


@dataclass(frozen=True)
class RoundTripResult:
    ok: bool
    checked: int = 0
    mismatches: tuple[RoundTripMismatch, ...] = field(default_factory=tuple)


def check_roundtrip(
    text: str, spec: NotationSpec, *, line: int = 0
) -> RoundTripMismatch | None:
    """Decode, re-encode and re-decode one symbol in a single notation.

    Returns None when the re-decoded Symbol equals the first decode.
    """
    try:
        first = spec.decode(text)
    except SymbolError as exc:
        return RoundTripMismatch(line, text, "", f"decode failed: {exc}")

    rendered = spec.encode(first)
    try:
        second = spec.decode(rendered)
    except SymbolError as exc:
        return RoundTripMismatch(line, text, rendered, f"re-decode failed: {exc}")

    if second != first:
        return RoundTripMismatch(line, text, rendered, "re-decoded symbol differs")
    return None


def verify_roundtrip(*, path: Path, notation: str = CANONICAL) -> RoundTripResult:
    """Verify that every symbol in ``path`` survives a self round-trip.

    Each line is decoded with the notation's decoder, rendered with its
    encoder and decoded again; the two Symbols must be equal. Round trips
    never cross notations.

    Args:
        path: File with one symbol per line (blank and ``#`` lines skipped).
        notation: Notation name or alias.

    Returns:
        RoundTripResult with ok status, the number of lines checked and
        the mismatches in file order.

    Raises:
        FileNotFoundError: If path does not exist.
        IsADirectoryError: If path is a directory.
    """
    if not path.exists():
        msg = f"Symbols file does not exist: {path}"
        raise FileNotFoundError(msg)
    if path.is_dir():
        msg = f"Symbols path is a directory: {path}"
        raise IsADirectoryError(msg)

    spec = get_notation(notation)
    checked = 0
    mismatches: list[RoundTripMismatch] = []
    for line_number, text in iter_symbol_lines(path):
        checked += 1
        mismatch = check_roundtrip(text, spec, line=line_number)
        if mismatch is not None:
            LOGGER.debug("%s:%d: %s", path, line_number, mismatch.reason)
            mismatches.append(mismatch)

    return RoundTripResult(
        ok=not mismatches,
        checked=checked,
        mismatches=tuple(mismatches),
    )
