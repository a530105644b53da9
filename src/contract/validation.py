"""Validation of symbol list files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contract.notations import CANONICAL, get_notation
from parse.errors import SymbolError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from model.symbol import Symbol

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationMessage:
    path: Path
    message: str
    line: int | None = None
    text: str = ""

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
            "text": self.text,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    symbols: list[Symbol] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def iter_symbol_lines(path: Path) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, text)`` for each symbol line of a file.

    Blank lines and lines starting with ``#`` are skipped; line numbers
    are 1-based.
    """
    with path.open(encoding="utf-8") as handle:
        for line_number, raw in enumerate(handle, start=1):
            text = raw.strip()
            if not text or text.startswith("#"):
                continue
            yield line_number, text


def validate_symbols_file(path: Path, notation: str = CANONICAL) -> ValidationResult:
    """Decode every symbol line of ``path`` in the given notation.

    Decode failures are collected per line instead of aborting, so one
    run reports every malformed symbol.
    """
    result = ValidationResult()

    if not path.exists():
        result.errors.append(
            ValidationMessage(path=path, message="Symbols file does not exist.")
        )
        return result

    if not path.is_file():
        result.errors.append(
            ValidationMessage(path=path, message="Symbols path is not a file.")
        )
        return result

    spec = get_notation(notation)
    for line_number, text in iter_symbol_lines(path):
        try:
            result.symbols.append(spec.decode(text))
        except SymbolError as exc:
            LOGGER.debug("%s:%d: %s", path, line_number, exc)
            result.errors.append(
                ValidationMessage(
                    path=path,
                    line=line_number,
                    message=str(exc),
                    text=exc.text,
                )
            )

    return result
