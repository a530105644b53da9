"""Decode errors shared by the canonical parser and the notation adapters."""

from __future__ import annotations


class SymbolError(ValueError):
    """Raised when a symbol string cannot be decoded.

    ``text`` holds the offending substring so callers can point at it.
    """

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.text = text


class StructuralError(SymbolError):
    """Raised when canonical notation is structurally malformed."""


class AdapterMismatchError(SymbolError):
    """Raised when an adapter finds no pattern matching its input."""


__all__ = ["AdapterMismatchError", "StructuralError", "SymbolError"]
