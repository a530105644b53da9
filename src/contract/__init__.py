"""Stable public surface of symref-core.

External tools consume the codec through these names: the decode/encode
pair of each notation, the Symbol model, and the decode error types.
"""

from adapters import from_ssa, from_trace, to_ssa, to_trace
from model import Metadata, Receiver, Symbol, TypeParam
from parse import AdapterMismatchError, StructuralError, SymbolError, parse
from render import format_symbol


def __getattr__(name: str) -> object:
    if name in {"NOTATION_SPECS", "NotationSpec", "get_notation"}:
        from contract.notations import NOTATION_SPECS, NotationSpec, get_notation

        return {
            "NOTATION_SPECS": NOTATION_SPECS,
            "NotationSpec": NotationSpec,
            "get_notation": get_notation,
        }[name]

    if name in {"ValidationMessage", "ValidationResult", "validate_symbols_file"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_symbols_file,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_symbols_file": validate_symbols_file,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "NOTATION_SPECS",
    "AdapterMismatchError",
    "Metadata",
    "NotationSpec",
    "Receiver",
    "StructuralError",
    "Symbol",
    "SymbolError",
    "TypeParam",
    "ValidationMessage",
    "ValidationResult",
    "format_symbol",
    "from_ssa",
    "from_trace",
    "get_notation",
    "parse",
    "to_ssa",
    "to_trace",
    "validate_symbols_file",
]
