"""Decoding of canonical symbol notation."""

from parse.canonical import RESERVED_CHARS, enclosing_name, parse, parse_metadata_body
from parse.errors import AdapterMismatchError, StructuralError, SymbolError
from parse.scanner import find_top_level, split_top_level, split_type_args

__all__ = [
    "AdapterMismatchError",
    "RESERVED_CHARS",
    "StructuralError",
    "SymbolError",
    "enclosing_name",
    "find_top_level",
    "parse",
    "parse_metadata_body",
    "split_top_level",
    "split_type_args",
]
