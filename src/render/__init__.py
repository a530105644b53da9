"""Canonical notation rendering."""

from render.canonical import (
    format_metadata,
    format_receiver,
    format_symbol,
    format_type_list,
)

__all__ = [
    "format_metadata",
    "format_receiver",
    "format_symbol",
    "format_type_list",
]
