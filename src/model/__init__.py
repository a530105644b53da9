"""Canonical symbol model."""

from model.symbol import (
    ANON_SEPARATOR,
    INIT_NAME,
    Metadata,
    Receiver,
    Symbol,
    TypeParam,
)

__all__ = [
    "ANON_SEPARATOR",
    "INIT_NAME",
    "Metadata",
    "Receiver",
    "Symbol",
    "TypeParam",
]
