"""Symbol models for the canonical notation.

This module contains the immutable value types produced by every decoder
(canonical parser, trace adapter, SSA adapter) and consumed by every encoder.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

ANON_SEPARATOR = "·lit"
INIT_NAME = "init"


class TypeParam(BaseModel):
    """A definition-site type parameter with an optional constraint."""

    model_config = ConfigDict(frozen=True)

    name: str
    constraint: str = Field(
        default="", description="Constraint type (empty or 'any' render as absent)"
    )


class Receiver(BaseModel):
    """The type a method is attached to."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    is_pointer: bool = False
    type_args: tuple[str, ...] = ()


class Metadata(BaseModel):
    """Trailing ``{key:value,...}`` annotations of a symbol."""

    model_config = ConfigDict(frozen=True)

    via: str = Field(default="", description="Promoted-method source")
    alias: str = Field(default="", description="Alias source")
    position: str = Field(default="", description="Source position file:line:col")
    custom: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("custom", mode="after")
    @classmethod
    def freeze_custom(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Store custom entries behind a read-only view."""
        return MappingProxyType(dict(v))

    @field_serializer("custom")
    def dump_custom(self, custom: Mapping[str, str]) -> dict[str, str]:
        return dict(custom)

    def is_empty(self) -> bool:
        return not (self.via or self.alias or self.position or self.custom)

    def __hash__(self) -> int:
        return hash(
            (self.via, self.alias, self.position, frozenset(self.custom.items()))
        )


class Symbol(BaseModel):
    """One parsed program symbol."""

    model_config = ConfigDict(frozen=True)

    package_path: str
    name: str
    receiver: Receiver | None = None
    is_init: bool = False
    is_anonymous: bool = False
    anon_parent: str = Field(
        default="", description="Dotted name of the enclosing symbol"
    )
    anon_index: int = Field(default=0, ge=0)
    type_params: tuple[TypeParam, ...] = ()
    type_args: tuple[str, ...] = ()
    context: str = Field(default="", description="Platform or build tag")
    metadata: Metadata = Field(default_factory=Metadata)

    def format(self) -> str:
        """Render the symbol in canonical notation."""
        from render.canonical import format_symbol

        return format_symbol(self)

    def __str__(self) -> str:
        return self.format()


__all__ = [
    "ANON_SEPARATOR",
    "INIT_NAME",
    "Metadata",
    "Receiver",
    "Symbol",
    "TypeParam",
]
