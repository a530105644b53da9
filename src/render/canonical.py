"""Canonical notation rendering.

Rendering is a pure function of the Symbol value: each section yields its
fragments in the fixed order below and the result is joined once.

    package "." [receiver "."] name [anon] [generics] ["@" context] ["{" metadata "}"]
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from model.symbol import ANON_SEPARATOR

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from model.symbol import Metadata, Receiver, Symbol, TypeParam

_UNCONSTRAINED = frozenset({"", "any"})


def format_symbol(sym: Symbol) -> str:
    """Render a Symbol in canonical notation.

    Total for every Symbol value. ``type_args`` take precedence over
    ``type_params``; an all-empty Metadata renders no ``{}`` block.

    Examples:
        >>> from model.symbol import Symbol, TypeParam
        >>> format_symbol(Symbol(package_path="fmt", name="Println"))
        'fmt.Println'
        >>> format_symbol(
        ...     Symbol(
        ...         package_path="pkg",
        ...         name="Process",
        ...         type_params=[TypeParam(name="T", constraint="comparable")],
        ...     )
        ... )
        'pkg.Process[T comparable]'
    """
    fragments: list[str] = [sym.package_path, "."]

    if sym.receiver is not None:
        fragments.extend((format_receiver(sym.receiver), "."))

    fragments.append(sym.name)
    if sym.is_anonymous:
        fragments.append(ANON_SEPARATOR)
        if sym.anon_index > 0:
            fragments.append(str(sym.anon_index))

    if sym.type_args:
        fragments.append(format_type_list(sym.type_args))
    elif sym.type_params:
        fragments.append(format_type_list(_type_param_texts(sym.type_params)))

    if sym.context:
        fragments.extend(("@", sym.context))

    meta = format_metadata(sym.metadata)
    if meta:
        fragments.extend(("{", meta, "}"))

    return "".join(fragments)


def format_receiver(receiver: Receiver) -> str:
    """Render ``(*Type[Args])`` for a method receiver."""
    star = "*" if receiver.is_pointer else ""
    args = format_type_list(receiver.type_args) if receiver.type_args else ""
    return f"({star}{receiver.type_name}{args})"


def format_type_list(items: Iterable[str]) -> str:
    return "[" + ", ".join(items) + "]"


def _type_param_texts(params: Sequence[TypeParam]) -> list[str]:
    return [
        param.name
        if param.constraint in _UNCONSTRAINED
        else f"{param.name} {param.constraint}"
        for param in params
    ]


def format_metadata(metadata: Metadata) -> str:
    """Render metadata entries without braces; empty string when nothing is set.

    Recognized fields come first (via, alias, pos), then custom entries
    sorted by key so equal mappings always render identically.
    """
    entries = [
        f"{key}:{value}"
        for key, value in (
            ("via", metadata.via),
            ("alias", metadata.alias),
            ("pos", metadata.position),
        )
        if value
    ]
    entries.extend(f"{key}:{metadata.custom[key]}" for key in sorted(metadata.custom))
    return ",".join(entries)


__all__ = ["format_metadata", "format_receiver", "format_symbol", "format_type_list"]
