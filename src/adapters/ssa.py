"""SSA-style notation adapter.

SSA function names use numbered suffixes instead of the canonical closure
separator and carry an optional source location::

    pkg.init#1                 package initializer
    pkg.(*Server).Start        method
    main.main$1                closure number 1 inside main.main
    pkg.Function@file.go:12:1  function with location

Capability loss: initializer numbering, type parameters, context and
via/alias/custom metadata have no representation; an unindexed closure
renders as ``$1``.
"""

from __future__ import annotations

import re

from adapters._common import SymbolBase, decode_function, decode_method
from model.symbol import INIT_NAME, Metadata, Symbol
from parse.canonical import enclosing_name
from parse.errors import AdapterMismatchError

_LOCATION = re.compile(r"^(?P<symbol>.+)@(?P<file>[^:@]+):(?P<line>\d+):(?P<col>\d+)$")
_INIT = re.compile(r"^(?P<package>[^()\[\]$]+)\.init(?:#\d+)?$")
_CLOSURE = re.compile(r"^(?P<base>.+)\$(?P<index>[1-9]\d*)$")


def from_ssa(text: str) -> Symbol:
    """Decode an SSA function name into a Symbol.

    Raises:
        AdapterMismatchError: If the name matches no SSA pattern.
    """
    name, position = _split_location(text.strip())
    metadata = Metadata(position=position)

    init = _INIT.match(name)
    if init is not None:
        return Symbol(
            package_path=init.group("package"),
            name=INIT_NAME,
            is_init=True,
            metadata=metadata,
        )

    closure = _CLOSURE.match(name)
    if closure is not None:
        base = _decode_base(closure.group("base"))
        if base is not None:
            return Symbol(
                **base.fields(),
                is_anonymous=True,
                anon_parent=enclosing_name(base.package_path, base.receiver, base.name),
                anon_index=int(closure.group("index")),
                metadata=metadata,
            )

    base = _decode_base(name)
    if base is not None:
        return Symbol(**base.fields(), metadata=metadata)

    msg = f"invalid SSA format: {text}"
    raise AdapterMismatchError(msg, name)


def to_ssa(sym: Symbol) -> str:
    """Render a Symbol as an SSA function name."""
    if sym.is_init:
        text = f"{sym.package_path}.init#1"
    elif sym.is_anonymous:
        text = f"{SymbolBase.of(sym).render()}${sym.anon_index or 1}"
    else:
        text = SymbolBase.of(sym).render()

    if sym.metadata.position:
        return f"{text}@{sym.metadata.position}"
    return text


def _decode_base(name: str) -> SymbolBase | None:
    return decode_method(name) or decode_function(name)


def _split_location(text: str) -> tuple[str, str]:
    match = _LOCATION.match(text)
    if match is None:
        return text, ""
    position = f"{match.group('file')}:{match.group('line')}:{match.group('col')}"
    return match.group("symbol"), position


__all__ = ["from_ssa", "to_ssa"]
