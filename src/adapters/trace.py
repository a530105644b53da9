"""Runtime stack-trace notation adapter.

Trace frames name functions the way the runtime prints them::

    main.main
    net/http.(*Server).Serve
    pkg.Map[int, string]
    main.main.func2            closure number 2 inside main.main
    pkg.init.func1             package initializer

A frame may carry call arguments (``main.run(0x1, 0x2)``), which are
dropped, and a trailing location after whitespace
(``main.main /src/main.go:12``), which is kept in ``metadata.position``.

Capability loss: receivers always render as pointers, init numbering and
type parameters are dropped, and context plus via/alias/custom metadata have
no representation.
"""

from __future__ import annotations

import re

from adapters._common import NAME_FORBIDDEN, SymbolBase, decode_function, decode_method
from model.symbol import INIT_NAME, Metadata, Symbol
from parse.canonical import enclosing_name
from parse.errors import AdapterMismatchError
from parse.scanner import match_open

_LOCATION = re.compile(
    r"^(?P<frame>\S.*?)\s+(?P<location>/\S.*|\S*\.go:\d+.*)$",
    re.DOTALL,
)
_INIT = re.compile(r"^(?P<package>[^()\[\]]+)\.init(?:\.\d+)?(?:\.func\d+)?$")
_CLOSURE = re.compile(r"^(?P<base>.+)\.func(?P<index>[1-9]\d*)$")

# Closures are matched first, so a method name may keep a dotted tail (".func0").
_METHOD_NAME_FORBIDDEN = NAME_FORBIDDEN - {"."}


def from_trace(text: str) -> Symbol:
    """Decode a stack-trace frame into a Symbol.

    Raises:
        AdapterMismatchError: If the frame matches no trace pattern.
    """
    frame, position = _split_location(text.strip())
    frame = _strip_call_args(frame)
    metadata = Metadata(position=position)

    init = _INIT.match(frame)
    if init is not None:
        return Symbol(
            package_path=init.group("package"),
            name=INIT_NAME,
            is_init=True,
            metadata=metadata,
        )

    closure = _CLOSURE.match(frame)
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

    base = _decode_base(frame)
    if base is not None:
        return Symbol(**base.fields(), metadata=metadata)

    msg = f"invalid stack trace format: {text}"
    raise AdapterMismatchError(msg, frame)


def to_trace(sym: Symbol) -> str:
    """Render a Symbol as a stack-trace frame."""
    if sym.is_init:
        frame = f"{sym.package_path}.init.func1"
    elif sym.is_anonymous:
        base = SymbolBase.of(sym).render(pointer_receivers=True)
        frame = f"{base}.func{sym.anon_index or 1}"
    else:
        frame = SymbolBase.of(sym).render(pointer_receivers=True)

    if sym.metadata.position:
        return f"{frame} {sym.metadata.position}"
    return frame


def _decode_base(frame: str) -> SymbolBase | None:
    return decode_method(
        frame, name_forbidden=_METHOD_NAME_FORBIDDEN, force_pointer=True
    ) or decode_function(frame)


def _split_location(text: str) -> tuple[str, str]:
    match = _LOCATION.match(text)
    if match is None:
        return text, ""
    return match.group("frame"), match.group("location").strip()


def _strip_call_args(frame: str) -> str:
    if not frame.endswith(")"):
        return frame
    open_index = match_open(frame, len(frame) - 1)
    # ".(" opens a receiver, anything else opens an argument list
    if open_index > 0 and frame[open_index - 1] != ".":
        return frame[:open_index]
    return frame


__all__ = ["from_trace", "to_trace"]
