"""Structural pieces shared by the trace and SSA adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from model.symbol import Receiver
from parse.scanner import match_close, split_type_args

if TYPE_CHECKING:
    from model.symbol import Symbol

NAME_FORBIDDEN = frozenset("()[]{}*@. \t\n")
PACKAGE_FORBIDDEN = frozenset("()[]{}*@, \t\n")


@dataclass(frozen=True)
class SymbolBase:
    """Package, receiver, name and type arguments of a function or method."""

    package_path: str
    name: str
    receiver: Receiver | None = None
    type_args: tuple[str, ...] = ()

    @classmethod
    def of(cls, sym: Symbol) -> SymbolBase:
        return cls(
            package_path=sym.package_path,
            name=sym.name,
            receiver=sym.receiver,
            type_args=sym.type_args,
        )

    def fields(self) -> dict[str, Any]:
        return {
            "package_path": self.package_path,
            "name": self.name,
            "receiver": self.receiver,
            "type_args": self.type_args,
        }

    def render(self, *, pointer_receivers: bool = False) -> str:
        parts = [self.package_path, "."]
        if self.receiver is not None:
            star = "*" if pointer_receivers or self.receiver.is_pointer else ""
            parts.extend(
                (
                    "(",
                    star,
                    self.receiver.type_name,
                    bracketed(self.receiver.type_args),
                    ").",
                )
            )
        parts.extend((self.name, bracketed(self.type_args)))
        return "".join(parts)


def bracketed(type_args: tuple[str, ...]) -> str:
    if not type_args:
        return ""
    return "[" + ", ".join(type_args) + "]"


def split_generic(text: str) -> tuple[str, tuple[str, ...]] | None:
    """Split ``Name[A, B]`` into its name and arguments; None when malformed."""
    start = text.find("[")
    if start == -1:
        return text, ()
    end = text.rfind("]")
    if end < start or end != len(text) - 1:
        return None
    return text[:start], split_type_args(text[start + 1 : end])


def _valid_package(package_path: str) -> bool:
    return bool(package_path) and not PACKAGE_FORBIDDEN.intersection(package_path)


def decode_method(
    frame: str,
    *,
    name_forbidden: frozenset[str] = NAME_FORBIDDEN,
    force_pointer: bool = False,
) -> SymbolBase | None:
    """Decode ``pkg.(*Type[Args]).Method[Args]``; None when the frame is not a method."""
    start = frame.find(".(")
    if start <= 0:
        return None

    close = match_close(frame, start + 1)
    if close == -1 or not frame.startswith(").", close):
        return None

    body = frame[start + 2 : close]
    is_pointer = body.startswith("*")
    receiver_split = split_generic(body.removeprefix("*"))
    method_split = split_generic(frame[close + 2 :])
    if receiver_split is None or method_split is None:
        return None

    type_name, receiver_args = receiver_split
    name, type_args = method_split
    package_path = frame[:start]
    if (
        not type_name
        or not name
        or NAME_FORBIDDEN.intersection(type_name)
        or name_forbidden.intersection(name)
        or not _valid_package(package_path)
    ):
        return None

    receiver = Receiver(
        type_name=type_name,
        is_pointer=is_pointer or force_pointer,
        type_args=receiver_args,
    )
    return SymbolBase(package_path, name, receiver, type_args)


def decode_function(
    frame: str,
    *,
    name_forbidden: frozenset[str] = NAME_FORBIDDEN,
) -> SymbolBase | None:
    """Decode ``pkg.Name`` or ``pkg.Name[Args]``; None when no package split exists."""
    bracket = frame.find("[")
    head = frame[:bracket] if bracket > 0 else frame
    dot = head.rfind(".")
    if dot <= 0:
        return None

    name_split = split_generic(frame[dot + 1 :])
    if name_split is None:
        return None

    name, type_args = name_split
    package_path = frame[:dot]
    if not name or name_forbidden.intersection(name) or not _valid_package(package_path):
        return None
    return SymbolBase(package_path, name, type_args=type_args)
