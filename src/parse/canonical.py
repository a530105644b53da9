"""Recursive-descent parser for canonical symbol notation.

The grammar is ambiguous when read left to right (package paths contain
dots, type arguments contain commas and dots, metadata values contain
colons), so the rules below are applied in a fixed order. Each rule strips a
suffix or prefix from the remaining text before the next one runs:

    symbol    := head context? metadata?
    metadata  := "{" entry ("," entry)* "}"            (rule 1, outermost)
    entry     := key ":" value
    context   := "@" tag                                (rule 2)
    head      := package "." part                       (rule 3)
    part      := "init"                                 (rule 4a)
               | receiver? name "·lit" digits? generics? (rule 4b)
               | receiver name generics?                (rule 4c)
               | name generics?                         (rule 4d)
    receiver  := "(" "*"? type generics? ")" "."
    generics  := "[" arg ("," arg)* "]"                 (rule 5)

Structural characters only count at bracket depth zero, so ``@`` and
``{`` inside a type argument list never start a context or metadata block.
"""

from __future__ import annotations

import re
from typing import Any

from model.symbol import ANON_SEPARATOR, INIT_NAME, Metadata, Receiver, Symbol
from parse.errors import StructuralError
from parse.scanner import (
    ALL_PAIRS,
    NESTING,
    depth_at,
    find_top_level,
    match_close,
    match_open,
    split_top_level,
    split_type_args,
)

# Characters that may not appear in a package path or open a context tag.
RESERVED_CHARS = frozenset("()[]{}*@,:·")

_ANON_SUFFIX = re.compile(r"(?P<index>[0-9]*)(?P<generics>\[.*\])?", re.DOTALL)


def parse(text: str) -> Symbol:
    """Parse canonical notation into a Symbol.

    Args:
        text: Symbol string (e.g., "net/http.(*Server).Serve@linux")

    Returns:
        The decoded Symbol.

    Raises:
        StructuralError: If the text is empty or structurally malformed.
            No partial Symbol is ever produced.

    Examples:
        >>> parse("fmt.Println").name
        'Println'
        >>> parse("pkg.Map[K, V]").type_args
        ('K', 'V')
    """
    return _CanonicalParser(text).parse()


class _CanonicalParser:
    def __init__(self, text: str) -> None:
        self.source = text
        self.rest = text

    def _fail(self, message: str, fragment: str) -> StructuralError:
        return StructuralError(f"invalid symbol {self.source!r}: {message}", fragment)

    def parse(self) -> Symbol:
        if not self.source:
            raise self._fail("empty string", "")

        metadata = self._metadata()
        context = self._context()
        package_path, part = self._head()
        fields = self._part(package_path, part)

        return Symbol(
            package_path=package_path,
            context=context,
            metadata=metadata,
            **fields,
        )

    # rule 1
    def _metadata(self) -> Metadata:
        text = self.rest
        if not text.endswith("}"):
            return Metadata()

        open_index = match_open(text, len(text) - 1)
        if open_index <= 0 or depth_at(text, open_index) != 0:
            return Metadata()

        self.rest = text[:open_index]
        return parse_metadata_body(text[open_index + 1 : -1])

    # rule 2
    def _context(self) -> str:
        text = self.rest
        at_index = find_top_level(text, "@", pairs=NESTING, last=True)
        if at_index <= 0:
            return ""

        context = text[at_index + 1 :]
        if not context or context[0] in RESERVED_CHARS or context[0] == ".":
            raise self._fail("empty context modifier", text[at_index:])

        self.rest = text[:at_index]
        return context

    # rule 3
    def _head(self) -> tuple[str, str]:
        text = self.rest
        method_sep = find_top_level(text, ").", last=True)

        if method_sep == -1:
            if ".(" in text:
                raise self._fail("incomplete method receiver", text[text.index(".(") :])
            return self._plain_head(text)

        open_index = match_open(text, method_sep)
        if open_index <= 0 or text[open_index - 1] != ".":
            raise self._fail("no package separator found", text)

        return self._checked_head(text[: open_index - 1], text[open_index:])

    def _plain_head(self, text: str) -> tuple[str, str]:
        bracket = text.find("[")
        dot = text.rfind(".", 0, bracket) if bracket > 0 else text.rfind(".")
        if dot <= 0 or dot == len(text) - 1:
            raise self._fail("no package separator found", text)
        return self._checked_head(text[:dot], text[dot + 1 :])

    def _checked_head(self, package_path: str, part: str) -> tuple[str, str]:
        reserved = sorted(RESERVED_CHARS.intersection(package_path))
        if reserved:
            raise self._fail(
                f"package path contains reserved character {reserved[0]!r}",
                package_path,
            )
        if not package_path or not part:
            raise self._fail("empty package or symbol part", self.rest)
        return package_path, part

    # rule 4
    def _part(self, package_path: str, part: str) -> dict[str, Any]:
        if part == INIT_NAME:
            return {"name": INIT_NAME, "is_init": True}

        receiver: Receiver | None = None
        rest = part
        if part.startswith("("):
            receiver, rest = self._receiver(part)

        anon_index = rest.find(ANON_SEPARATOR)
        if anon_index != -1:
            return self._closure(package_path, receiver, rest, anon_index)

        # rule 5
        name, type_args = self._generic_name(rest)
        return {"name": name, "receiver": receiver, "type_args": type_args}

    def _receiver(self, part: str) -> tuple[Receiver, str]:
        close = match_close(part, 0)
        if close == -1:
            raise self._fail("incomplete method receiver", part)
        if not part.startswith(").", close) or close + 2 >= len(part):
            raise self._fail("receiver without method name", part)

        body = part[1:close]
        is_pointer = body.startswith("*")
        if is_pointer:
            body = body[1:]

        type_name, type_args = self._generic_name(body)
        receiver = Receiver(
            type_name=type_name,
            is_pointer=is_pointer,
            type_args=type_args,
        )
        return receiver, part[close + 2 :]

    def _closure(
        self,
        package_path: str,
        receiver: Receiver | None,
        rest: str,
        anon_index: int,
    ) -> dict[str, Any]:
        suffix = rest[anon_index + len(ANON_SEPARATOR) :]
        match = _ANON_SUFFIX.fullmatch(suffix)
        if match is None:
            raise self._fail("invalid anonymous function index", suffix)

        name, type_args = self._generic_name(
            rest[:anon_index] + (match.group("generics") or "")
        )
        index = int(match.group("index") or 0)

        return {
            "name": name,
            "receiver": receiver,
            "is_anonymous": True,
            "anon_parent": enclosing_name(package_path, receiver, name),
            "anon_index": index,
            "type_args": type_args,
        }

    def _generic_name(self, text: str) -> tuple[str, tuple[str, ...]]:
        start = text.find("[")
        if start == -1:
            name, type_args = text, ()
        else:
            end = text.rfind("]")
            if end < start:
                raise self._fail("unclosed type parameter bracket", text[start:])
            if end != len(text) - 1:
                raise self._fail("unexpected text after type arguments", text[end:])
            name, type_args = text[:start], split_type_args(text[start + 1 : end])

        if not name:
            raise self._fail("empty symbol name", text)
        return name, type_args


def parse_metadata_body(body: str) -> Metadata:
    """Parse the interior of a ``{...}`` block into Metadata.

    Entries without a colon are ignored. Commas nested inside brackets,
    parentheses or braces do not separate entries.
    """
    known = {"via": "", "alias": "", "pos": ""}
    custom: dict[str, str] = {}

    for entry in split_top_level(body, pairs=ALL_PAIRS):
        key, sep, value = entry.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key in known:
            known[key] = value.strip()
        else:
            custom[key] = value.strip()

    return Metadata(
        via=known["via"],
        alias=known["alias"],
        position=known["pos"],
        custom=custom,
    )


def enclosing_name(package_path: str, receiver: Receiver | None, name: str) -> str:
    """Return the dotted name of the function a closure is nested in."""
    if receiver is None:
        return f"{package_path}.{name}"

    type_text = receiver.type_name
    if receiver.type_args:
        type_text += "[" + ", ".join(receiver.type_args) + "]"
    star = "*" if receiver.is_pointer else ""
    return f"{package_path}.({star}{type_text}).{name}"


__all__ = ["RESERVED_CHARS", "enclosing_name", "parse", "parse_metadata_body"]
