"""Depth-aware string scanning shared by the parser and the adapters.

Symbol notations nest type expressions inside brackets (``Map[K, V]``),
parentheses (``func(int) error``) and braces (metadata blocks). Structural
characters only count when they sit at depth zero with respect to the
bracket pairs a caller cares about.
"""

from __future__ import annotations

from collections.abc import Iterator

BRACKETS = "[]"
NESTING = "[]()"
ALL_PAIRS = "[](){}"


def _walk(text: str, pairs: str) -> Iterator[tuple[int, int]]:
    """Yield ``(index, depth)`` with the depth in effect before each character."""
    openers = pairs[0::2]
    closers = pairs[1::2]
    depth = 0
    for index, char in enumerate(text):
        yield index, depth
        if char in openers:
            depth += 1
        elif char in closers:
            depth -= 1


def depth_at(text: str, index: int, pairs: str = BRACKETS) -> int:
    """Return the nesting depth in effect at ``index``."""
    openers = pairs[0::2]
    closers = pairs[1::2]
    prefix = text[:index]
    return sum(c in openers for c in prefix) - sum(c in closers for c in prefix)


def find_top_level(
    text: str,
    needle: str,
    *,
    pairs: str = BRACKETS,
    last: bool = False,
) -> int:
    """Find ``needle`` at depth zero; -1 when absent.

    Returns the first occurrence, or the last one when ``last`` is set.
    """
    found = -1
    for index, depth in _walk(text, pairs):
        if depth == 0 and text.startswith(needle, index):
            if not last:
                return index
            found = index
    return found


def match_close(text: str, open_index: int) -> int:
    """Return the index of the bracket closing ``text[open_index]``; -1 if unclosed."""
    opener = text[open_index]
    closer = ALL_PAIRS[ALL_PAIRS.index(opener) + 1]
    depth = 0
    for index in range(open_index, len(text)):
        if text[index] == opener:
            depth += 1
        elif text[index] == closer:
            depth -= 1
            if depth == 0:
                return index
    return -1


def match_open(text: str, close_index: int) -> int:
    """Return the index of the bracket opening ``text[close_index]``; -1 if unopened."""
    closer = text[close_index]
    opener = ALL_PAIRS[ALL_PAIRS.index(closer) - 1]
    depth = 0
    for index in range(close_index, -1, -1):
        if text[index] == closer:
            depth += 1
        elif text[index] == opener:
            depth -= 1
            if depth == 0:
                return index
    return -1


def split_top_level(text: str, sep: str = ",", *, pairs: str = NESTING) -> list[str]:
    """Split ``text`` on ``sep`` where every tracked pair is balanced.

    Elements are trimmed and empty elements dropped, so an empty input
    yields an empty list.

    Examples:
        >>> split_top_level("Map[string, int], []byte")
        ['Map[string, int]', '[]byte']
        >>> split_top_level("")
        []
    """
    parts: list[str] = []
    start = 0
    for index, depth in _walk(text, pairs):
        if depth == 0 and text[index] == sep:
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])
    return [part.strip() for part in parts if part.strip()]


def split_type_args(text: str) -> tuple[str, ...]:
    """Split a generic argument list using bracket and parenthesis depth."""
    return tuple(split_top_level(text, pairs=NESTING))


__all__ = [
    "ALL_PAIRS",
    "BRACKETS",
    "NESTING",
    "depth_at",
    "find_top_level",
    "match_close",
    "match_open",
    "split_top_level",
    "split_type_args",
]
