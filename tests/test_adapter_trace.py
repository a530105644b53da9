from __future__ import annotations

import pytest

from adapters.trace import from_trace, to_trace
from model.symbol import Metadata, Receiver, Symbol
from parse.canonical import parse
from parse.errors import AdapterMismatchError


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (
            "main.main",
            Symbol(package_path="main", name="main"),
        ),
        (
            "net/http.(*Server).Serve",
            Symbol(
                package_path="net/http",
                name="Serve",
                receiver=Receiver(type_name="Server", is_pointer=True),
            ),
        ),
        (
            "pkg.(Type).Method",
            Symbol(
                package_path="pkg",
                name="Method",
                receiver=Receiver(type_name="Type", is_pointer=True),
            ),
        ),
        (
            "main.main.func2",
            Symbol(
                package_path="main",
                name="main",
                is_anonymous=True,
                anon_parent="main.main",
                anon_index=2,
            ),
        ),
        (
            "pkg.(*T).M.func3",
            Symbol(
                package_path="pkg",
                name="M",
                receiver=Receiver(type_name="T", is_pointer=True),
                is_anonymous=True,
                anon_parent="pkg.(*T).M",
                anon_index=3,
            ),
        ),
        (
            "database/sql.init.func1",
            Symbol(package_path="database/sql", name="init", is_init=True),
        ),
        (
            "pkg.init.0",
            Symbol(package_path="pkg", name="init", is_init=True),
        ),
        (
            "pkg.init",
            Symbol(package_path="pkg", name="init", is_init=True),
        ),
        (
            "pkg.Map[int, string]",
            Symbol(package_path="pkg", name="Map", type_args=["int", "string"]),
        ),
        (
            "main.run(0x1, 0x2)",
            Symbol(package_path="main", name="run"),
        ),
        (
            "main.main /path/to/file.go:123",
            Symbol(
                package_path="main",
                name="main",
                metadata=Metadata(position="/path/to/file.go:123"),
            ),
        ),
        (
            "main.main.func2\t/src/main.go:12 +0x1d",
            Symbol(
                package_path="main",
                name="main",
                is_anonymous=True,
                anon_parent="main.main",
                anon_index=2,
                metadata=Metadata(position="/src/main.go:12 +0x1d"),
            ),
        ),
    ],
)
def test_from_trace(text: str, expected: Symbol) -> None:
    assert from_trace(text) == expected


@pytest.mark.parametrize("text", ["", "invalid", "pkg.(*T", "pkg.F[int"])
def test_from_trace_rejects_unrecognized_frames(text: str) -> None:
    with pytest.raises(AdapterMismatchError, match="invalid stack trace format"):
        from_trace(text)


@pytest.mark.parametrize(
    ("sym", "expected"),
    [
        (Symbol(package_path="main", name="main"), "main.main"),
        (
            Symbol(
                package_path="pkg",
                name="Method",
                receiver=Receiver(type_name="Type"),
            ),
            "pkg.(*Type).Method",
        ),
        (
            Symbol(package_path="pkg", name="init", is_init=True),
            "pkg.init.func1",
        ),
        (
            Symbol(
                package_path="main",
                name="main",
                is_anonymous=True,
                anon_parent="main.main",
            ),
            "main.main.func1",
        ),
        (
            Symbol(
                package_path="pkg",
                name="F",
                context="linux",
                metadata=Metadata(via="Base", custom={"k": "v"}),
            ),
            "pkg.F",
        ),
        (
            Symbol(
                package_path="main",
                name="main",
                metadata=Metadata(position="/src/main.go:12"),
            ),
            "main.main /src/main.go:12",
        ),
    ],
)
def test_to_trace(sym: Symbol, expected: str) -> None:
    assert to_trace(sym) == expected


@pytest.mark.parametrize(
    "text",
    [
        "main.main",
        "net/http.(*Server).Serve",
        "pkg.(*List[T]).Add",
        "pkg.Map[int, string]",
        "main.main.func2",
        "pkg.(*T).M.func3",
        "main.main.func0",
        "pkg.(*T).M.func0",
        "pkg.F[int].func1",
        "pkg.init.func1",
        "main.main /src/main.go:12",
    ],
)
def test_trace_self_round_trip(text: str) -> None:
    sym = from_trace(text)

    assert to_trace(sym) == text
    assert from_trace(to_trace(sym)) == sym


def test_canonical_closure_in_method_to_trace() -> None:
    sym = parse("main.(*Server).Start·lit2")

    assert to_trace(sym) == "main.(*Server).Start.func2"


def test_trace_value_receiver_becomes_pointer() -> None:
    sym = parse("net/http.(HandlerFunc).ServeHTTP")

    assert to_trace(sym) == "net/http.(*HandlerFunc).ServeHTTP"
    assert from_trace(to_trace(sym)).receiver == Receiver(
        type_name="HandlerFunc", is_pointer=True
    )


def test_trace_func0_is_a_plain_name_not_a_closure() -> None:
    function = from_trace("main.main.func0")
    method = from_trace("pkg.(*T).M.func0")

    assert function == Symbol(package_path="main.main", name="func0")
    assert method.is_anonymous is False
    assert method.name == "M.func0"
    assert method.receiver == Receiver(type_name="T", is_pointer=True)


def test_trace_closure_parent_matches_canonical_parent() -> None:
    sym = from_trace("pkg.F[int].func1")

    assert sym.type_args == ("int",)
    assert sym.anon_parent == "pkg.F"
    assert sym.anon_parent == parse("pkg.F·lit1[int]").anon_parent
