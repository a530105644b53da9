from __future__ import annotations

from pathlib import Path

import pytest

from contract.notations import (
    CANONICAL,
    NOTATION_NAMES,
    NOTATION_SPECS,
    SSA,
    TRACE,
    get_notation,
)
from contract.validation import (
    ValidationMessage,
    ValidationResult,
    iter_symbol_lines,
    validate_symbols_file,
)

FIXTURES = Path(__file__).parent / "fixtures" / "symbols"


def _messages_contain(messages: list[ValidationMessage], needle: str) -> bool:
    """Return True when any validation message contains the given substring."""
    return any(needle in message.message for message in messages)


# Group 1: Data class tests


def test_validation_message_location_with_line() -> None:
    """ValidationMessage.location returns path:line when line is present."""
    msg = ValidationMessage(Path("symbols.txt"), "bad", line=7)
    assert msg.location() == "symbols.txt:7"


def test_validation_message_location_without_line() -> None:
    """ValidationMessage.location returns only path when line is missing."""
    msg = ValidationMessage(Path("symbols.txt"), "bad")
    assert msg.location() == "symbols.txt"


def test_validation_message_to_dict() -> None:
    """ValidationMessage.to_dict returns the expected payload."""
    msg = ValidationMessage(Path("symbols.txt"), "bad", line=3, text="@")
    assert msg.to_dict() == {
        "path": "symbols.txt",
        "line": 3,
        "message": "bad",
        "text": "@",
    }


def test_validation_result_ok_when_no_errors() -> None:
    """ValidationResult.ok is true when no errors are present."""
    result = ValidationResult()
    assert result.ok is True


def test_validation_result_not_ok_when_errors() -> None:
    """ValidationResult.ok is false when at least one error exists."""
    result = ValidationResult(errors=[ValidationMessage(Path("a"), "boom")])
    assert result.ok is False


# Group 2: File handling


def test_missing_file() -> None:
    """validate_symbols_file reports a missing symbols file."""
    result = validate_symbols_file(Path("/nonexistent/symbols.txt"))
    assert result.ok is False
    assert _messages_contain(result.errors, "Symbols file does not exist")


def test_not_a_file(tmp_path: Path) -> None:
    """validate_symbols_file reports a path that is not a regular file."""
    result = validate_symbols_file(tmp_path)

    assert result.ok is False
    assert _messages_contain(result.errors, "Symbols path is not a file")


def test_blank_and_comment_lines_skipped(tmp_path: Path) -> None:
    """iter_symbol_lines skips blanks and comments but keeps line numbers."""
    path = tmp_path / "symbols.txt"
    path.write_text("# header\n\nfmt.Println\n  \nmain.main\n", encoding="utf-8")

    assert list(iter_symbol_lines(path)) == [(3, "fmt.Println"), (5, "main.main")]


# Group 3: Happy path


@pytest.mark.parametrize(
    ("fixture", "notation"),
    [
        ("canonical.txt", CANONICAL),
        ("ssa.txt", SSA),
        ("trace.txt", TRACE),
        ("trace.txt", "stack"),
    ],
)
def test_fixture_files_validate(fixture: str, notation: str) -> None:
    """Every bundled fixture decodes cleanly in its own notation."""
    result = validate_symbols_file(FIXTURES / fixture, notation)

    assert result.ok is True
    assert result.errors == []
    assert len(result.symbols) > 0


# Group 4: Decode failures


def test_decode_errors_reported_per_line(tmp_path: Path) -> None:
    """Each malformed line is reported with its line number; others still decode."""
    path = tmp_path / "symbols.txt"
    path.write_text(
        "fmt.Println\ninvalidformat\npkg.Function@\nmain.main\n",
        encoding="utf-8",
    )

    result = validate_symbols_file(path)

    assert result.ok is False
    assert [error.line for error in result.errors] == [2, 3]
    assert result.errors[0].location() == f"{path}:2"
    assert _messages_contain(result.errors, "no package separator")
    assert result.errors[1].text == "@"
    assert [sym.name for sym in result.symbols] == ["Println", "main"]


def test_unclosed_receiver_fails_as_ssa(tmp_path: Path) -> None:
    """SSA decode failures carry the adapter's error message."""
    path = tmp_path / "symbols.txt"
    path.write_text("pkg.(*T\n", encoding="utf-8")

    result = validate_symbols_file(path, SSA)

    assert result.ok is False
    assert _messages_contain(result.errors, "invalid SSA format")


# Group 5: Notation registry


def test_notation_registry_covers_every_name() -> None:
    """Every notation name is registered and only canonical is lossless."""
    assert set(NOTATION_SPECS) == set(NOTATION_NAMES)
    assert [name for name, spec in NOTATION_SPECS.items() if spec.lossless] == [
        CANONICAL
    ]


def test_get_notation_resolves_aliases() -> None:
    """Trace aliases resolve to the trace notation."""
    assert get_notation("stacktrace") is NOTATION_SPECS[TRACE]
    assert get_notation("stack").name == TRACE


def test_get_notation_unknown() -> None:
    """Unknown notation names raise ValueError."""
    with pytest.raises(ValueError, match="Unknown notation"):
        get_notation("nonexistent")
