"""Command-line interface for symref-core."""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from contract.notations import NOTATION_ALIASES, NOTATION_NAMES, get_notation
from contract.validation import validate_symbols_file
from parse.canonical import parse
from parse.errors import SymbolError
from render.canonical import format_receiver, format_symbol
from settings.config import ConfigError, load_config
from verify.verify import verify_roundtrip

if TYPE_CHECKING:
    from model.symbol import Symbol
    from settings.config import SymrefConfig

LOGGER = logging.getLogger(__name__)


def _add_notation_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--from",
        dest="notation",
        choices=sorted([*NOTATION_NAMES, *NOTATION_ALIASES]),
        default=None,
        help="Input notation (default: config default_notation)",
    )


def _add_json_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Output in JSON format (default: config json_output)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="symref")
    parser.add_argument(
        "--root",
        default=".",
        help="Directory holding symref.toml (default: .)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log decode failures to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser("parse", help="Parse a canonical symbol")
    parse_parser.add_argument("symbol")
    _add_json_option(parse_parser)

    format_parser = subparsers.add_parser(
        "format", help="Format a symbol from any notation to canonical notation"
    )
    format_parser.add_argument("symbol")
    _add_notation_option(format_parser)
    _add_json_option(format_parser)

    convert_parser = subparsers.add_parser(
        "convert", help="Convert a canonical symbol to the other notations"
    )
    convert_parser.add_argument("symbol")
    _add_json_option(convert_parser)

    validate_parser = subparsers.add_parser(
        "validate", help="Decode every symbol in a file"
    )
    validate_parser.add_argument("file")
    _add_notation_option(validate_parser)

    verify_parser = subparsers.add_parser(
        "verify", help="Verify the self round-trip of every symbol in a file"
    )
    verify_parser.add_argument("file")
    _add_notation_option(verify_parser)

    subparsers.add_parser("version", help="Print version information")

    return parser


def _write_json(payload: object) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
    sys.stdout.write("\n")


def _describe(sym: Symbol) -> list[str]:
    lines = [f"Package: {sym.package_path}", f"Function: {sym.name}"]
    if sym.receiver is not None:
        lines.append(f"Receiver: {format_receiver(sym.receiver)[1:-1]}")
    if sym.is_init:
        lines.append("Type: init function")
    if sym.is_anonymous:
        lines.append(
            f"Type: anonymous function (parent: {sym.anon_parent}, "
            f"index: {sym.anon_index})"
        )
    if sym.type_params:
        params = ", ".join(
            f"{param.name} {param.constraint}".strip() for param in sym.type_params
        )
        lines.append(f"Type Parameters: {params}")
    if sym.type_args:
        lines.append(f"Type Arguments: {', '.join(sym.type_args)}")
    if sym.context:
        lines.append(f"Context: {sym.context}")

    meta = sym.metadata
    if not meta.is_empty():
        lines.append("Metadata:")
        for label, value in (
            ("Via", meta.via),
            ("Alias", meta.alias),
            ("Position", meta.position),
        ):
            if value:
                lines.append(f"  {label}: {value}")
        for key in sorted(meta.custom):
            lines.append(f"  {key}: {meta.custom[key]}")
    return lines


def _report_decode_error(exc: SymbolError) -> int:
    sys.stderr.write(f"error: {exc}\n")
    return 1


def _handle_parse(text: str, as_json: bool) -> int:
    try:
        sym = parse(text)
    except SymbolError as exc:
        return _report_decode_error(exc)

    if as_json:
        _write_json(sym.model_dump(mode="json"))
    else:
        sys.stdout.write("\n".join(_describe(sym)) + "\n")
    return 0


def _handle_format(text: str, notation: str, as_json: bool) -> int:
    try:
        sym = get_notation(notation).decode(text)
    except SymbolError as exc:
        return _report_decode_error(exc)

    canonical = format_symbol(sym)
    if as_json:
        _write_json({"canonical": canonical})
    else:
        sys.stdout.write(canonical + "\n")
    return 0


def _handle_convert(text: str, config: SymrefConfig, as_json: bool) -> int:
    try:
        sym = parse(text)
    except SymbolError as exc:
        return _report_decode_error(exc)

    result = {
        target: get_notation(target).encode(sym) for target in config.convert_targets
    }
    if as_json:
        _write_json(result)
        return 0

    width = max(len(target) for target in result) + 1
    for target, rendered in result.items():
        sys.stdout.write(f"{target + ':':<{width}} {rendered}\n")
    return 0


def _handle_validate(file: str, notation: str) -> int:
    path = Path(file).expanduser().resolve()
    result = validate_symbols_file(path, notation)
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(file: str, notation: str) -> int:
    path = Path(file).expanduser().resolve()
    try:
        result = verify_roundtrip(path=path, notation=notation)
    except (FileNotFoundError, IsADirectoryError) as exc:
        sys.stderr.write(f"file: {path}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for mismatch in result.mismatches:
            sys.stderr.write(
                f"{path}:{mismatch.line}: {mismatch.reason}: "
                f"{mismatch.text} -> {mismatch.rendered}\n"
            )
        return 1
    return 0


def _handle_version() -> int:
    try:
        installed = version("symref-core")
    except PackageNotFoundError:
        installed = "unknown"
    sys.stdout.write(f"symref version {installed}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if args.command == "version":
        return _handle_version()

    root = Path(args.root).expanduser().resolve()
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"config: {exc}\n")
        return 2
    LOGGER.debug("loaded config from %s: %s", root, config)

    as_json = config.json_output if getattr(args, "json", None) is None else args.json
    notation = getattr(args, "notation", None) or config.default_notation

    if args.command == "parse":
        return _handle_parse(args.symbol, as_json)

    if args.command == "format":
        return _handle_format(args.symbol, notation, as_json)

    if args.command == "convert":
        return _handle_convert(args.symbol, config, as_json)

    if args.command == "validate":
        return _handle_validate(args.file, notation)

    if args.command == "verify":
        return _handle_verify(args.file, notation)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
