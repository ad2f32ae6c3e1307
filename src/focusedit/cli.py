"""Command-line interface for focusedit."""

from __future__ import annotations

import argparse
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from focusedit.buffer import Buffer
from focusedit.errors import ConfigError
from focusedit.indent import IndentUnit, get_next_line_indent
from focusedit.outdent import outdent_edit
from focusedit.tokens import LexerState

FORMATS = ("text", "json")
_DEFAULT_INDENT_SIZE = 4


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    unit: IndentUnit
    check: bool
    next_indent: int | None
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="focusedit",
        description="Tokenize Focus source and check its indentation",
    )
    p.add_argument("input", help="Input Focus source file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Token stream format (default: text)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover focusedit.toml)",
    )
    p.add_argument(
        "--indent-size",
        type=int,
        default=None,
        metavar="N",
        help="Spaces per indentation level (default: 4)",
    )
    p.add_argument("--tabs", action="store_true", help="Indent with tabs instead of spaces")
    p.add_argument(
        "--check",
        action="store_true",
        help="Report misaligned closing braces and unterminated regions",
    )
    p.add_argument(
        "--next-indent",
        type=int,
        default=None,
        metavar="LINE",
        help="Print the indentation for a new line opened after LINE (1-based)",
    )
    p.add_argument("--debug", action="store_true", help="Dump per-line tokens to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "focusedit.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML: {exc}", path=path) from exc


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    source = config_path or input_dir / "focusedit.toml"

    # Indentation: config < CLI
    use_tabs = False
    size = _DEFAULT_INDENT_SIZE
    cfg_indent = config.get("indent")
    if isinstance(cfg_indent, dict):
        style = cfg_indent.get("style", "spaces")
        if style not in ("spaces", "tabs"):
            raise ConfigError(
                f"indent style must be 'spaces' or 'tabs', got {style!r}",
                key="indent.style",
                path=source,
            )
        use_tabs = style == "tabs"
        cfg_size = cfg_indent.get("size", size)
        if not isinstance(cfg_size, int) or isinstance(cfg_size, bool) or cfg_size <= 0:
            raise ConfigError(
                f"indent size must be a positive integer, got {cfg_size!r}",
                key="indent.size",
                path=source,
            )
        size = cfg_size
    if args.tabs:
        use_tabs = True
    if args.indent_size is not None:
        if args.indent_size <= 0:
            raise ConfigError(
                f"indent size must be positive, got {args.indent_size}", key="--indent-size"
            )
        size = args.indent_size

    # Output format: config < CLI
    fmt = "text"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format", fmt)
        if cfg_format not in FORMATS:
            raise ConfigError(
                f"output format must be one of {', '.join(FORMATS)}, got {cfg_format!r}",
                key="output.format",
                path=source,
            )
        fmt = cfg_format
    if args.format is not None:
        fmt = args.format

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        unit=IndentUnit.from_options(not use_tabs, size),
        check=args.check,
        next_indent=args.next_indent,
        debug=args.debug,
    )


def render_tokens(buffer: Buffer, fmt: str) -> str:
    """Serialize the token stream of every line of *buffer*."""
    if fmt == "json":
        lines = []
        for row in range(buffer.line_count):
            lines.append(
                {
                    "row": row,
                    "state": buffer.get_state(row).name.lower(),
                    "end_state": buffer.get_end_state(row).name.lower(),
                    "tokens": [
                        {
                            "category": tok.category.value,
                            "lexeme": tok.lexeme,
                            "start": tok.start_column,
                            "end": tok.end_column,
                        }
                        for tok in buffer.get_tokens(row)
                    ],
                }
            )
        return json.dumps(lines, indent=2) + "\n"

    out = []
    for row in range(buffer.line_count):
        for tok in buffer.get_tokens(row):
            out.append(
                f"{row + 1}:{tok.start_column}-{tok.end_column} {tok.category.value} {tok.lexeme!r}\n"
            )
    return "".join(out)


def check_buffer(buffer: Buffer) -> list[str]:
    """Return one message per indentation or balance problem found in *buffer*."""
    problems: list[str] = []
    for row in range(buffer.line_count):
        edit = outdent_edit(buffer, row)
        if edit is not None:
            problems.append(
                f"line {row + 1}: closing brace should be indented by {edit.text!r}"
            )
    for pos in buffer.unmatched_brackets():
        glyph = buffer.get_line(pos.row)[pos.column]
        problems.append(f"line {pos.row + 1}, column {pos.column + 1}: unmatched {glyph!r}")

    last = buffer.line_count - 1
    end_state = buffer.get_end_state(last)
    if end_state is LexerState.QUOTED_STRING:
        problems.append(f"line {last + 1}: unterminated string at end of file")
    elif end_state is LexerState.COMMENT:
        problems.append(f"line {last + 1}: unterminated block comment at end of file")
    return problems


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    from focusedit.debug import dump_tokens

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    try:
        source = options.input_file.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"error: cannot read {options.input_file}: {exc.strerror}", file=sys.stderr)
        return 1

    buffer = Buffer(source)
    if options.debug:
        dump_tokens(buffer)

    if options.next_indent is not None:
        row = options.next_indent - 1
        if not 0 <= row < buffer.line_count:
            print(f"error: line {options.next_indent} is out of range", file=sys.stderr)
            return 1
        indent = get_next_line_indent(buffer.get_line(row), options.unit, buffer.get_state(row))
        sys.stdout.write(indent + "\n")
        return 0

    if options.check:
        problems = check_buffer(buffer)
        for message in problems:
            print(f"{options.input_file}: {message}", file=sys.stderr)
        return 1 if problems else 0

    output = render_tokens(buffer, options.format)
    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
