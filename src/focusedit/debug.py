"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from focusedit.buffer import Buffer
from focusedit.tokens import LexerState, Token


def dump_tokens(buffer: Buffer, *, file: TextIO = sys.stderr) -> None:
    """Print every line with its entry/exit states and tokens to *file*."""
    for row in range(buffer.line_count):
        _dump_line(buffer, row, file)


def _state_name(state: LexerState) -> str:
    return state.name.lower()


def _dump_line(buffer: Buffer, row: int, f: TextIO) -> None:
    start = _state_name(buffer.get_state(row))
    end = _state_name(buffer.get_end_state(row))
    f.write(f"Line {row + 1} [{start} -> {end}] {buffer.get_line(row)!r}\n")
    for tok in buffer.get_tokens(row):
        _dump_token(tok, f)


def _dump_token(tok: Token, f: TextIO) -> None:
    f.write(f"  {tok.start_column:>3}-{tok.end_column:<3} {tok.category.value:<18} {tok.lexeme!r}\n")
