"""Editor mode: the entry points an editor calls on keystrokes and commands."""

from __future__ import annotations

import re

from focusedit import indent, outdent
from focusedit.buffer import Buffer
from focusedit.indent import IndentUnit
from focusedit.lexer import Tokenizer
from focusedit.tokens import Edit, LexerState, LineTokens

_COMMENTED = re.compile(r"^\s*\(\*(.*)\*\)")


class FocusMode:
    """Bundle a tokenizer and an indent unit behind editor-facing callbacks."""

    def __init__(self, unit: IndentUnit | None = None, tokenizer: Tokenizer | None = None) -> None:
        self.unit = unit or IndentUnit.spaces(4)
        self.tokenizer = tokenizer or Tokenizer()

    def create_buffer(self, text: str = "") -> Buffer:
        return Buffer(text, self.tokenizer)

    def get_line_tokens(self, line: str, state: LexerState = LexerState.START) -> LineTokens:
        return self.tokenizer.get_line_tokens(line, state)

    def get_next_line_indent(self, state: LexerState, line: str) -> str:
        return indent.get_next_line_indent(line, self.unit, state, self.tokenizer)

    def check_outdent(self, state: LexerState, line: str, text: str) -> bool:
        return outdent.check_outdent(line, text)

    def auto_outdent(self, state: LexerState, buffer: Buffer, row: int) -> Edit | None:
        return outdent.auto_outdent(buffer, row)

    def toggle_comment_lines(self, state: LexerState, buffer: Buffer, first: int, last: int) -> None:
        """Wrap rows *first*..*last* in ``(* *)``, or unwrap them if all are wrapped."""
        rows = range(first, last + 1)
        uncomment = all(_COMMENTED.match(buffer.get_line(row)) for row in rows)
        for row in rows:
            line = buffer.get_line(row)
            if uncomment:
                m = _COMMENTED.match(line)
                assert m is not None
                buffer.set_line(row, m.group(1))
            else:
                buffer.set_line(row, f"(*{line}*)")
