"""Next-line indentation prediction."""

from __future__ import annotations

import re
from dataclasses import dataclass

from focusedit.buffer import Buffer
from focusedit.errors import ConfigError
from focusedit.lexer import Tokenizer, tokenize_line
from focusedit.tokens import Edit, LexerState, LineTokens, TokenCategory, leading_whitespace

# Brackets, assignment / mapping colon, arrows, and block-opening keywords
_INDENTER = re.compile(r"(?:[({\[=:]|[-=]>|\b(?:else|try|with))\s*$")


@dataclass(frozen=True, slots=True)
class IndentUnit:
    """Whitespace added per nesting level."""

    text: str

    @classmethod
    def tab(cls) -> IndentUnit:
        return cls("\t")

    @classmethod
    def spaces(cls, size: int) -> IndentUnit:
        if size <= 0:
            raise ConfigError(f"indent size must be positive, got {size}", key="size")
        return cls(" " * size)

    @classmethod
    def from_options(cls, insert_spaces: bool, size: int) -> IndentUnit:
        """Build a unit from editor-style options (spaces flag plus tab size)."""
        return cls.spaces(size) if insert_spaces else cls.tab()


def _ends_in_comment(line_tokens: LineTokens) -> bool:
    for tok in reversed(line_tokens.tokens):
        if tok.category is TokenCategory.TEXT and not tok.lexeme.strip():
            continue
        return tok.category is TokenCategory.COMMENT
    return False


def get_next_line_indent(
    line: str,
    unit: IndentUnit,
    state: LexerState = LexerState.START,
    tokenizer: Tokenizer | None = None,
) -> str:
    """Return the indentation for a line opened directly below *line*.

    *state* is the lexer state at the start of *line*.  The indent grows by one
    unit only when the line ends in an indenting construct outside any string
    or comment; a trailing comment keeps the indentation of the line itself.
    """
    indent = leading_whitespace(line)
    if state is not LexerState.START:
        return indent
    if tokenizer is not None:
        line_tokens = tokenizer.get_line_tokens(line, state)
    else:
        line_tokens = tokenize_line(line, state)
    if _ends_in_comment(line_tokens):
        return indent
    if _INDENTER.search(line):
        return indent + unit.text
    return indent


def indent_edit(buffer: Buffer, row: int, unit: IndentUnit) -> Edit | None:
    """Edit that gives *row* the indentation predicted from the row above it."""
    if row <= 0:
        return None
    previous = row - 1
    wanted = get_next_line_indent(buffer.get_line(previous), unit, buffer.get_state(previous))
    current = leading_whitespace(buffer.get_line(row))
    if current == wanted:
        return None
    return Edit(row, 0, len(current), wanted)
