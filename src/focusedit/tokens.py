"""Token categories, lexer states, and the small value types shared by the engines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenCategory(Enum):
    COMMENT = "comment"
    ENTITY = "entity.other"  # Capitalized module/namespace reference
    FUNCTION = "support.function"  # word directly after a "."
    STRING = "string"
    NUMBER = "constant.numeric"
    KEYWORD = "keyword"
    CONSTANT = "constant.language"  # true / false
    IDENTIFIER = "identifier"
    OPERATOR = "keyword.operator"
    LPAREN = "paren.lparen"
    RPAREN = "paren.rparen"
    TEXT = "text"  # whitespace and unrecognized characters


class LexerState(Enum):
    START = auto()
    COMMENT = auto()
    QUOTED_STRING = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A categorized slice of one line, columns 0-based and end-exclusive."""

    category: TokenCategory
    lexeme: str
    start_column: int
    end_column: int


@dataclass(frozen=True, slots=True)
class LineTokens:
    """Tokens of a single line plus the state the next line starts in."""

    tokens: tuple[Token, ...]
    end_state: LexerState

    @property
    def text(self) -> str:
        return "".join(t.lexeme for t in self.tokens)


@dataclass(frozen=True, slots=True)
class BracketPosition:
    row: int
    column: int


@dataclass(frozen=True, slots=True)
class Edit:
    """Replacement of columns [start_column, end_column) on one row."""

    row: int
    start_column: int
    end_column: int
    text: str


BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
CLOSING_BRACKETS = {close: open_ for open_, close in BRACKET_PAIRS.items()}


def leading_whitespace(line: str) -> str:
    """Return the run of whitespace at the start of *line*."""
    return line[: len(line) - len(line.lstrip())]
