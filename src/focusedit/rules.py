"""Focus lexical rules: ordered regex recognizers grouped by lexer state.

Each state owns a list of :class:`Rule` records.  The tokenizer tries them in
order at the current column and the first pattern that matches decides the
token category and, optionally, the state to switch to.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from focusedit.tokens import LexerState, TokenCategory

KEYWORDS = frozenset(
    ["let", "fn", "and", "not", "is", "as", "or", "match", "if", "then", "else", "from", "import"]
)
CONSTANTS = frozenset(["true", "false"])

CategoryMapper = Callable[[str], TokenCategory]


def classify_word(word: str) -> TokenCategory:
    """Map an identifier-shaped word to keyword, language constant, or identifier."""
    if word in KEYWORDS:
        return TokenCategory.KEYWORD
    if word in CONSTANTS:
        return TokenCategory.CONSTANT
    return TokenCategory.IDENTIFIER


@dataclass(frozen=True, slots=True)
class Rule:
    category: TokenCategory | CategoryMapper
    pattern: re.Pattern[str]
    next_state: LexerState | None = None

    def classify(self, lexeme: str) -> TokenCategory:
        if isinstance(self.category, TokenCategory):
            return self.category
        return self.category(lexeme)


def _rule(
    category: TokenCategory | CategoryMapper, regex: str, next_state: LexerState | None = None
) -> Rule:
    return Rule(category, re.compile(regex), next_state)


# Numeric literal building blocks
_DECIMAL_INTEGER = r"(?:[1-9]\d*|0)"
_OCT_INTEGER = r"(?:0[oO][0-7]+)"
_HEX_INTEGER = r"(?:0[xX][\dA-Fa-f]+)"
_BIN_INTEGER = r"(?:0[bB][01]+)"
_RADIX_INTEGER = rf"(?:{_OCT_INTEGER}|{_HEX_INTEGER}|{_BIN_INTEGER})"

_EXPONENT = r"(?:[eE][+-]?\d+)"
_FRACTION = r"(?:\.\d+)"
_INT_PART = r"(?:\d+)"
_POINT_FLOAT = rf"(?:{_INT_PART}?{_FRACTION}|{_INT_PART}\.)"
_EXPONENT_FLOAT = rf"(?:(?:{_POINT_FLOAT}|{_INT_PART}){_EXPONENT})"
_FLOAT = rf"(?:{_EXPONENT_FLOAT}|{_POINT_FLOAT})"

# Longest glyphs first so that "->" never splits into "-" ">"
_OPERATORS = [
    "...", "..", "->", "|>", "=>", "<-", "==", "!=", "<>", "<=", ">=", "<<", ">>", "//", "**",
    ".", "+", "-", "*", "/", "%", "&", "|", "^", "~", "<", ">", "=", "!", ":", ",", ";",
]  # fmt: skip
_OPERATOR = "|".join(re.escape(op) for op in _OPERATORS)

START_RULES: list[Rule] = [
    _rule(TokenCategory.COMMENT, r"#.*"),
    _rule(TokenCategory.COMMENT, r"\(\*", LexerState.COMMENT),
    _rule(TokenCategory.ENTITY, r"[A-Z][a-z]*"),
    _rule(TokenCategory.FUNCTION, r"(?<=\.)\w+"),
    _rule(TokenCategory.STRING, r'"(?:\\.|[^"\\])*?"'),
    _rule(TokenCategory.STRING, r"'.'"),
    _rule(TokenCategory.STRING, r'"', LexerState.QUOTED_STRING),
    _rule(TokenCategory.NUMBER, rf"{_RADIX_INTEGER}\b"),
    _rule(TokenCategory.NUMBER, rf"(?:{_FLOAT}|\d+)[jJ]\b"),
    _rule(TokenCategory.NUMBER, _FLOAT),
    _rule(TokenCategory.NUMBER, rf"{_DECIMAL_INTEGER}\b"),
    _rule(classify_word, r"[a-zA-Z_$][a-zA-Z0-9_$]*\b"),
    _rule(TokenCategory.OPERATOR, _OPERATOR),
    _rule(TokenCategory.LPAREN, r"[\[({]"),
    _rule(TokenCategory.RPAREN, r"[\])}]"),
    _rule(TokenCategory.TEXT, r"\s+"),
]

COMMENT_RULES: list[Rule] = [
    _rule(TokenCategory.COMMENT, r"\*\)", LexerState.START),
    _rule(TokenCategory.COMMENT, r"(?:[^*]|\*(?!\)))+"),
]

QUOTED_STRING_RULES: list[Rule] = [
    _rule(TokenCategory.STRING, r'"', LexerState.START),
    _rule(TokenCategory.STRING, r'(?:\\.|[^"\\])+'),
    # A lone trailing backslash has nothing left to escape
    _rule(TokenCategory.STRING, r"\\"),
]

RULES: dict[LexerState, list[Rule]] = {
    LexerState.START: START_RULES,
    LexerState.COMMENT: COMMENT_RULES,
    LexerState.QUOTED_STRING: QUOTED_STRING_RULES,
}
