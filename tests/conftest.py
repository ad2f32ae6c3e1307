"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from focusedit.buffer import Buffer
from focusedit.lexer import tokenize_line
from focusedit.tokens import LexerState, Token, TokenCategory


@pytest.fixture
def lex():
    """Return a helper that tokenizes one line and returns its tokens."""

    def _lex(line: str, state: LexerState = LexerState.START) -> list[Token]:
        return list(tokenize_line(line, state).tokens)

    return _lex


@pytest.fixture
def make_buffer():
    """Return a helper that builds a Buffer from lines joined with newlines."""

    def _make(*lines: str) -> Buffer:
        return Buffer("\n".join(lines))

    return _make


def significant(tokens: list[Token]) -> list[Token]:
    """Drop whitespace tokens."""
    return [t for t in tokens if not (t.category is TokenCategory.TEXT and t.lexeme.isspace())]


def assert_categories(tokens: list[Token], expected: list[TokenCategory]) -> None:
    """Assert that the token categories match the expected list."""
    actual = [t.category for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_lexemes(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token lexemes match the expected list."""
    actual = [t.lexeme for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
