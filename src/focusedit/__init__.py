"""Focus language tokenizer and editor indentation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from focusedit.tokens import LineTokens

__version__ = "0.1.0"


def highlight(source: str) -> list[LineTokens]:
    """Tokenize Focus source, returning tokens and end state for each line."""
    from focusedit.lexer import tokenize

    return tokenize(source)
