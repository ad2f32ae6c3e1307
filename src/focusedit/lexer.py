"""Focus tokenizer — applies the rule table line by line, threading lexer state."""

from __future__ import annotations

import re
from collections.abc import Iterator

from focusedit.rules import RULES, Rule
from focusedit.tokens import LexerState, LineTokens, Token, TokenCategory

_LINE_BREAK = re.compile(r"\r?\n")


class Tokenizer:
    """Tokenize single lines of Focus source.

    The tokenizer holds no per-buffer state: the caller passes in the state the
    previous line ended in and receives the state for the next line.
    """

    def __init__(self, rules: dict[LexerState, list[Rule]] | None = None) -> None:
        self._rules = rules if rules is not None else RULES

    def get_line_tokens(self, line: str, state: LexerState = LexerState.START) -> LineTokens:
        tokens: list[Token] = []
        for tok, state in self._scan(line, state):
            tokens.append(tok)
        return LineTokens(tuple(tokens), state)

    def state_changes(
        self, line: str, state: LexerState = LexerState.START
    ) -> list[tuple[int, LexerState]]:
        """Start column of every token whose rule switches state, with the state entered."""
        changes: list[tuple[int, LexerState]] = []
        for tok, after in self._scan(line, state):
            if after is not state:
                changes.append((tok.start_column, after))
            state = after
        return changes

    def _scan(self, line: str, state: LexerState) -> Iterator[tuple[Token, LexerState]]:
        # Yields each token with the state in effect after it
        pos = 0
        # Start of a run of characters no rule recognized, or -1
        fallback_start = -1

        while pos < len(line):
            matched = self._match(line, pos, state)
            if matched is None:
                if fallback_start < 0:
                    fallback_start = pos
                pos += 1
                continue

            if fallback_start >= 0:
                yield _token(TokenCategory.TEXT, line, fallback_start, pos), state
                fallback_start = -1

            rule, end = matched
            if rule.next_state is not None:
                state = rule.next_state
            yield _token(rule.classify(line[pos:end]), line, pos, end), state
            pos = end

        if fallback_start >= 0:
            yield _token(TokenCategory.TEXT, line, fallback_start, pos), state

    def _match(self, line: str, pos: int, state: LexerState) -> tuple[Rule, int] | None:
        for rule in self._rules[state]:
            m = rule.pattern.match(line, pos)
            # Empty matches would never advance the cursor
            if m is not None and m.end() > pos:
                return rule, m.end()
        return None


def _token(category: TokenCategory, line: str, start: int, end: int) -> Token:
    return Token(category, line[start:end], start, end)


_default = Tokenizer()


def split_lines(source: str) -> list[str]:
    """Split source on LF or CRLF, keeping a trailing empty line like an editor does."""
    return _LINE_BREAK.split(source)


def tokenize_line(line: str, state: LexerState = LexerState.START) -> LineTokens:
    """Convenience function: tokenize one line with the default rule table."""
    return _default.get_line_tokens(line, state)


def tokenize(source: str) -> list[LineTokens]:
    """Tokenize a whole buffer, one LineTokens per line."""
    result: list[LineTokens] = []
    state = LexerState.START
    for line in split_lines(source):
        line_tokens = _default.get_line_tokens(line, state)
        result.append(line_tokens)
        state = line_tokens.end_state
    return result
