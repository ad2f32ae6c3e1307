"""Editor buffer: lines, the per-line token cache, and the bracket index."""

from __future__ import annotations

from focusedit.lexer import Tokenizer, split_lines
from focusedit.tokens import (
    BRACKET_PAIRS,
    CLOSING_BRACKETS,
    BracketPosition,
    Edit,
    LexerState,
    LineTokens,
    Token,
    TokenCategory,
)

_BRACKET_CATEGORIES = (TokenCategory.LPAREN, TokenCategory.RPAREN)


class Buffer:
    """Lines of one document with incrementally maintained tokenization.

    ``_cache[row]`` holds the tokens of ``row`` and the state the following row
    starts in.  Every edit re-tokenizes the touched rows, then keeps going only
    while the end state of a row differs from what was cached before the edit.
    """

    def __init__(self, text: str = "", tokenizer: Tokenizer | None = None) -> None:
        self._tokenizer = tokenizer or Tokenizer()
        self._lines: list[str] = split_lines(text)
        self._cache: list[LineTokens | None] = [None] * len(self._lines)
        self._brackets: _BracketIndex | None = None
        self._retokenize(0, len(self._lines) - 1)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def get_line(self, row: int) -> str:
        return self._lines[row]

    def get_line_tokens(self, row: int) -> LineTokens:
        entry = self._cache[row]
        if entry is None:
            raise RuntimeError(f"row {row} was never tokenized")
        return entry

    def get_tokens(self, row: int) -> tuple[Token, ...]:
        return self.get_line_tokens(row).tokens

    def get_state(self, row: int) -> LexerState:
        """State the lexer is in at the start of *row*."""
        if row == 0:
            return LexerState.START
        return self.get_line_tokens(row - 1).end_state

    def get_end_state(self, row: int) -> LexerState:
        return self.get_line_tokens(row).end_state

    def open_region_start(self) -> tuple[int, int] | None:
        """Row and column where a string or block comment still open at the end began."""
        state = self.get_end_state(len(self._lines) - 1)
        if state is LexerState.START:
            return None
        for row in range(len(self._lines) - 1, -1, -1):
            changes = self._tokenizer.state_changes(self._lines[row], self.get_state(row))
            entered = [col for col, after in changes if after is state]
            if entered:
                return row, entered[-1]
        return 0, 0

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def set_line(self, row: int, text: str) -> None:
        self._lines[row] = text
        self._retokenize(row, row)

    def insert_lines(self, row: int, lines: list[str]) -> None:
        """Insert *lines* before *row* (``row == line_count`` appends)."""
        if not 0 <= row <= len(self._lines):
            raise IndexError(f"row {row} out of range")
        if not lines:
            return
        self._lines[row:row] = lines
        self._cache[row:row] = [None] * len(lines)
        self._retokenize(row, row + len(lines) - 1)

    def remove_lines(self, first: int, last: int) -> None:
        """Remove rows *first* through *last* inclusive; the buffer keeps one line."""
        if not 0 <= first <= last < len(self._lines):
            raise IndexError(f"rows {first}..{last} out of range")
        del self._lines[first : last + 1]
        del self._cache[first : last + 1]
        if not self._lines:
            self._lines.append("")
            self._cache.append(None)
        row = min(first, len(self._lines) - 1)
        self._retokenize(row, row)

    def replace(self, row: int, start: int, end: int, text: str) -> None:
        line = self._lines[row]
        self.set_line(row, line[:start] + text + line[end:])

    def apply(self, edit: Edit) -> None:
        self.replace(edit.row, edit.start_column, edit.end_column, edit.text)

    def _retokenize(self, first: int, last: int) -> None:
        self._brackets = None
        state = self.get_state(first)
        row = first
        while row < len(self._lines):
            previous = self._cache[row]
            entry = self._tokenizer.get_line_tokens(self._lines[row], state)
            self._cache[row] = entry
            if row >= last and previous is not None and previous.end_state == entry.end_state:
                break
            state = entry.end_state
            row += 1

    # ------------------------------------------------------------------
    # Bracket matching
    # ------------------------------------------------------------------

    def find_matching_bracket(self, position: BracketPosition) -> BracketPosition | None:
        """Return the partner of the bracket token at *position*, or None.

        Only bracket tokens count, so brackets inside strings and comments are
        never matched.
        """
        if self._brackets is None:
            self._brackets = _BracketIndex.build(self)
        return self._brackets.partner(position)


    def unmatched_brackets(self) -> list[BracketPosition]:
        """Bracket tokens without a partner, in document order."""
        if self._brackets is None:
            self._brackets = _BracketIndex.build(self)
        return [BracketPosition(row, col) for row, col in self._brackets.unmatched]


class _BracketIndex:
    """Partner map over all bracket tokens of a buffer."""

    def __init__(self) -> None:
        self.pairs: dict[tuple[int, int], tuple[int, int]] = {}
        self.unmatched: list[tuple[int, int]] = []

    @classmethod
    def build(cls, buffer: Buffer) -> _BracketIndex:
        index = cls()
        # One stack per bracket kind: a ")" only ever closes a "("
        stacks: dict[str, list[tuple[int, int]]] = {opener: [] for opener in BRACKET_PAIRS}
        for row in range(buffer.line_count):
            for tok in buffer.get_tokens(row):
                if tok.category not in _BRACKET_CATEGORIES:
                    continue
                key = (row, tok.start_column)
                if tok.lexeme in BRACKET_PAIRS:
                    stacks[tok.lexeme].append(key)
                    continue
                stack = stacks[CLOSING_BRACKETS[tok.lexeme]]
                if stack:
                    opener = stack.pop()
                    index.pairs[key] = opener
                    index.pairs[opener] = key
                else:
                    index.unmatched.append(key)
        for stack in stacks.values():
            index.unmatched.extend(stack)
        index.unmatched.sort()
        return index

    def partner(self, position: BracketPosition) -> BracketPosition | None:
        found = self.pairs.get((position.row, position.column))
        if found is None:
            return None
        return BracketPosition(*found)
