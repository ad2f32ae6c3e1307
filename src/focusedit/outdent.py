"""Re-indent a closing brace to line up with the line holding its opening brace."""

from __future__ import annotations

import re

from focusedit.buffer import Buffer
from focusedit.tokens import BracketPosition, Edit, leading_whitespace

_BLANK = re.compile(r"^\s+$")
_CLOSING_BRACE = re.compile(r"^(\s*)\}")


def check_outdent(line: str, text: str) -> bool:
    """Return True if typing *text* into the whitespace-only *line* closes a block."""
    if not _BLANK.match(line):
        return False
    return _CLOSING_BRACE.match(text) is not None


def outdent_edit(buffer: Buffer, row: int) -> Edit | None:
    """Compute the edit auto_outdent would make on *row*, without applying it."""
    m = _CLOSING_BRACE.match(buffer.get_line(row))
    if m is None:
        return None

    brace_column = m.end() - 1
    opener = buffer.find_matching_bracket(BracketPosition(row, brace_column))
    if opener is None or opener.row == row:
        return None

    indent = leading_whitespace(buffer.get_line(opener.row))
    if m.group(1) == indent:
        return None
    return Edit(row, 0, brace_column, indent)


def auto_outdent(buffer: Buffer, row: int) -> Edit | None:
    """Align the ``}`` starting *row* with its opening brace's line.

    Returns the applied edit, or None when nothing changed: the row does not
    start with a brace, no partner exists, the partner is on the same row, or
    the indentation is already right.
    """
    edit = outdent_edit(buffer, row)
    if edit is not None:
        buffer.apply(edit)
    return edit
