"""Lexer primitives for the dtree source format.

Positions count Unicode scalar values (``str`` indices), so a multi-byte
UTF-8 character is a single unit.
"""

from __future__ import annotations

import unicodedata
from typing import Tuple

SPACE_CHARS = frozenset(" \t")
WHITESPACE_CHARS = frozenset(" \t\r\n")
IDENTIFIER_PUNCTUATION = frozenset("_-")
# Combining marks are part of the Unicode Alphabetic property.
MARK_CATEGORIES = frozenset(("Mn", "Mc"))
ESCAPE = "\\"


class NoMatch(Exception):
    """The input at the cursor does not fit the production being tried."""


class EndOfInput(Exception):
    """The input ended before the production being tried could finish."""


class Cursor:
    """Read position over the source text.

    Productions work on a branch and ``commit`` it back on success, so a
    failed attempt leaves the parent where it started.
    """

    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    def branch(self) -> "Cursor":
        return Cursor(self.text, self.pos)

    def commit(self, branch: "Cursor") -> None:
        self.pos = branch.pos

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def remaining(self) -> str:
        return self.text[self.pos:]

    def location(self, pos: int | None = None) -> Tuple[int, int]:
        """Return the 1-based (line, column) of ``pos`` (default: the cursor)."""
        if pos is None:
            pos = self.pos
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        return line, column


def is_identifier_char(char: str) -> bool:
    if char.isalpha() or char.isnumeric() or char in IDENTIFIER_PUNCTUATION:
        return True
    return unicodedata.category(char) in MARK_CATEGORIES


def identifier(cursor: Cursor) -> str:
    start = cursor.pos
    text = cursor.text
    end = start
    while end < len(text) and is_identifier_char(text[end]):
        end += 1
    if end == start:
        if cursor.at_end():
            raise EndOfInput(f"input ended while expecting an identifier at offset {start}")
        raise NoMatch(f"expected an identifier at offset {start}")
    cursor.pos = end
    return text[start:end]


def escaped_until(cursor: Cursor, delimiter: str) -> str:
    """Consume text up to an unescaped ``delimiter`` and return it unescaped.

    ``\\`` followed by ``delimiter`` becomes a literal ``delimiter``; any other
    character is copied as is. The delimiter itself is left in place. Running
    out of input simply returns everything consumed so far.
    """
    text = cursor.text
    pos = cursor.pos
    out = []
    while pos < len(text):
        char = text[pos]
        if char == ESCAPE and text.startswith(delimiter, pos + 1):
            out.append(delimiter)
            pos += 1 + len(delimiter)
            continue
        if char == delimiter:
            break
        out.append(char)
        pos += 1
    cursor.pos = pos
    return "".join(out)


def _skip(cursor: Cursor, chars: frozenset) -> None:
    text = cursor.text
    pos = cursor.pos
    while pos < len(text) and text[pos] in chars:
        pos += 1
    cursor.pos = pos


def skip_space(cursor: Cursor) -> None:
    _skip(cursor, SPACE_CHARS)


def skip_whitespace(cursor: Cursor) -> None:
    _skip(cursor, WHITESPACE_CHARS)


def expect(cursor: Cursor, literal: str) -> None:
    rest = cursor.text[cursor.pos:cursor.pos + len(literal)]
    if rest == literal:
        cursor.pos += len(literal)
        return
    if literal.startswith(rest):
        raise EndOfInput(f"input ended while expecting {literal!r}")
    raise NoMatch(f"expected {literal!r} at offset {cursor.pos}")


def accept(cursor: Cursor, literal: str) -> bool:
    """Like ``expect`` but report a mismatch as ``False``."""
    try:
        expect(cursor, literal)
    except NoMatch:
        return False
    return True
