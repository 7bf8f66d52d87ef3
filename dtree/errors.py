"""Error kinds and exception hierarchy for dtree."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple


class ErrorKind(str, Enum):
    SYNTAX = "syntax"
    DUPLICATE_SECTION = "duplicate_section"
    UNKNOWN_DESTINATION = "unknown_destination"
    UNKNOWN_SOURCE = "unknown_source"
    NO_SUCH_SECTION = "no_such_section"


def format_triggers(triggers: Sequence[str]) -> str:
    return "|".join(f"({trigger})" for trigger in triggers)


class DTreeError(Exception):
    """Base class for dtree failures."""

    kind: ErrorKind


class ParseError(ValueError, DTreeError):
    """Raised when source text cannot be turned into a tree."""


class DTreeSyntaxError(ParseError):
    """Raised when text matches neither a section nor a mapping declaration.

    The position is approximate: ``offset``, ``line`` and ``column`` point at
    the first non-blank character of the entry that failed, not at the
    character where matching stopped.
    """

    kind = ErrorKind.SYNTAX

    def __init__(self, offset: int, line: int, column: int, excerpt: str = "") -> None:
        self.offset = offset
        self.line = line
        self.column = column
        self.excerpt = excerpt
        message = f"line {line}, column {column}: expected a section or mapping declaration"
        if excerpt:
            message = f"{message} near {excerpt!r}"
        super().__init__(message)


class DuplicateSectionError(ParseError):
    kind = ErrorKind.DUPLICATE_SECTION

    def __init__(self, name: str, offset: int | None = None) -> None:
        self.name = name
        self.offset = offset
        super().__init__(f"section '{name}' already has a description")


class UnknownDestinationError(ParseError):
    kind = ErrorKind.UNKNOWN_DESTINATION

    def __init__(self, destination: str, triggers: Sequence[str], source: str) -> None:
        self.destination = destination
        self.triggers: Tuple[str, ...] = tuple(triggers)
        self.source = source
        super().__init__(
            f"destination '{destination}' for mapping {format_triggers(self.triggers)}"
            f" -> {destination} in section '{source}' does not exist"
        )


class UnknownSourceError(ParseError):
    kind = ErrorKind.UNKNOWN_SOURCE

    def __init__(self, source: str, triggers: Sequence[str], destination: str) -> None:
        self.source = source
        self.triggers: Tuple[str, ...] = tuple(triggers)
        self.destination = destination
        super().__init__(
            f"section '{source}' does not exist, and a mapping"
            f" {format_triggers(self.triggers)} -> {destination} was created for it"
        )


class NoSuchSectionError(KeyError, DTreeError):
    """Raised when a caller asks for a section the tree does not declare."""

    kind = ErrorKind.NO_SUCH_SECTION

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"no section named '{self.name}'"
