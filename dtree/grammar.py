"""Grammar productions that split dtree source text into unlinked fragments.

Two declarations are recognised::

    [name] description text
    [name (trigger)|(trigger2) -> dest] description text

A backslash escapes ``)`` inside a trigger label and the line break inside a
description. Fragments carry no graph semantics; the linker checks names.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple, Union

from .errors import DTreeSyntaxError
from .lexer import (
    Cursor,
    EndOfInput,
    NoMatch,
    accept,
    escaped_until,
    expect,
    identifier,
    skip_space,
    skip_whitespace,
)

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 24


@dataclass(frozen=True)
class SectionFragment:
    name: str
    description: str
    offset: int = 0


@dataclass(frozen=True)
class MappingFragment:
    parent: str
    triggers: Tuple[str, ...]
    destination: str
    description: str
    offset: int = 0


Fragment = Union[SectionFragment, MappingFragment]


def description_text(cursor: Cursor) -> str:
    return escaped_until(cursor, "\n")


def trigger_group(cursor: Cursor) -> str:
    skip_space(cursor)
    expect(cursor, "(")
    label = escaped_until(cursor, ")")
    expect(cursor, ")")
    skip_space(cursor)
    return label


def trigger_list(cursor: Cursor) -> Tuple[str, ...]:
    triggers = [trigger_group(cursor)]
    while accept(cursor, "|"):
        triggers.append(trigger_group(cursor))
    return tuple(triggers)


def _open_declaration(cursor: Cursor) -> Tuple[int, str]:
    skip_whitespace(cursor)
    offset = cursor.pos
    expect(cursor, "[")
    skip_space(cursor)
    name = identifier(cursor)
    skip_space(cursor)
    return offset, name


def _close_declaration(cursor: Cursor) -> str:
    expect(cursor, "]")
    skip_space(cursor)
    return description_text(cursor)


def section_declaration(cursor: Cursor) -> SectionFragment:
    branch = cursor.branch()
    offset, name = _open_declaration(branch)
    description = _close_declaration(branch)
    cursor.commit(branch)
    return SectionFragment(name=name, description=description, offset=offset)


def mapping_declaration(cursor: Cursor) -> MappingFragment:
    branch = cursor.branch()
    offset, parent = _open_declaration(branch)
    triggers = trigger_list(branch)
    expect(branch, "->")
    skip_space(branch)
    destination = identifier(branch)
    skip_space(branch)
    description = _close_declaration(branch)
    cursor.commit(branch)
    return MappingFragment(
        parent=parent,
        triggers=triggers,
        destination=destination,
        description=description,
        offset=offset,
    )


def _syntax_error(cursor: Cursor) -> DTreeSyntaxError:
    probe = cursor.branch()
    skip_whitespace(probe)
    line, column = probe.location()
    excerpt = probe.remaining()[:EXCERPT_LENGTH].split("\n", 1)[0]
    return DTreeSyntaxError(probe.pos, line, column, excerpt)


def parse_fragments(text: str) -> List[Fragment]:
    """Split ``text`` into section and mapping fragments in source order.

    Mapping is tried before section at every position because both start
    with ``[name``. Input that ends partway through a declaration stops the
    scan without an error.
    """
    cursor = Cursor(text)
    fragments: List[Fragment] = []
    while True:
        try:
            fragments.append(mapping_declaration(cursor))
            continue
        except EndOfInput:
            break
        except NoMatch:
            pass
        try:
            fragments.append(section_declaration(cursor))
        except EndOfInput:
            break
        except NoMatch:
            raise _syntax_error(cursor) from None

    tail = cursor.remaining()
    if tail.strip():
        line, column = cursor.location()
        logger.warning(
            "Ignoring incomplete declaration at line %d, column %d: %r",
            line,
            column,
            tail.strip()[:EXCERPT_LENGTH],
        )
    logger.debug(
        "Parsed %d fragments (%d sections, %d mappings)",
        len(fragments),
        sum(isinstance(fragment, SectionFragment) for fragment in fragments),
        sum(isinstance(fragment, MappingFragment) for fragment in fragments),
    )
    return fragments
