"""Link parsed fragments into a validated tree."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from .errors import (
    DuplicateSectionError,
    ParseError,
    UnknownDestinationError,
    UnknownSourceError,
)
from .grammar import Fragment, MappingFragment, SectionFragment
from .tree import Mapping, Section, Tree

logger = logging.getLogger(__name__)


class LinkContext:
    """Utility container for accumulating link errors."""

    def __init__(self) -> None:
        self.errors: List[ParseError] = []

    def add(self, error: ParseError) -> None:
        self.errors.append(error)

    def ok(self) -> bool:
        return not self.errors


def _split(fragments: Iterable[Fragment]) -> Tuple[List[SectionFragment], List[MappingFragment]]:
    sections: List[SectionFragment] = []
    mappings: List[MappingFragment] = []
    for fragment in fragments:
        if isinstance(fragment, MappingFragment):
            mappings.append(fragment)
        else:
            sections.append(fragment)
    return sections, mappings


def _build(
    fragments: Sequence[Fragment], ctx: LinkContext
) -> Dict[str, Tuple[SectionFragment, List[Mapping]]]:
    section_fragments, mapping_fragments = _split(fragments)

    table: Dict[str, Tuple[SectionFragment, List[Mapping]]] = {}
    for fragment in section_fragments:
        if fragment.name in table:
            ctx.add(DuplicateSectionError(fragment.name, fragment.offset))
            continue
        table[fragment.name] = (fragment, [])

    for fragment in mapping_fragments:
        if fragment.destination not in table:
            ctx.add(
                UnknownDestinationError(fragment.destination, fragment.triggers, fragment.parent)
            )
            continue
        if fragment.parent not in table:
            ctx.add(UnknownSourceError(fragment.parent, fragment.triggers, fragment.destination))
            continue
        table[fragment.parent][1].append(
            Mapping(
                triggers=fragment.triggers,
                description=fragment.description,
                destination=fragment.destination,
            )
        )
    return table


def validate_fragments(fragments: Sequence[Fragment]) -> List[ParseError]:
    """Return every link problem in ``fragments``, duplicates first."""
    ctx = LinkContext()
    _build(fragments, ctx)
    return ctx.errors


def link(fragments: Sequence[Fragment]) -> Tree:
    """Build the tree, raising the first link problem found.

    Sections are collected before any mapping is attached, so a mapping may
    point at a section declared further down the file.
    """
    ctx = LinkContext()
    table = _build(fragments, ctx)
    if not ctx.ok():
        raise ctx.errors[0]

    sections = {
        name: Section(name=name, description=fragment.description, mappings=tuple(mappings))
        for name, (fragment, mappings) in table.items()
    }
    logger.debug(
        "Linked %d sections with %d mappings",
        len(sections),
        sum(len(section.mappings) for section in sections.values()),
    )
    return Tree(sections)
