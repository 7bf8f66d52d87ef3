"""Traversal of a linked tree driven by trigger tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .tree import Mapping, Section, Tree

logger = logging.getLogger(__name__)

DEFAULT_START = "start"


class AdvanceResult(str, Enum):
    MOVED = "moved"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class Option:
    triggers: Tuple[str, ...]
    description: str


@dataclass(frozen=True)
class SectionView:
    """What a caller needs to display the current section."""

    name: str
    description: str
    options: Tuple[Option, ...]


@dataclass(frozen=True)
class Transition:
    source: str
    trigger: str
    destination: str


class Session:
    """Single cursor over a shared, read-only tree.

    ``history`` records every move and is unbounded unless ``history_limit``
    is given, in which case only the most recent moves are kept.
    """

    def __init__(
        self,
        tree: Tree,
        start_name: str = DEFAULT_START,
        history_limit: Optional[int] = None,
    ) -> None:
        if history_limit is not None and history_limit < 0:
            raise ValueError("history_limit must not be negative")
        self.tree = tree
        self._current: Section = tree.section(start_name)
        self.start_name = start_name
        self.history_limit = history_limit
        self.history: List[Transition] = []

    @property
    def section(self) -> Section:
        return self._current

    @property
    def is_dead_end(self) -> bool:
        return self._current.is_dead_end

    def current(self) -> SectionView:
        section = self._current
        return SectionView(
            name=section.name,
            description=section.description,
            options=tuple(
                Option(triggers=mapping.triggers, description=mapping.description)
                for mapping in section.mappings
            ),
        )

    def select(self, token: str) -> Optional[Tuple[Mapping, str]]:
        """Return the first mapping (and trigger) that ``token`` selects."""
        for mapping in self._current.mappings:
            trigger = mapping.matches(token)
            if trigger is not None:
                return mapping, trigger
        return None

    def advance(self, token: str) -> AdvanceResult:
        selected = self.select(token)
        if selected is None:
            logger.debug("No mapping in section '%s' for %r", self._current.name, token)
            return AdvanceResult.NO_MATCH
        mapping, trigger = selected
        source = self._current.name
        self._current = self.tree.section(mapping.destination)
        self.history.append(Transition(source, trigger, mapping.destination))
        if self.history_limit is not None and len(self.history) > self.history_limit:
            del self.history[: len(self.history) - self.history_limit]
        logger.debug("Moved %s -(%s)-> %s", source, trigger, mapping.destination)
        return AdvanceResult.MOVED


def start(tree: Tree, name: str = DEFAULT_START, *, history_limit: Optional[int] = None) -> Session:
    """Open a session at section ``name``; raises ``NoSuchSectionError``."""
    return Session(tree, name, history_limit)
