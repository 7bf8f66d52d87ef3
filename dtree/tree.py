"""Linked decision tree data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping as MappingType, Optional, Tuple

from .errors import NoSuchSectionError


@dataclass(frozen=True)
class Mapping:
    """An edge out of a section, selected by any of its triggers.

    ``destination`` is a section name, looked up in the owning tree when the
    edge is followed.
    """

    triggers: Tuple[str, ...]
    description: str
    destination: str

    def matches(self, token: str) -> Optional[str]:
        for trigger in self.triggers:
            if trigger == token:
                return trigger
        return None


@dataclass(frozen=True)
class Section:
    name: str
    description: str
    mappings: Tuple[Mapping, ...] = ()

    @property
    def is_dead_end(self) -> bool:
        return not self.mappings


@dataclass(frozen=True)
class Tree:
    """All sections of a parsed file, keyed by name in declaration order."""

    sections: MappingType[str, Section] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.sections, MappingProxyType):
            object.__setattr__(self, "sections", MappingProxyType(dict(self.sections)))

    def __contains__(self, name: object) -> bool:
        return name in self.sections

    def __iter__(self) -> Iterator[str]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def names(self) -> Tuple[str, ...]:
        return tuple(self.sections)

    def get(self, name: str) -> Optional[Section]:
        return self.sections.get(name)

    def section(self, name: str) -> Section:
        try:
            return self.sections[name]
        except KeyError:
            raise NoSuchSectionError(name) from None
