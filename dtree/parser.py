"""Public entry points for turning dtree source into a tree."""

from __future__ import annotations

from pathlib import Path

from .grammar import parse_fragments
from .linker import link
from .tree import Tree

BOM = "\ufeff"


def parse(text: str) -> Tree:
    """Parse and link ``text``.

    Raises a ``ParseError`` subclass on a syntax error, a duplicate section,
    or a mapping whose source or destination is not declared. Nothing is
    returned for partially valid input.
    """
    return link(parse_fragments(text))


def load_tree(path: Path | str) -> Tree:
    with open(path, "r", encoding="utf-8") as handle:
        text = handle.read()
    return parse(text.lstrip(BOM))
