"""Authoring checks for linked trees.

None of these change how a session matches input; they only report
sections and mappings an author probably did not intend.
"""

from __future__ import annotations

import json
from collections import deque
from typing import Dict, List, Set

from .tree import Tree


def path(*parts: object) -> str:
    path_str = ""
    for part in parts:
        if isinstance(part, int):
            path_str = f"{path_str}[{part}]"
            continue
        if not isinstance(part, str):
            part = str(part)
        if part.isidentifier():
            path_str = f"{path_str}.{part}" if path_str else part
        else:
            path_str = f"{path_str}[{json.dumps(part)}]"
    return path_str


def format_warning(path_str: str, message: str) -> str:
    return f"{path_str}: {message}"


def shadowed_triggers(tree: Tree) -> List[str]:
    warnings: List[str] = []
    for name, section in tree.sections.items():
        claimed: Dict[str, int] = {}
        for index, mapping in enumerate(section.mappings):
            shadowed = 0
            for trigger_index, trigger in enumerate(mapping.triggers):
                owner = claimed.get(trigger)
                if owner is None:
                    claimed[trigger] = index
                    continue
                shadowed += 1
                if owner == index:
                    message = f"trigger '{trigger}' is repeated within the same mapping."
                else:
                    message = (
                        f"trigger '{trigger}' is already claimed by"
                        f" {path('sections', name, 'mappings', owner)}."
                    )
                warnings.append(
                    format_warning(
                        path("sections", name, "mappings", index, "triggers", trigger_index),
                        message,
                    )
                )
            if shadowed == len(mapping.triggers):
                warnings.append(
                    format_warning(
                        path("sections", name, "mappings", index),
                        f"mapping to '{mapping.destination}' can never be selected.",
                    )
                )
    return warnings


def build_graph(tree: Tree) -> Dict[str, List[str]]:
    return {
        name: [mapping.destination for mapping in section.mappings]
        for name, section in tree.sections.items()
    }


def traverse_from(start_node: str, graph: Dict[str, List[str]]) -> Set[str]:
    if start_node not in graph:
        return set()
    visited: Set[str] = set()
    queue: deque[str] = deque([start_node])
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        queue.extend(graph.get(current, []))
    return visited


def unreachable_sections(tree: Tree, start: str) -> List[str]:
    reached = traverse_from(start, build_graph(tree))
    return [name for name in tree if name not in reached]


def dead_ends(tree: Tree) -> List[str]:
    return [name for name, section in tree.sections.items() if section.is_dead_end]


def analyze_tree(tree: Tree, start: str) -> List[str]:
    warnings = shadowed_triggers(tree)
    if start not in tree:
        warnings.append(format_warning(path("sections"), f"start section '{start}' is not declared."))
        return warnings
    for name in unreachable_sections(tree, start):
        warnings.append(
            format_warning(
                path("sections", name),
                f"section is unreachable from start section '{start}'.",
            )
        )
    return warnings
