from dtree.analysis import (
    analyze_tree,
    build_graph,
    dead_ends,
    path,
    shadowed_triggers,
    traverse_from,
    unreachable_sections,
)
from dtree.parser import parse


def test_path_formats_sections_and_indices() -> None:
    assert path("sections", "start", "mappings", 1) == "sections.start.mappings[1]"
    assert path("sections", "a-b") == 'sections["a-b"]'


def test_shadowed_triggers_reports_unreachable_mapping() -> None:
    tree = parse(
        "[start] s\n"
        "[start (x) -> a] first\n"
        "[start (x) -> b] second\n"
        "[a] a\n"
        "[b] b\n"
    )
    warnings = shadowed_triggers(tree)
    assert warnings == [
        "sections.start.mappings[1].triggers[0]: trigger 'x' is already claimed by"
        " sections.start.mappings[0].",
        "sections.start.mappings[1]: mapping to 'b' can never be selected.",
    ]


def test_partially_shadowed_mapping_stays_selectable() -> None:
    tree = parse("[start] s\n[start (x) -> a] a\n[start (x)|(y) -> b] b\n[a] a\n[b] b\n")
    warnings = shadowed_triggers(tree)
    assert len(warnings) == 1
    assert "never be selected" not in warnings[0]


def test_repeated_trigger_within_mapping() -> None:
    tree = parse("[start] s\n[start (x)|(x) -> start] loop\n")
    warnings = shadowed_triggers(tree)
    assert warnings == [
        "sections.start.mappings[0].triggers[1]: trigger 'x' is repeated within the same mapping."
    ]


def test_unreachable_sections_and_dead_ends() -> None:
    tree = parse(
        "[start] s\n"
        "[start (go) -> middle] go\n"
        "[middle] m\n"
        "[middle (loop) -> start] loop\n"
        "[island] i\n"
        "[island (go) -> middle] go\n"
    )
    graph = build_graph(tree)
    assert graph["start"] == ["middle"]
    assert traverse_from("start", graph) == {"start", "middle"}
    assert traverse_from("missing", graph) == set()
    assert unreachable_sections(tree, "start") == ["island"]
    assert dead_ends(tree) == []


def test_analyze_tree_reports_missing_start() -> None:
    tree = parse("[intro] i\n")
    assert analyze_tree(tree, "start") == ["sections: start section 'start' is not declared."]


def test_analyze_tree_clean_tree_has_no_warnings() -> None:
    tree = parse("[start] s\n[start (end) -> done] finish\n[done] d\n")
    assert analyze_tree(tree, "start") == []
    assert dead_ends(tree) == ["done"]
