import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dtree.analysis import build_graph, dead_ends, traverse_from
from dtree.parser import load_tree


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: list_unreachable.py FILE [START]")
        raise SystemExit(2)
    tree_path = Path(sys.argv[1])
    start = sys.argv[2] if len(sys.argv) > 2 else "start"
    tree = load_tree(tree_path)
    graph = build_graph(tree)
    reached = traverse_from(start, graph)

    unreachable = [name for name in graph if name not in reached]

    print(f"Tree file: {tree_path}")
    print(f"Total sections: {len(graph)}")
    print(f"Reachable sections: {len(reached)}")
    print(f"Dead ends: {', '.join(dead_ends(tree)) or '-'}")
    if unreachable:
        print("Unreachable sections:")
        for name in unreachable:
            print(f"  - {name}")
    else:
        print(f"All sections reachable from '{start}'.")


if __name__ == "__main__":
    main()
