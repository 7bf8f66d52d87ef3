#!/usr/bin/env python3
"""Validate a dtree file for syntax, link and common authoring mistakes."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dtree.analysis import analyze_tree
from dtree.errors import DTreeSyntaxError
from dtree.grammar import parse_fragments
from dtree.linker import link, validate_fragments
from dtree.parser import BOM


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a dtree decision file.")
    parser.add_argument("tree_path", help="Path to the .dtree file.")
    parser.add_argument(
        "--start",
        default="start",
        help="Section used as the entry point for reachability checks.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str]) -> None:
    args = parse_args(argv[1:])
    tree_path = Path(args.tree_path).resolve()
    try:
        text = tree_path.read_text(encoding="utf-8").lstrip(BOM)
    except OSError as exc:
        print(f"Failed to read {tree_path}: {exc}")
        sys.exit(1)

    try:
        fragments = parse_fragments(text)
    except DTreeSyntaxError as exc:
        print(f"Syntax error in {tree_path}: {exc}")
        sys.exit(1)

    errors = validate_fragments(fragments)
    if errors:
        print("Validation failed (kind: message):")
        for err in errors:
            print(f" - {err.kind.value}: {err}")
        sys.exit(1)

    warnings = analyze_tree(link(fragments), args.start)
    if warnings:
        print("Authoring warnings (path: message):")
        for warning in warnings:
            print(f" - {warning}")

    print(f"Validation passed for {tree_path}.")


if __name__ == "__main__":
    main(sys.argv)
