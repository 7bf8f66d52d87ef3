"""
dtree console runner
- Parses a .dtree file, then walks it from the start section.
- Each prompt reads one trigger; unknown input re-prompts.
- Sections without mappings end the run.
Usage: dtree story.dtree [--start NAME]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from .analysis import analyze_tree
from .errors import DTreeError, NoSuchSectionError, format_triggers
from .parser import load_tree
from .session import AdvanceResult, SectionView, start
from .settings import Settings, load_settings
from .tree import Tree

logger = logging.getLogger(__name__)

InputFunc = Callable[[str], str]
PrintFunc = Callable[..., None]


def emit_error(message: str) -> None:
    print(message, file=sys.stderr)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def format_option(triggers: Sequence[str], description: str) -> str:
    label = format_triggers(triggers)
    continuation = "\n" + " " * (len(label) + 1)
    return f"{label} " + description.replace("\n", continuation)


def render_view(view: SectionView, print_func: PrintFunc = print) -> None:
    print_func(view.description)
    for option in view.options:
        print_func(format_option(option.triggers, option.description))


def report_warnings(tree: Tree, start_section: str) -> None:
    for warning in analyze_tree(tree, start_section):
        emit_error(f"[!] {warning}")


def run(
    tree: Tree,
    settings: Settings,
    *,
    input_func: InputFunc = input,
    print_func: PrintFunc = print,
) -> int:
    """Drive a session until a dead end or end of input; returns an exit code."""
    session = start(tree, settings.start_section)
    while True:
        render_view(session.current(), print_func)
        if session.is_dead_end and settings.exit_on_dead_end:
            return 0
        try:
            token = input_func(settings.prompt)
        except EOFError:
            print_func("")
            return 0
        if session.advance(token) is AdvanceResult.NO_MATCH and settings.no_match_hint:
            print_func(settings.no_match_hint)


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="dtree", description="Walk a dtree decision file.")
    parser.add_argument("path", help="Path to the .dtree file.")
    parser.add_argument("--start", help="Section to begin at (default from settings).")
    parser.add_argument("--settings", help="Path to a JSON settings file.")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Parse the file and report warnings without running it.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    input_func: InputFunc = input,
    print_func: PrintFunc = print,
) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = load_settings(args.settings)
    if args.start:
        settings.start_section = args.start
    if args.verbose:
        settings.log_level = "DEBUG"
    settings.normalize()
    configure_logging(settings.log_level)

    try:
        tree = load_tree(args.path)
    except OSError as exc:
        emit_error(f"Failed to open file {args.path}: {exc}")
        return 1
    except DTreeError as exc:
        emit_error(f"Failed to parse {args.path}: {exc}")
        return 1
    logger.info("Loaded %d sections from %s", len(tree), args.path)

    if settings.show_warnings or args.check:
        report_warnings(tree, settings.start_section)
    if args.check:
        print_func(f"{args.path}: {len(tree)} sections parsed.")
        return 0

    try:
        return run(tree, settings, input_func=input_func, print_func=print_func)
    except NoSuchSectionError:
        emit_error(f"No start section '{settings.start_section}'.")
        return 1
    except KeyboardInterrupt:
        print_func("\n[Interrupted] Bye.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
