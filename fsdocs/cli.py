"""Command-line front door for fsdocs.

Parses CLI options, resolves the workspace root, loads the sidecar document,
then prints the annotated tree, one tooltip, or a live stream of changes.
"""

from __future__ import annotations

import argparse
import asyncio
import locale
import logging
import sys
from pathlib import Path

from .file_system import FileSystemError
from .highlight import highlight_markdown
from .render import format_change_event, render_tree_lines
from .settings import load_config_filename, load_log_level, load_style
from .ui_theme import theme_for
from .workspace import Workspace


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = load_log_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fsdocs",
        description="Print a directory tree annotated from its fsdocs.config.json sidecar document.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Workspace root. Defaults to current directory.")
    parser.add_argument("--config", default=None, help="Sidecar file name inside the root (default: fsdocs.config.json).")
    parser.add_argument("--depth", type=_positive_int, default=None, help="Directory levels to expand (default: all).")
    parser.add_argument("--describe", metavar="NAME", help="Print the Markdown tooltip for NAME and exit.")
    parser.add_argument("--watch", action="store_true", help="Stream create/change/delete events until interrupted.")
    parser.add_argument("--recursive", action="store_true", help="Watch subdirectories too (with --watch).")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Root-relative glob to ignore while watching (repeatable).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for --describe output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity.")
    return parser


async def _print_tree(workspace: Workspace, depth: int | None, no_color: bool) -> None:
    await workspace.refresh()
    for line in await render_tree_lines(workspace, max_depth=depth, theme=theme_for(no_color)):
        sys.stdout.write(line + "\n")


async def _print_tooltip(workspace: Workspace, name: str, style: str, no_color: bool) -> None:
    await workspace.refresh()
    tooltip = workspace.overlay.tooltip(name)
    if tooltip is None:
        raise SystemExit(f"Item '{name}' has no annotation")
    sys.stdout.write(highlight_markdown(tooltip.markdown, style, no_color))


async def _stream_changes(workspace: Workspace, recursive: bool, excludes: list[str], no_color: bool) -> None:
    await workspace.refresh()
    subscription = workspace.watch(recursive=recursive, excludes=excludes)
    if subscription is None:
        return
    theme = theme_for(no_color)
    async with subscription:
        async for event in workspace.follow_changes(subscription):
            sys.stdout.write(format_change_event(event, workspace.root, theme) + "\n")
            sys.stdout.flush()


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and run the requested fsdocs action.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    _configure_logging(args.verbose)
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logging.getLogger(__name__).debug("unsupported locale, using C collation")

    if default_path is None:
        default_path = Path.cwd()
    root = Path(args.path or default_path)
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")

    workspace = Workspace(root, config_filename=args.config or load_config_filename())
    no_color = args.no_color or not sys.stdout.isatty()

    try:
        if args.describe is not None:
            asyncio.run(_print_tooltip(workspace, args.describe, args.style or load_style(), no_color))
        elif args.watch:
            asyncio.run(_stream_changes(workspace, args.recursive, args.exclude, no_color))
        else:
            asyncio.run(_print_tree(workspace, args.depth, no_color))
    except FileSystemError as exc:
        raise SystemExit(f"fsdocs: {exc}") from exc
    except KeyboardInterrupt:
        return


if __name__ == "__main__":
    main()
