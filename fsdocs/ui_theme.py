"""ANSI palettes for the annotated tree printer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    tree_marker: str
    tree_dir: str
    tree_file_python: str
    tree_file_default: str
    tree_description: str
    event_created: str
    event_changed: str
    event_deleted: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file_python="\033[38;5;110m",
    tree_file_default="\033[38;5;252m",
    tree_description="\033[2;38;5;250m",
    event_created="\033[38;5;42m",
    event_changed="\033[38;5;214m",
    event_deleted="\033[38;5;203m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    tree_marker="",
    tree_dir="",
    tree_file_python="",
    tree_file_default="",
    tree_description="",
    event_created="",
    event_changed="",
    event_deleted="",
)


def theme_for(no_color: bool) -> UITheme:
    return PLAIN_THEME if no_color else DEFAULT_THEME


__all__ = ["UITheme", "DEFAULT_THEME", "PLAIN_THEME", "theme_for"]
