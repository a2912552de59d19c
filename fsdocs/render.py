"""Plain-text/ANSI rendering of annotated trees and change events."""

from __future__ import annotations

import re
from pathlib import Path

from .file_system import CancellationToken, ChangeEvent, ChangeType
from .tree import CollapsibleState, TreeItem
from .ui_theme import DEFAULT_THEME, UITheme
from .workspace import Workspace

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def file_color_for(path: Path, theme: UITheme | None = None) -> str:
    active_theme = theme or DEFAULT_THEME
    if path.suffix.lower() in {".py", ".pyi", ".pyw"}:
        return active_theme.tree_file_python
    return active_theme.tree_file_default


def format_tree_item(item: TreeItem, depth: int, theme: UITheme | None = None) -> str:
    """Render one display item as an indented row with its description."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent = "  " * depth
    name = sanitize_terminal_text(item.label)
    if item.collapsible_state is CollapsibleState.NONE:
        row = f"{indent}  {file_color_for(item.entry.path, active_theme)}{name}{reset}"
    else:
        row = f"{indent}{active_theme.tree_marker}▸ {reset}{active_theme.tree_dir}{name}/{reset}"
    if item.description:
        row += f"  {active_theme.tree_description}{sanitize_terminal_text(item.description)}{reset}"
    return row


async def render_tree_lines(
    workspace: Workspace,
    *,
    max_depth: int | None = None,
    theme: UITheme | None = None,
    token: CancellationToken | None = None,
) -> list[str]:
    """Expand the workspace depth-first and render every visible row.

    ``max_depth`` bounds how many directory levels below the root are opened;
    ``None`` expands everything that is visible.
    """
    active_theme = theme or DEFAULT_THEME
    root = workspace.root_entry()
    if root is None:
        return []

    lines = [f"{active_theme.tree_dir}{sanitize_terminal_text(root.path.name or str(root.path))}/{active_theme.reset}"]

    async def expand(entry, depth: int) -> None:
        for item in await workspace.tree_items(entry, token):
            lines.append(format_tree_item(item, depth, active_theme))
            if item.collapsible_state is CollapsibleState.NONE:
                continue
            if max_depth is not None and depth + 1 >= max_depth:
                continue
            await expand(item.entry, depth + 1)

    await expand(root, 0)
    return lines


_EVENT_LABELS = {
    ChangeType.CREATED: "+",
    ChangeType.CHANGED: "~",
    ChangeType.DELETED: "-",
}


def format_change_event(event: ChangeEvent, root: Path, theme: UITheme | None = None) -> str:
    active_theme = theme or DEFAULT_THEME
    color = {
        ChangeType.CREATED: active_theme.event_created,
        ChangeType.CHANGED: active_theme.event_changed,
        ChangeType.DELETED: active_theme.event_deleted,
    }[event.type]
    try:
        shown = event.path.relative_to(root)
    except ValueError:
        shown = event.path
    return f"{color}{_EVENT_LABELS[event.type]} {sanitize_terminal_text(str(shown))}{active_theme.reset}"


__all__ = [
    "sanitize_terminal_text",
    "format_tree_item",
    "render_tree_lines",
    "format_change_event",
]
