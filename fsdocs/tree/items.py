"""Display items for tree entries.

Hidden names (``.``/``__`` prefixes) are filtered here, when an entry is
turned into a display item, and not in ``TreeBuilder.get_children``. A hidden
directory therefore never shows up in its parent's listing but can still be
expanded when targeted directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..annotations import AnnotationTable, Tooltip
from ..file_system import Entry, FileType

HIDDEN_NAME_PREFIXES = (".", "__")

OPEN_COMMAND = "fsdocs.open"
FILE_CONTEXT_VALUE = "file"


class CollapsibleState(str, Enum):
    NONE = "none"
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


@dataclass(frozen=True)
class OpenCommand:
    """Action the host invokes when a file item is activated."""

    command: str
    title: str
    entry: Entry


@dataclass(frozen=True)
class TreeItem:
    entry: Entry
    label: str
    collapsible_state: CollapsibleState
    command: OpenCommand | None = None
    context_value: str | None = None
    description: str | None = None
    tooltip: Tooltip | None = None


def is_hidden_name(name: str) -> bool:
    return name.startswith(HIDDEN_NAME_PREFIXES)


def tree_item_for(entry: Entry, table: AnnotationTable | None = None) -> TreeItem | None:
    """Build the display item for ``entry``; ``None`` for hidden names."""
    name = entry.name
    if is_hidden_name(name):
        return None

    if entry.type is FileType.DIRECTORY:
        state = CollapsibleState.COLLAPSED
    else:
        state = CollapsibleState.NONE

    command: OpenCommand | None = None
    context_value: str | None = None
    if entry.type is FileType.FILE:
        command = OpenCommand(command=OPEN_COMMAND, title="Open File", entry=entry)
        context_value = FILE_CONTEXT_VALUE

    description: str | None = None
    tooltip: Tooltip | None = None
    if table is not None:
        description = table.describe(name)
        tooltip = table.tooltip(name)

    return TreeItem(
        entry=entry,
        label=name,
        collapsible_state=state,
        command=command,
        context_value=context_value,
        description=description,
        tooltip=tooltip,
    )


def visible_tree_items(entries: list[Entry], table: AnnotationTable | None = None) -> list[TreeItem]:
    """Return display items for ``entries`` in order, skipping hidden names."""
    items: list[TreeItem] = []
    for entry in entries:
        item = tree_item_for(entry, table)
        if item is not None:
            items.append(item)
    return items


__all__ = [
    "HIDDEN_NAME_PREFIXES",
    "OPEN_COMMAND",
    "CollapsibleState",
    "OpenCommand",
    "TreeItem",
    "is_hidden_name",
    "tree_item_for",
    "visible_tree_items",
]
