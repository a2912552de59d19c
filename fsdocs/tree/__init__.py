"""Tree construction: lazy child listing plus display-item policy."""

from __future__ import annotations

from .build import TreeBuilder, entry_sort_key, sort_entries
from .items import (
    CollapsibleState,
    OpenCommand,
    TreeItem,
    is_hidden_name,
    tree_item_for,
    visible_tree_items,
)

__all__ = [
    "TreeBuilder",
    "entry_sort_key",
    "sort_entries",
    "CollapsibleState",
    "OpenCommand",
    "TreeItem",
    "is_hidden_name",
    "tree_item_for",
    "visible_tree_items",
]
