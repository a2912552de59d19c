"""Lazy child listing with deterministic ordering."""

from __future__ import annotations

import locale
from pathlib import Path

from ..file_system import CancellationToken, Entry, FileSystemProvider


def entry_sort_key(entry: Entry) -> tuple[bool, str, str]:
    """Directories first, then locale-aware name order with a stable tie-break."""
    return (not entry.is_directory, locale.strxfrm(entry.name.casefold()), entry.name)


def sort_entries(entries: list[Entry]) -> list[Entry]:
    return sorted(entries, key=entry_sort_key)


class TreeBuilder:
    """Produce child entries for tree expansion.

    Nothing is cached between calls: each expansion re-lists and re-stats, so
    a node's kind always reflects the filesystem at expansion time.
    """

    def __init__(self, provider: FileSystemProvider, root: Path | None = None) -> None:
        self.provider = provider
        self.root = root

    async def get_children(
        self,
        entry: Entry | None = None,
        token: CancellationToken | None = None,
    ) -> list[Entry]:
        if entry is not None:
            directory = entry.path
        elif self.root is not None:
            directory = self.root
        else:
            return []

        children = await self.provider.read_directory(directory, token)
        return sort_entries([Entry(directory / name, file_type) for name, file_type in children])


__all__ = ["TreeBuilder", "entry_sort_key", "sort_entries"]
