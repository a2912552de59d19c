"""Workspace composition: one root, its sidecar document, tree, and overlay.

This is the glue a host UI talks to. It resolves the sidecar path, reloads
annotations on refresh, and turns expansions into decorated display items.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable
from pathlib import Path

from .annotations import AnnotationTable, ConfigurationOverlay
from .file_system import (
    CancellationToken,
    ChangeEvent,
    Entry,
    FileSystemProvider,
    FileType,
    WatchSubscription,
    fs,
)
from .settings import DEFAULT_CONFIG_FILENAME
from .tree import TreeBuilder, TreeItem, visible_tree_items

logger = logging.getLogger(__name__)


class MissingAnnotation(LookupError):
    """Raised when a label is requested for a name without an annotation."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Item '{name}' has no label")


class Workspace:
    def __init__(
        self,
        root: Path | None,
        *,
        config_filename: str = DEFAULT_CONFIG_FILENAME,
        provider: FileSystemProvider | None = None,
        overlay: ConfigurationOverlay | None = None,
    ) -> None:
        self.root = root.resolve() if root is not None else None
        self.config_filename = config_filename
        self.provider = provider or FileSystemProvider()
        self.overlay = overlay or ConfigurationOverlay()
        self.tree = TreeBuilder(self.provider, self.root)

    @property
    def config_path(self) -> Path | None:
        if self.root is None:
            return None
        return self.root / self.config_filename

    async def config_exists(self) -> bool:
        config_path = self.config_path
        if config_path is None:
            return False
        return await fs.path_exists(config_path)

    async def refresh(self) -> AnnotationTable | None:
        """Reload the sidecar document; without a root there is nothing to load."""
        config_path = self.config_path
        if config_path is None:
            self.overlay.clear()
            return None
        return await self.overlay.load_file(config_path, self.provider)

    async def get_children(self, entry: Entry | None = None, token: CancellationToken | None = None) -> list[Entry]:
        return await self.tree.get_children(entry, token)

    async def tree_items(self, entry: Entry | None = None, token: CancellationToken | None = None) -> list[TreeItem]:
        """Expand ``entry`` (or the root) into visible, annotated display items."""
        children = await self.get_children(entry, token)
        # One snapshot for the whole listing, even if a reload lands meanwhile.
        return visible_tree_items(children, self.overlay.table)

    def root_entry(self) -> Entry | None:
        if self.root is None:
            return None
        return Entry(self.root, FileType.DIRECTORY)

    def name_for(self, entry: Entry) -> str:
        return entry.name

    def label_for(self, name: str) -> str:
        label = self.overlay.label_for(name)
        if label is None:
            raise MissingAnnotation(name)
        return label

    def watch(self, *, recursive: bool = False, excludes: Iterable[str] = ()) -> WatchSubscription | None:
        if self.root is None:
            return None
        return self.provider.watch(self.root, recursive=recursive, excludes=excludes)

    async def follow_changes(self, subscription: WatchSubscription) -> AsyncIterator[ChangeEvent]:
        """Re-yield ``subscription`` events, reloading annotations when the sidecar changes."""
        config_path = self.config_path
        async for event in subscription:
            if config_path is not None and event.path == config_path:
                logger.info("config file %s, reloading", event.type.value)
                await self.refresh()
            yield event


__all__ = ["MissingAnnotation", "Workspace"]
