"""Collaborator-facing filesystem provider.

Adds the create/overwrite policies for writes and renames on top of the raw
primitives in ``fs`` and exposes watching as a subscription.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from . import fs
from .errors import CancellationToken, FileExists, FileNotFound, check_cancellation
from .types import FileStat, FileType
from .watch import WatchSubscription, watch

logger = logging.getLogger(__name__)


class FileSystemProvider:
    """Stateless async facade over ``fs`` used by the tree and the CLI."""

    async def stat(self, path: Path) -> FileStat:
        return await fs.stat(path)

    async def read_directory(
        self,
        path: Path,
        token: CancellationToken | None = None,
    ) -> list[tuple[str, FileType]]:
        """Return ``(name, type)`` for each child of ``path``.

        Per-child stats are issued in listing order and awaited together.
        Children that vanish between listing and stat are dropped; any other
        stat failure propagates.
        """
        check_cancellation(token)
        names = await fs.list_directory(path)
        check_cancellation(token)
        results = await asyncio.gather(
            *(fs.stat(path / name) for name in names),
            return_exceptions=True,
        )

        children: list[tuple[str, FileType]] = []
        for name, result in zip(names, results):
            if isinstance(result, FileNotFound):
                logger.debug("dropping vanished entry %s", path / name)
                continue
            if isinstance(result, BaseException):
                raise result
            children.append((name, result.type))
        return children

    async def read_file(self, path: Path) -> bytes:
        return await fs.read_file(path)

    async def write_file(self, path: Path, content: bytes, *, create: bool = True, overwrite: bool = True) -> None:
        exists = await fs.path_exists(path)
        if not exists:
            if not create:
                raise FileNotFound(path)
            await fs.create_directory(path.parent)
        elif not overwrite:
            raise FileExists(path)
        await fs.write_file(path, content)

    async def create_directory(self, path: Path) -> None:
        await fs.create_directory(path)

    async def delete(self, path: Path, *, recursive: bool = True) -> None:
        if recursive:
            await fs.remove_recursive(path)
        else:
            await fs.remove_file(path)

    async def rename(self, old_path: Path, new_path: Path, *, overwrite: bool = False) -> None:
        if await fs.path_exists(new_path):
            if not overwrite:
                raise FileExists(new_path)
            await fs.remove_recursive(new_path)

        if not await fs.path_exists(new_path.parent):
            await fs.create_directory(new_path.parent)

        await fs.rename(old_path, new_path)

    def watch(self, path: Path, *, recursive: bool = False, excludes: Iterable[str] = ()) -> WatchSubscription:
        return watch(path, recursive=recursive, excludes=excludes)


__all__ = ["FileSystemProvider"]
