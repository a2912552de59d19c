"""Async filesystem primitives with normalized errors.

Thin wrappers over ``aiofiles``. Every OS failure is re-raised as one of the
``FileSystemError`` kinds from ``errors``, so upper layers never inspect raw
``errno`` values. Directory names are NFC-normalized on macOS, where the
filesystem may hand back decomposed Unicode.
"""

from __future__ import annotations

import errno
import shutil
import sys
import unicodedata
from pathlib import Path

import aiofiles
import aiofiles.os

from .errors import normalize_os_error
from .types import FileStat

_rmtree = aiofiles.os.wrap(shutil.rmtree)

_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


def _needs_nfc() -> bool:
    return sys.platform == "darwin"


def normalize_nfc(name: str) -> str:
    """Return ``name`` in composed Unicode form where the platform needs it."""
    if not _needs_nfc():
        return name
    return unicodedata.normalize("NFC", name)


async def stat(path: Path, *, follow_symlinks: bool = True) -> FileStat:
    try:
        st = await aiofiles.os.stat(path, follow_symlinks=follow_symlinks)
    except OSError as exc:
        raise normalize_os_error(exc, path) from exc
    return FileStat.from_os_stat(st)


async def list_directory(path: Path) -> list[str]:
    """Return child names of ``path`` in OS order."""
    try:
        names = await aiofiles.os.listdir(path)
    except OSError as exc:
        raise normalize_os_error(exc, path) from exc
    return [normalize_nfc(name) for name in names]


async def read_file(path: Path) -> bytes:
    try:
        async with aiofiles.open(path, "rb") as handle:
            return await handle.read()
    except OSError as exc:
        raise normalize_os_error(exc, path) from exc


async def write_file(path: Path, content: bytes) -> None:
    """Write ``content`` to ``path``; the parent directory must already exist."""
    try:
        async with aiofiles.open(path, "wb") as handle:
            await handle.write(content)
    except OSError as exc:
        raise normalize_os_error(exc, path) from exc


async def create_directory(path: Path) -> None:
    """Create ``path`` and any missing parents; existing directories are fine."""
    try:
        await aiofiles.os.makedirs(path, exist_ok=True)
    except OSError as exc:
        raise normalize_os_error(exc, path) from exc


async def remove_recursive(path: Path) -> None:
    """Remove ``path`` and everything below it (plain files are removed too)."""
    try:
        st = await aiofiles.os.stat(path, follow_symlinks=False)
    except OSError as exc:
        raise normalize_os_error(exc, path) from exc
    try:
        if FileStat.from_os_stat(st).is_directory:
            await _rmtree(path)
        else:
            await aiofiles.os.remove(path)
    except OSError as exc:
        raise normalize_os_error(exc, path) from exc


async def remove_file(path: Path) -> None:
    try:
        await aiofiles.os.remove(path)
    except OSError as exc:
        raise normalize_os_error(exc, path) from exc


async def rename(old_path: Path, new_path: Path) -> None:
    try:
        await aiofiles.os.rename(old_path, new_path)
    except OSError as exc:
        raise normalize_os_error(exc, old_path) from exc


async def path_exists(path: Path) -> bool:
    """Return ``False`` only when ``path`` is positively known to be missing.

    Any other failure (permissions, I/O errors) counts as existing.
    """
    try:
        await aiofiles.os.stat(path)
    except OSError as exc:
        return exc.errno not in _NOT_FOUND_ERRNOS
    return True


__all__ = [
    "normalize_nfc",
    "stat",
    "list_directory",
    "read_file",
    "write_file",
    "create_directory",
    "remove_recursive",
    "remove_file",
    "rename",
    "path_exists",
]
