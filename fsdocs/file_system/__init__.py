"""Filesystem access layer.

This package contains the non-UI filesystem primitives:
- normalized error taxonomy and cooperative cancellation
- entry/stat/change-event datatypes
- async file operations built on ``aiofiles``
- watchdog-backed change notification translation
"""

from __future__ import annotations

from .errors import (
    CancellationToken,
    ErrorKind,
    FileExists,
    FileIsADirectory,
    FileNotFound,
    FileSystemError,
    NoPermissions,
    OperationCancelled,
    UnknownFileSystemError,
    check_cancellation,
    normalize_os_error,
)
from .provider import FileSystemProvider
from .types import ChangeEvent, ChangeType, Entry, FileStat, FileType
from .watch import WatchSubscription, classify_change, watch

__all__ = [
    "CancellationToken",
    "ErrorKind",
    "FileExists",
    "FileIsADirectory",
    "FileNotFound",
    "FileSystemError",
    "NoPermissions",
    "OperationCancelled",
    "UnknownFileSystemError",
    "check_cancellation",
    "normalize_os_error",
    "FileSystemProvider",
    "ChangeEvent",
    "ChangeType",
    "Entry",
    "FileStat",
    "FileType",
    "WatchSubscription",
    "classify_change",
    "watch",
]
