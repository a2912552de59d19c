"""Domain datatypes for filesystem entries, stat results, and change events."""

from __future__ import annotations

import stat as stat_module
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileType(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMBOLIC_LINK = "symbolic_link"
    UNKNOWN = "unknown"

    @classmethod
    def from_mode(cls, mode: int) -> FileType:
        """Derive the entry kind from an ``st_mode`` value."""
        if stat_module.S_ISREG(mode):
            return cls.FILE
        if stat_module.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat_module.S_ISLNK(mode):
            return cls.SYMBOLIC_LINK
        return cls.UNKNOWN


@dataclass(frozen=True)
class FileStat:
    """Read-only view of OS metadata observed at query time."""

    type: FileType
    size: int
    ctime_ns: int
    mtime_ns: int

    @classmethod
    def from_os_stat(cls, st) -> FileStat:
        return cls(
            type=FileType.from_mode(st.st_mode),
            size=int(st.st_size),
            ctime_ns=int(st.st_ctime_ns),
            mtime_ns=int(st.st_mtime_ns),
        )

    @property
    def is_file(self) -> bool:
        return self.type is FileType.FILE

    @property
    def is_directory(self) -> bool:
        return self.type is FileType.DIRECTORY


@dataclass(frozen=True)
class Entry:
    """One tree node: absolute path plus the kind observed when it was listed."""

    path: Path
    type: FileType

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_directory(self) -> bool:
        return self.type is FileType.DIRECTORY


class ChangeType(str, Enum):
    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


@dataclass(frozen=True)
class ChangeEvent:
    type: ChangeType
    path: Path


__all__ = [
    "FileType",
    "FileStat",
    "Entry",
    "ChangeType",
    "ChangeEvent",
]
