"""Normalized filesystem error taxonomy.

Every OS failure raised by the access layer is funneled through
``normalize_os_error`` so callers only ever see the closed set of kinds
below. ``UNKNOWN`` keeps the original errno name for diagnostics.
"""

from __future__ import annotations

import errno
from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Closed set of error kinds surfaced by the filesystem layer."""

    NOT_FOUND = "not_found"
    IS_A_DIRECTORY = "is_a_directory"
    ALREADY_EXISTS = "already_exists"
    PERMISSION_DENIED = "permission_denied"
    UNKNOWN = "unknown"


_KIND_BY_ERRNO: dict[int, ErrorKind] = {
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.ENOTDIR: ErrorKind.NOT_FOUND,
    errno.EISDIR: ErrorKind.IS_A_DIRECTORY,
    errno.EEXIST: ErrorKind.ALREADY_EXISTS,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
}

_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "file not found",
    ErrorKind.IS_A_DIRECTORY: "file is a directory",
    ErrorKind.ALREADY_EXISTS: "file exists",
    ErrorKind.PERMISSION_DENIED: "no permissions",
    ErrorKind.UNKNOWN: "filesystem error",
}


class FileSystemError(Exception):
    """Base class for normalized filesystem failures."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, path: Path | str | None = None, code: str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self.code = code
        super().__init__(self._format())

    def _format(self) -> str:
        message = _MESSAGES[self.kind]
        if self.code and self.kind is ErrorKind.UNKNOWN:
            message = f"{message} ({self.code})"
        if self.path is not None:
            return f"{message}: {self.path}"
        return message


class FileNotFound(FileSystemError):
    kind = ErrorKind.NOT_FOUND


class FileIsADirectory(FileSystemError):
    kind = ErrorKind.IS_A_DIRECTORY


class FileExists(FileSystemError):
    kind = ErrorKind.ALREADY_EXISTS


class NoPermissions(FileSystemError):
    kind = ErrorKind.PERMISSION_DENIED


class UnknownFileSystemError(FileSystemError):
    kind = ErrorKind.UNKNOWN


_ERROR_CLASSES: dict[ErrorKind, type[FileSystemError]] = {
    ErrorKind.NOT_FOUND: FileNotFound,
    ErrorKind.IS_A_DIRECTORY: FileIsADirectory,
    ErrorKind.ALREADY_EXISTS: FileExists,
    ErrorKind.PERMISSION_DENIED: NoPermissions,
    ErrorKind.UNKNOWN: UnknownFileSystemError,
}


def error_kind_for_errno(code: int | None) -> ErrorKind:
    """Map a raw ``errno`` value onto the closed error taxonomy."""
    if code is None:
        return ErrorKind.UNKNOWN
    return _KIND_BY_ERRNO.get(code, ErrorKind.UNKNOWN)


def normalize_os_error(exc: OSError, path: Path | str | None = None) -> FileSystemError:
    """Translate an ``OSError`` into its normalized ``FileSystemError``.

    ``path`` defaults to the filename recorded on the exception.
    """
    kind = error_kind_for_errno(exc.errno)
    code = errno.errorcode.get(exc.errno, str(exc.errno)) if exc.errno is not None else None
    if path is None:
        path = exc.filename
    return _ERROR_CLASSES[kind](path, code)


class OperationCancelled(Exception):
    """Raised when a caller requested cancellation of a multi-step operation."""

    def __init__(self) -> None:
        super().__init__("Operation cancelled")


class CancellationToken:
    """Cooperative cancellation flag checked at natural suspension points."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


def check_cancellation(token: CancellationToken | None) -> None:
    """Raise ``OperationCancelled`` when ``token`` has been cancelled."""
    if token is not None and token.is_cancellation_requested:
        raise OperationCancelled()


__all__ = [
    "ErrorKind",
    "FileSystemError",
    "FileNotFound",
    "FileIsADirectory",
    "FileExists",
    "NoPermissions",
    "UnknownFileSystemError",
    "error_kind_for_errno",
    "normalize_os_error",
    "OperationCancelled",
    "CancellationToken",
    "check_cancellation",
]
