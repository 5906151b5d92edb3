"""Error taxonomy and raising exceptions for filesystem operations.

Low-level primitives raise ``OSError``. The facade classifies those into an
``ErrorKind`` and, for the raising API variants, wraps them in one of the
exceptions below so callers always know which action failed and on which
path(s).
"""

from __future__ import annotations

import errno as errno_codes
import os
from enum import Enum
from pathlib import Path

__all__ = [
    "CopyError",
    "ErrorKind",
    "FileError",
    "FilekitError",
    "IteratorError",
    "OperationAborted",
    "describe",
]


class ErrorKind(str, Enum):
    """Classified reason for a failed filesystem operation."""

    NOT_FOUND = "enoent"
    ALREADY_EXISTS = "eexist"
    NOT_A_DIRECTORY = "enotdir"
    IS_A_DIRECTORY = "eisdir"
    PERMISSION_DENIED = "eacces"
    NO_SPACE = "enospc"
    INVALID_NAME = "einval"
    NOT_EMPTY = "enotempty"
    CANCELLED = "cancelled"
    OTHER = "other"

    @classmethod
    def from_errno(cls, code: int | None) -> ErrorKind:
        """Map a raw errno value to its kind.

        Args:
            code: errno value from an ``OSError``, or None.

        Returns:
            The matching kind, ``OTHER`` when the code is unknown.
        """
        if code is None:
            return cls.OTHER
        return _ERRNO_KINDS.get(code, cls.OTHER)


_ERRNO_KINDS: dict[int, ErrorKind] = {
    errno_codes.ENOENT: ErrorKind.NOT_FOUND,
    errno_codes.EEXIST: ErrorKind.ALREADY_EXISTS,
    errno_codes.ENOTDIR: ErrorKind.NOT_A_DIRECTORY,
    errno_codes.EISDIR: ErrorKind.IS_A_DIRECTORY,
    errno_codes.EACCES: ErrorKind.PERMISSION_DENIED,
    errno_codes.EPERM: ErrorKind.PERMISSION_DENIED,
    errno_codes.ENOSPC: ErrorKind.NO_SPACE,
    errno_codes.EINVAL: ErrorKind.INVALID_NAME,
    errno_codes.ENAMETOOLONG: ErrorKind.INVALID_NAME,
    errno_codes.ENOTEMPTY: ErrorKind.NOT_EMPTY,
}

_KIND_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "no such file or directory",
    ErrorKind.ALREADY_EXISTS: "file already exists",
    ErrorKind.NOT_A_DIRECTORY: "not a directory",
    ErrorKind.IS_A_DIRECTORY: "illegal operation on a directory",
    ErrorKind.PERMISSION_DENIED: "permission denied",
    ErrorKind.NO_SPACE: "no space left on device",
    ErrorKind.INVALID_NAME: "invalid argument",
    ErrorKind.NOT_EMPTY: "directory not empty",
    ErrorKind.CANCELLED: "operation cancelled",
    ErrorKind.OTHER: "unknown error",
}


def describe(reason: ErrorKind, errno: int | None = None) -> str:
    """Human readable description of an error kind.

    The OS description wins when the raw errno is known.
    """
    if errno is not None:
        return os.strerror(errno).lower()
    return _KIND_DESCRIPTIONS[reason]


class FilekitError(Exception):
    """Base class for raised filesystem errors."""

    def __init__(self, reason: ErrorKind, errno: int | None = None) -> None:
        self.reason = reason
        self.errno = errno
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return describe(self.reason, self.errno)


class FileError(FilekitError):
    """An action on a single path failed.

    Attributes:
        reason: Classified error kind.
        action: Verb describing what was attempted, e.g. "read file".
        path: Path involved, None for path-less actions such as cwd.
        errno: Raw errno value when known.
    """

    def __init__(
        self,
        reason: ErrorKind,
        action: str,
        path: str | os.PathLike[str] | None = None,
        errno: int | None = None,
    ) -> None:
        self.action = action
        self.path = os.fspath(path) if path is not None else None
        super().__init__(reason, errno)

    @property
    def message(self) -> str:
        target = f" {self.path}" if self.path is not None else ""
        return f"could not {self.action}{target}: {describe(self.reason, self.errno)}"


class CopyError(FilekitError):
    """A copy between two paths failed."""

    def __init__(
        self,
        reason: ErrorKind,
        action: str,
        source: str | os.PathLike[str],
        destination: str | os.PathLike[str],
        errno: int | None = None,
    ) -> None:
        self.action = action
        self.source = os.fspath(source)
        self.destination = os.fspath(destination)
        super().__init__(reason, errno)

    @property
    def message(self) -> str:
        return (
            f"could not {self.action} from {self.source} to {self.destination}: "
            f"{describe(self.reason, self.errno)}"
        )


class IteratorError(FilekitError):
    """Reading the next line from a file iterator failed."""

    @property
    def message(self) -> str:
        return f"error during file iteration: {describe(self.reason, self.errno)}"


class OperationAborted(Exception):
    """Raised inside a tree walk when its abort check fires."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"walk aborted before {path}")
