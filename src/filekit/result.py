"""Two-variant result type returned by every tagged operation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from filekit.errors import CopyError, ErrorKind, FileError, OperationAborted

__all__ = ["Err", "Ok", "Result", "classify", "unwrap_copy", "unwrap_file"]

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the classified reason.

    Attributes:
        reason: Error kind.
        errno: Raw errno when the failure came from the OS, so that
            ``ErrorKind.OTHER`` never loses the original code.
    """

    reason: ErrorKind
    errno: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not isinstance(self.reason, ErrorKind):
            raise TypeError(f"reason must be an ErrorKind, got {self.reason!r}")

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise ValueError(f"called unwrap() on an error result: {self.reason.value}")


Result = Union[Ok[T], Err]


def classify(exc: BaseException) -> Err:
    """Convert an exception raised by a primitive into an ``Err``.

    Args:
        exc: ``OSError`` from the filesystem layer, ``OperationAborted``
            from a walk, or a decode error from a text handle.

    Returns:
        Err with the classified kind and the raw errno when available.
    """
    if isinstance(exc, OperationAborted):
        return Err(ErrorKind.CANCELLED)
    if isinstance(exc, OSError):
        return Err(ErrorKind.from_errno(exc.errno), exc.errno)
    return Err(ErrorKind.OTHER)


def unwrap_file(result: Result[T], action: str, path: str | os.PathLike[str] | None = None) -> T:
    """Return the value of ``result`` or raise ``FileError``.

    Args:
        result: Tagged result to unwrap.
        action: Verb for the error message, e.g. "remove file".
        path: Path the action was applied to.

    Returns:
        The wrapped value.

    Raises:
        FileError: If the result is an ``Err``.
    """
    if isinstance(result, Err):
        raise FileError(result.reason, action, path, result.errno)
    return result.value


def unwrap_copy(
    result: Result[T],
    action: str,
    source: str | os.PathLike[str],
    destination: str | os.PathLike[str],
) -> T:
    """Return the value of ``result`` or raise ``CopyError``."""
    if isinstance(result, Err):
        raise CopyError(result.reason, action, source, destination, result.errno)
    return result.value
