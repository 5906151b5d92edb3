"""Lazy line iteration over an open file handle.

A LineIterator takes exclusive ownership of a handle and yields one line
per pull. The handle is closed as soon as the end of the stream is seen,
a read fails, or ``close()`` is called; after that every pull reports
the end of iteration again. Iteration is single-pass.

Example:
    >>> with files.iterator_or_raise("README.md") as lines:
    ...     for line in lines:
    ...         print(line, end="")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import IO, Any, Generic, TypeVar

from filekit.errors import IteratorError
from filekit.protocols import FileSystem
from filekit.result import classify

logger = logging.getLogger(__name__)

__all__ = ["BinaryLineIterator", "IteratorState", "LineIterator", "TextLineIterator"]

LineT = TypeVar("LineT", str, bytes)


class IteratorState(str, Enum):
    """Lifecycle of a LineIterator."""

    OPEN = "open"
    READING = "reading"
    CLOSED = "closed"


class LineIterator(ABC, Generic[LineT]):
    """Pull-based, single-pass sequence of lines from a handle.

    Subclasses only decide how a raw line is turned into the payload.
    """

    def __init__(self, handle: IO[Any], filesystem: FileSystem, encoding: str = "utf-8") -> None:
        """Take ownership of ``handle``.

        Args:
            handle: Open file handle; nothing else may read it afterwards.
            filesystem: Primitive layer used to read lines and close.
            encoding: Encoding for converting between text and bytes.
        """
        self._handle: IO[Any] | None = handle
        self.fs = filesystem
        self.encoding = encoding
        self.state = IteratorState.OPEN

    @property
    def closed(self) -> bool:
        return self.state is IteratorState.CLOSED

    def pull(self) -> LineT | None:
        """Read the next line.

        Returns:
            The next line, or None once the stream is exhausted or closed.

        Raises:
            IteratorError: If reading fails. The handle is closed first.
        """
        if self._handle is None:
            return None
        self.state = IteratorState.READING
        try:
            raw = self.fs.read_line(self._handle)
            if not raw:
                self._release()
                return None
            return self._decode(raw)
        except (OSError, UnicodeError) as e:
            logger.debug("Line read failed, closing handle: %s", e)
            self._release()
            err = classify(e)
            raise IteratorError(err.reason, err.errno) from e

    def close(self) -> None:
        """Close the handle now, discarding unread data. Safe to repeat."""
        self._release()

    def __iter__(self) -> LineIterator[LineT]:
        return self

    def __next__(self) -> LineT:
        line = self.pull()
        if line is None:
            raise StopIteration
        return line

    def __enter__(self) -> LineIterator[LineT]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._release()

    def _release(self) -> None:
        handle, self._handle = self._handle, None
        self.state = IteratorState.CLOSED
        if handle is not None:
            self.fs.close(handle)

    @abstractmethod
    def _decode(self, raw: str | bytes) -> LineT:
        """Convert a raw line read from the handle into the payload."""
        ...


class TextLineIterator(LineIterator[str]):
    """Yields lines as ``str``, decoding binary handles."""

    def _decode(self, raw: str | bytes) -> str:
        if isinstance(raw, bytes):
            return raw.decode(self.encoding)
        return raw


class BinaryLineIterator(LineIterator[bytes]):
    """Yields lines as raw ``bytes``."""

    def _decode(self, raw: str | bytes) -> bytes:
        if isinstance(raw, str):
            return raw.encode(self.encoding)
        return raw
