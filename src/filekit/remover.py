"""Recursive delete engine.

Removes a tree bottom-up: every child of a directory is removed before the
directory itself. Symlinks are removed, never followed. Paths that vanish
during the walk are treated as already removed.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import Callable

from filekit.errors import OperationAborted
from filekit.protocols import FileSystem
from filekit.result import Ok, Result, classify

logger = logging.getLogger(__name__)


class Remover:
    """Removes files and directory trees through a FileSystem."""

    def __init__(
        self,
        filesystem: FileSystem,
        should_abort: Callable[[], bool] | None = None,
    ) -> None:
        self.fs = filesystem
        self.should_abort = should_abort

    def remove_tree(self, path: str | os.PathLike[str]) -> Result[list[Path]]:
        """Remove ``path`` and everything below it, like ``rm -rf``.

        A missing path is not an error. Nothing is restored when the walk
        fails halfway.

        Args:
            path: File, symlink or directory to remove.

        Returns:
            Ok with removed paths in removal order, or the first error.
        """
        path = Path(path)
        removed: list[Path] = []
        try:
            self._walk(path, removed)
        except (OSError, OperationAborted) as e:
            logger.debug("Recursive removal of %s failed: %s", path, e)
            return classify(e)
        return Ok(removed)

    def _walk(self, root: Path, removed: list[Path]) -> None:
        # Post-order, explicit stack: a directory is pushed back marked as
        # expanded below its children and removed once they are gone
        pending: list[tuple[Path, bool]] = [(root, False)]
        while pending:
            path, expanded = pending.pop()
            if expanded:
                self._remove_dir(path, removed)
                continue

            if self.should_abort is not None and self.should_abort():
                raise OperationAborted(path)

            try:
                children = self._list_real_dir(path)
            except FileNotFoundError:
                continue
            except NotADirectoryError:
                self._remove_file(path, removed)
                continue

            pending.append((path, True))
            # Reversed so children are visited in listing order
            pending.extend((path / name, False) for name in reversed(children))

    def _remove_file(self, path: Path, removed: list[Path]) -> None:
        try:
            self.fs.delete_file(path)
        except FileNotFoundError:
            return
        removed.append(path)

    def _remove_dir(self, path: Path, removed: list[Path]) -> None:
        try:
            self.fs.delete_dir(path)
        except FileNotFoundError:
            logger.debug("Directory %s disappeared before removal", path)
            return
        removed.append(path)

    def _list_real_dir(self, path: Path) -> list[str]:
        """List a directory, refusing to descend through symlinks."""
        try:
            self.fs.read_link(path)
        except OSError:
            return self.fs.list_dir(path)
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(path))
