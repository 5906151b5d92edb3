"""Recursive copy engine.

Replicates a file, directory or symlink under a destination root, asking a
conflict callback whether existing destination entries may be replaced.
Symlinks are recreated rather than followed, so the walk cannot loop.

A failure stops the whole walk. Entries copied before the failure are
left in place and are not reported; the caller only sees the error.
"""

from __future__ import annotations

import errno
import logging
import os
import stat
from pathlib import Path
from typing import Callable

from filekit.config import ConflictCallback
from filekit.errors import ErrorKind, OperationAborted
from filekit.protocols import FileSystem
from filekit.result import Err, Ok, Result, classify

logger = logging.getLogger(__name__)


class Copier:
    """Copies files and directory trees through a FileSystem."""

    def __init__(
        self,
        filesystem: FileSystem,
        should_abort: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize the copier.

        Args:
            filesystem: Primitive layer used for every OS call.
            should_abort: Checked before each entry is visited. Returning
                True stops the walk with ``ErrorKind.CANCELLED``.
        """
        self.fs = filesystem
        self.should_abort = should_abort

    def copy_file(
        self,
        source: str | os.PathLike[str],
        destination: str | os.PathLike[str],
        on_conflict: ConflictCallback,
    ) -> Result[None]:
        """Copy a single file.

        If ``destination`` is a directory the file is copied to
        ``destination/basename(source)``.

        Args:
            source: File to copy.
            destination: Target file or directory.
            on_conflict: Called with (source, destination) when the target
                exists; True overwrites, False skips.

        Returns:
            Ok(None), or Err(IS_A_DIRECTORY) if source is a directory.
        """
        source = Path(source)
        destination = Path(destination)
        if self._is_dir(source):
            return Err(ErrorKind.IS_A_DIRECTORY)
        output = destination / source.name if self._is_dir(destination) else destination

        try:
            self._copy_regular(source, output, on_conflict, [])
        except OSError as e:
            logger.debug("Copy of %s to %s failed: %s", source, output, e)
            return classify(e)
        return Ok(None)

    def copy_tree(
        self,
        source: str | os.PathLike[str],
        destination: str | os.PathLike[str],
        on_conflict: ConflictCallback,
    ) -> Result[list[Path]]:
        """Copy ``source`` recursively, like ``cp -r``.

        When ``destination`` is an existing directory, or ``source`` is a
        directory, the copy lands at ``destination/basename(source)``.
        A source ending in ``/.`` copies the directory contents straight
        into ``destination``.

        Args:
            source: File, directory or symlink to copy.
            destination: Target root.
            on_conflict: Called with (source, destination) for every
                existing file or symlink; True overwrites, False skips.

        Returns:
            Ok with created paths in creation order, or the first error.
        """
        raw_source = os.fspath(source)
        source = Path(source)
        destination = Path(destination)

        try:
            target = self._resolve_target(raw_source, source, destination)
            copied: list[Path] = []
            self._walk(source, target, on_conflict, copied)
        except (OSError, OperationAborted) as e:
            logger.debug("Recursive copy of %s to %s failed: %s", source, destination, e)
            return classify(e)
        return Ok(copied)

    def _resolve_target(self, raw_source: str, source: Path, destination: Path) -> Path:
        if not (self._is_dir(destination) or self._is_dir(source)):
            target = destination
        elif os.path.basename(raw_source) == ".":
            target = destination
        else:
            target = destination / source.name
        self._check_not_nested(source, target)
        if target != destination:
            try:
                self.fs.make_dir(destination)
            except FileExistsError:
                pass
            except OSError as e:
                # Reported by the first copy into it
                logger.debug("Could not create %s: %s", destination, e)
        return target

    def _check_not_nested(self, source: Path, target: Path) -> None:
        """Refuse a target that is the source itself or lies inside it."""
        source_abs = os.path.abspath(source)
        target_abs = os.path.abspath(target)
        if os.path.commonpath([source_abs, target_abs]) == source_abs:
            raise OSError(
                errno.EINVAL, f"cannot copy {source} into itself", os.fspath(target)
            )

    def _walk(
        self,
        source: Path,
        destination: Path,
        on_conflict: ConflictCallback,
        copied: list[Path],
    ) -> None:
        # Pre-order, explicit stack
        pending = [(source, destination)]
        while pending:
            entry, target = pending.pop()
            if self.should_abort is not None and self.should_abort():
                raise OperationAborted(entry)

            link = self._read_link(entry)
            if link is not None:
                self._copy_link(link, entry, target, on_conflict, copied)
                continue

            try:
                children = self.fs.list_dir(entry)
            except NotADirectoryError:
                self._copy_regular(entry, target, on_conflict, copied)
                continue

            try:
                self.fs.make_dir(target)
            except FileExistsError:
                pass
            copied.append(target)
            logger.debug("Copying directory %s to %s", entry, target)

            # Reversed so children are visited in listing order
            pending.extend((entry / name, target / name) for name in reversed(children))

    def _copy_regular(
        self,
        source: Path,
        destination: Path,
        on_conflict: ConflictCallback,
        copied: list[Path],
    ) -> None:
        try:
            self.fs.copy_bytes(source, destination, exclusive=True)
        except FileExistsError:
            if not on_conflict(source, destination):
                logger.debug("Keeping existing %s", destination)
                return
            self._discard(destination)
            self.fs.copy_bytes(source, destination)
        self._copy_mode(source, destination)
        copied.append(destination)

    def _copy_link(
        self,
        link: str,
        source: Path,
        destination: Path,
        on_conflict: ConflictCallback,
        copied: list[Path],
    ) -> None:
        try:
            self.fs.make_symlink(link, destination)
        except FileExistsError:
            if not on_conflict(source, destination):
                logger.debug("Keeping existing %s", destination)
                return
            self._discard(destination)
            self.fs.make_symlink(link, destination)
        copied.append(destination)

    def _copy_mode(self, source: Path, destination: Path) -> None:
        mode = self.fs.stat(source).st_mode
        self.fs.set_mode(destination, stat.S_IMODE(mode))

    def _discard(self, path: Path) -> None:
        # The retried copy reports anything that makes this fail
        try:
            self.fs.delete_file(path)
        except OSError as e:
            logger.debug("Could not remove %s before overwrite: %s", path, e)

    def _read_link(self, path: Path) -> str | None:
        try:
            return self.fs.read_link(path)
        except OSError:
            return None

    def _is_dir(self, path: Path) -> bool:
        try:
            return stat.S_ISDIR(self.fs.stat(path).st_mode)
        except OSError:
            return False
