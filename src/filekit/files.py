"""Filesystem convenience API.

Every operation comes in two forms:

- ``op(...)`` returns ``Ok(value)`` or ``Err(reason)`` and never raises for
  OS failures, so callers can react to, say, a missing file.
- ``op_or_raise(...)`` returns the bare value or raises ``FileError`` /
  ``CopyError`` naming the action and path(s) that failed.

Example:
    >>> files = Files.create_default()
    >>> files.read("hello.txt")
    Ok(value=b'World')
    >>> files.read("missing.txt")
    Err(reason=<ErrorKind.NOT_FOUND: 'enoent'>, errno=2)
    >>> files.read_or_raise("missing.txt")
    Traceback (most recent call last):
    filekit.errors.FileError: could not read file missing.txt: no such file or directory
"""

from __future__ import annotations

import logging
import os
import stat as stat_codes
import time as time_module
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Callable, TypeVar, Union

from filekit.config import ConflictCallback, FilesConfig
from filekit.copier import Copier
from filekit.filesystem import RealFileSystem
from filekit.lines import BinaryLineIterator, LineIterator, TextLineIterator
from filekit.protocols import FileSystem
from filekit.remover import Remover
from filekit.result import Err, Ok, Result, classify, unwrap_copy, unwrap_file
from filekit.types import FileAccess, FileMode, FileStat, OpenOptions, TimeFormat

__all__ = ["Files", "StrPath"]

logger = logging.getLogger(__name__)

StrPath = Union[str, "os.PathLike[str]"]
T = TypeVar("T")

ModeList = Union[list[FileMode], list[str], tuple[str, ...], None]


class Files:
    """Facade over the filesystem primitives, copy and delete engines.

    Use factory methods ``create()`` or ``create_default()`` for
    construction; pass a test double as ``filesystem`` to avoid real I/O.
    """

    def __init__(
        self,
        filesystem: FileSystem,
        config: FilesConfig,
        should_abort: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize the facade with required dependencies.

        Args:
            filesystem: Primitive layer (required).
            config: Defaults for omitted arguments (required).
            should_abort: Optional check consulted between steps of
                ``cp_r`` and ``rm_rf``.
        """
        self.fs = filesystem
        self.config = config
        self.copier = Copier(filesystem, should_abort)
        self.remover = Remover(filesystem, should_abort)

    @classmethod
    def create(
        cls,
        filesystem: FileSystem | None = None,
        config: FilesConfig | None = None,
        should_abort: Callable[[], bool] | None = None,
    ) -> Files:
        """Factory method with optional default dependencies.

        Args:
            filesystem: Optional primitive layer (RealFileSystem if omitted).
            config: Optional configuration (defaults if omitted).
            should_abort: Optional abort check for recursive walks.

        Returns:
            Configured Files instance.
        """
        return cls(
            filesystem=filesystem or RealFileSystem(),
            config=config or FilesConfig(),
            should_abort=should_abort,
        )

    @classmethod
    def create_default(cls) -> Files:
        """Create a facade over the real filesystem with default config."""
        return cls.create()

    # ========================================================================
    # Predicates
    # ========================================================================

    def is_regular(self, path: StrPath) -> bool:
        """Return True if ``path`` is a regular file (symlinks followed)."""
        return self._has_type(path, stat_codes.S_ISREG)

    def is_dir(self, path: StrPath) -> bool:
        """Return True if ``path`` is a directory (symlinks followed)."""
        return self._has_type(path, stat_codes.S_ISDIR)

    def exists(self, path: StrPath) -> bool:
        """Return True if anything exists at ``path``.

        That includes sockets, pipes, devices and dangling symlinks.
        """
        try:
            self.fs.stat(Path(path), follow_symlinks=False)
        except OSError:
            return False
        return True

    # ========================================================================
    # Directories
    # ========================================================================

    def mkdir(self, path: StrPath) -> Result[None]:
        """Create a directory; the parent must exist."""
        return self._attempt(self.fs.make_dir, Path(path))

    def mkdir_or_raise(self, path: StrPath) -> None:
        unwrap_file(self.mkdir(path), "make directory", path)

    def mkdir_p(self, path: StrPath) -> Result[None]:
        """Create a directory and any missing parents.

        An existing directory is success; an existing file is
        ``ALREADY_EXISTS``.
        """
        return self._attempt(self.fs.make_dirs, Path(path))

    def mkdir_p_or_raise(self, path: StrPath) -> None:
        unwrap_file(self.mkdir_p(path), "make directory (with -p)", path)

    def ls(self, path: StrPath = ".") -> Result[list[str]]:
        """List entry names in a directory, in OS order."""
        return self._attempt(self.fs.list_dir, Path(path))

    def ls_or_raise(self, path: StrPath = ".") -> list[str]:
        return unwrap_file(self.ls(path), "list directory", path)

    def cwd(self) -> Result[str]:
        """Return the current working directory.

        This can fail on Unix when a parent directory is not readable.
        """
        return self._attempt(self.fs.get_cwd)

    def cwd_or_raise(self) -> str:
        return unwrap_file(self.cwd(), "get current working directory")

    def cd(self, path: StrPath) -> Result[None]:
        """Change the current working directory."""
        return self._attempt(self.fs.set_cwd, Path(path))

    def cd_or_raise(self, path: StrPath) -> None:
        unwrap_file(self.cd(path), "set current working directory to", path)

    @contextmanager
    def working_directory(self, path: StrPath) -> Iterator[Path]:
        """Run a block inside ``path``, restoring the previous directory.

        The previous directory is restored even if the block raises.

        Raises:
            FileError: If reading or changing the directory fails.
        """
        previous = self.cwd_or_raise()
        self.cd_or_raise(path)
        try:
            yield Path(path)
        finally:
            self.cd_or_raise(previous)

    # ========================================================================
    # Whole-file content
    # ========================================================================

    def read(self, path: StrPath) -> Result[bytes]:
        """Read the whole content of a file."""
        return self._attempt(self.fs.read_bytes, Path(path))

    def read_or_raise(self, path: StrPath) -> bytes:
        return unwrap_file(self.read(path), "read file", path)

    def write(self, path: StrPath, content: str | bytes, modes: ModeList = None) -> Result[None]:
        """Write ``content`` to ``path``, creating or truncating it.

        Args:
            path: File to write.
            content: Text is encoded with the configured encoding.
            modes: ``append`` to add to the end, ``exclusive`` to fail
                if the file exists.

        Returns:
            Ok(None) or the classified error.
        """
        flags = {FileMode(m) for m in modes or ()}
        data = content.encode(self.config.encoding) if isinstance(content, str) else content
        return self._attempt(
            self.fs.write_bytes,
            Path(path),
            data,
            append=FileMode.APPEND in flags,
            exclusive=FileMode.EXCLUSIVE in flags,
        )

    def write_or_raise(self, path: StrPath, content: str | bytes, modes: ModeList = None) -> None:
        unwrap_file(self.write(path, content, modes), "write to file", path)

    # ========================================================================
    # Metadata
    # ========================================================================

    def stat(self, path: StrPath, time: TimeFormat | None = None) -> Result[FileStat]:
        """Read file information.

        Args:
            path: File to inspect (symlinks followed).
            time: ``local``, ``universal`` or ``posix``; defaults to config.

        Returns:
            Ok(FileStat) or the classified error.
        """
        target = Path(path)
        try:
            result = self.fs.stat(target)
        except OSError as e:
            return classify(e)
        access = FileAccess.from_flags(
            readable=self.fs.access(target, os.R_OK),
            writable=self.fs.access(target, os.W_OK),
        )
        return Ok(
            FileStat.from_stat_result(
                result,
                access=access,
                time=time or self.config.stat_time,
            )
        )

    def stat_or_raise(self, path: StrPath, time: TimeFormat | None = None) -> FileStat:
        return unwrap_file(self.stat(path, time), "read file stats", path)

    def write_stat(self, path: StrPath, info: FileStat) -> Result[None]:
        """Write permissions, times and ownership from ``info``.

        Ownership is only written when it differs from the current one.
        """
        target = Path(path)
        try:
            self.fs.set_mode(target, info.permissions)
            self.fs.set_times(target, info.atime_timestamp, info.mtime_timestamp)
            current = self.fs.stat(target)
            if (current.st_uid, current.st_gid) != (info.uid, info.gid):
                self.fs.set_owner(target, info.uid, info.gid)
        except OSError as e:
            return classify(e)
        return Ok(None)

    def write_stat_or_raise(self, path: StrPath, info: FileStat) -> None:
        unwrap_file(self.write_stat(path, info), "write file stats", path)

    def touch(self, path: StrPath, time: datetime | float | None = None) -> Result[None]:
        """Set access and modification time, creating the file if missing.

        Args:
            path: File to touch.
            time: New time; now if omitted.
        """
        if time is None:
            timestamp = time_module.time()
        elif isinstance(time, datetime):
            timestamp = time.timestamp()
        else:
            timestamp = float(time)
        try:
            self.fs.set_times(Path(path), timestamp, timestamp)
        except FileNotFoundError:
            return self.write(path, b"")
        except OSError as e:
            return classify(e)
        return Ok(None)

    def touch_or_raise(self, path: StrPath, time: datetime | float | None = None) -> None:
        unwrap_file(self.touch(path, time), "touch", path)

    # ========================================================================
    # Copy
    # ========================================================================

    def copy(self, source: StrPath, destination: StrPath, bytes_count: int | None = None) -> Result[int]:
        """Copy file content, overwriting ``destination``.

        Args:
            source: File to read.
            destination: File to write.
            bytes_count: Maximum bytes to copy; everything if omitted.

        Returns:
            Ok with the number of bytes copied.
        """
        return self._attempt(
            self.fs.copy_bytes, Path(source), Path(destination), bytes_count=bytes_count
        )

    def copy_or_raise(self, source: StrPath, destination: StrPath, bytes_count: int | None = None) -> int:
        return unwrap_copy(self.copy(source, destination, bytes_count), "copy", source, destination)

    def cp(
        self,
        source: StrPath,
        destination: StrPath,
        on_conflict: ConflictCallback | None = None,
    ) -> Result[None]:
        """Copy a file, keeping its permission bits.

        If ``destination`` is a directory the file goes to
        ``destination/basename(source)``. Directories are rejected with
        ``IS_A_DIRECTORY``; use ``cp_r`` for those.

        Args:
            source: File to copy.
            destination: Target file or directory.
            on_conflict: Overwrite decision for an existing target;
                resolved from the config when omitted.
        """
        return self.copier.copy_file(source, destination, self._conflict_callback(on_conflict))

    def cp_or_raise(
        self,
        source: StrPath,
        destination: StrPath,
        on_conflict: ConflictCallback | None = None,
    ) -> None:
        unwrap_copy(self.cp(source, destination, on_conflict), "copy", source, destination)

    def cp_r(
        self,
        source: StrPath,
        destination: StrPath,
        on_conflict: ConflictCallback | None = None,
    ) -> Result[list[Path]]:
        """Copy recursively, like ``cp -r``.

        ``cp_r("samples", "tmp")`` copies into ``tmp/samples``;
        ``cp_r("samples/.", "tmp")`` copies the contents into ``tmp``.

        On failure the destination is left dirty: entries copied so far
        stay on disk and only the error is returned.

        Returns:
            Ok with every file, directory and symlink created.
        """
        return self.copier.copy_tree(source, destination, self._conflict_callback(on_conflict))

    def cp_r_or_raise(
        self,
        source: StrPath,
        destination: StrPath,
        on_conflict: ConflictCallback | None = None,
    ) -> list[Path]:
        return unwrap_copy(
            self.cp_r(source, destination, on_conflict), "copy recursively", source, destination
        )

    # ========================================================================
    # Remove
    # ========================================================================

    def rm(self, path: StrPath) -> Result[None]:
        """Remove a file or symlink."""
        return self._attempt(self.fs.delete_file, Path(path))

    def rm_or_raise(self, path: StrPath) -> None:
        unwrap_file(self.rm(path), "remove file", path)

    def rmdir(self, path: StrPath) -> Result[None]:
        """Remove an empty directory."""
        return self._attempt(self.fs.delete_dir, Path(path))

    def rmdir_or_raise(self, path: StrPath) -> None:
        unwrap_file(self.rmdir(path), "remove directory", path)

    def rm_rf(self, path: StrPath) -> Result[list[Path]]:
        """Remove files and directories recursively.

        Symlinks are removed, not followed. A missing path gives
        ``Ok([])``.
        """
        return self.remover.remove_tree(path)

    def rm_rf_or_raise(self, path: StrPath) -> list[Path]:
        return unwrap_file(
            self.rm_rf(path), "remove files and directories recursively from", path
        )

    # ========================================================================
    # Handles and iteration
    # ========================================================================

    def open(self, path: StrPath, modes: ModeList = None) -> Result[IO[Any]]:
        """Open a file.

        Args:
            path: File to open.
            modes: Mode names (see ``FileMode``); config defaults if omitted.

        Returns:
            Ok with the open handle. The caller owns it.
        """
        return self._attempt(self.fs.open, Path(path), self._open_options(modes))

    def open_or_raise(self, path: StrPath, modes: ModeList = None) -> IO[Any]:
        return unwrap_file(self.open(path, modes), "open", path)

    def open_with(self, path: StrPath, modes: ModeList, function: Callable[[IO[Any]], T]) -> Result[T]:
        """Open a file, pass it to ``function`` and close it afterwards.

        The handle is closed whether or not ``function`` raises; its
        exceptions propagate unchanged.

        Returns:
            Ok with the function's return value, or the open error.
        """
        opened = self.open(path, modes)
        if isinstance(opened, Err):
            return opened
        handle = opened.value
        try:
            return Ok(function(handle))
        finally:
            self.fs.close(handle)

    def open_with_or_raise(
        self, path: StrPath, modes: ModeList, function: Callable[[IO[Any]], T]
    ) -> T:
        return unwrap_file(self.open_with(path, modes, function), "open", path)

    def close(self, target: IO[Any] | LineIterator) -> Result[None]:
        """Close a handle or a line iterator together with its handle."""
        if isinstance(target, LineIterator):
            return self._attempt(target.close)
        return self._attempt(self.fs.close, target)

    def iterator(self, path: StrPath, modes: ModeList = None) -> Result[TextLineIterator]:
        """Open ``path`` and iterate it line by line as text."""
        opened = self.open(path, modes)
        if isinstance(opened, Err):
            return opened
        return Ok(self.iterator_for(opened.value))

    def iterator_or_raise(self, path: StrPath, modes: ModeList = None) -> TextLineIterator:
        return unwrap_file(self.iterator(path, modes), "open", path)

    def iterator_for(self, handle: IO[Any]) -> TextLineIterator:
        """Wrap an already open handle; the iterator takes ownership."""
        return TextLineIterator(handle, self.fs, self.config.encoding)

    def biniterator(self, path: StrPath, modes: ModeList = None) -> Result[BinaryLineIterator]:
        """Open ``path`` and iterate it line by line as raw bytes."""
        opened = self.open(path, modes)
        if isinstance(opened, Err):
            return opened
        return Ok(self.biniterator_for(opened.value))

    def biniterator_or_raise(self, path: StrPath, modes: ModeList = None) -> BinaryLineIterator:
        return unwrap_file(self.biniterator(path, modes), "open", path)

    def biniterator_for(self, handle: IO[Any]) -> BinaryLineIterator:
        """Wrap an already open handle for raw iteration."""
        return BinaryLineIterator(handle, self.fs, self.config.encoding)

    # ========================================================================
    # Helpers
    # ========================================================================

    def _attempt(self, function: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
        try:
            return Ok(function(*args, **kwargs))
        except OSError as e:
            logger.debug("%s failed: %s", getattr(function, "__name__", function), e)
            return classify(e)

    def _has_type(self, path: StrPath, predicate: Callable[[int], bool]) -> bool:
        try:
            return predicate(self.fs.stat(Path(path)).st_mode)
        except OSError:
            return False

    def _conflict_callback(self, on_conflict: ConflictCallback | None) -> ConflictCallback:
        if on_conflict is not None:
            return on_conflict
        return self.config.conflict_policy.callback()

    def _open_options(self, modes: ModeList) -> OpenOptions:
        if modes is None:
            modes = self.config.default_modes
        return OpenOptions.from_modes(modes, encoding=self.config.encoding)

