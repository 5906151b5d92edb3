"""Protocol definitions for the OS primitive layer.

Everything filekit does is expressed as a sequence of calls on a
``FileSystem``. Designing to this interface enables:
- Substituting test doubles that inject failures or record call order
- Keeping the recursive engines free of direct ``os`` calls

Every primitive raises ``OSError`` (or a subclass such as
``FileExistsError``) on failure; classification into error kinds happens
above this layer.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO, Any, Protocol, runtime_checkable

from filekit.types import OpenOptions

__all__ = ["FileSystem"]


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for OS-level filesystem primitives."""

    def read_link(self, path: Path) -> str:
        """Read the target of a symbolic link.

        Args:
            path: Path to the link.

        Returns:
            The link target exactly as stored.

        Raises:
            OSError: If the path is not a symlink or does not exist.
        """
        ...

    def list_dir(self, path: Path) -> list[str]:
        """List the names of the immediate children of a directory.

        Args:
            path: Directory to list.

        Returns:
            Child names in the order the OS reports them.

        Raises:
            NotADirectoryError: If the path is not a directory.
            FileNotFoundError: If the path does not exist.
        """
        ...

    def make_dir(self, path: Path) -> None:
        """Create a single directory.

        Raises:
            FileExistsError: If the path already exists.
        """
        ...

    def make_dirs(self, path: Path) -> None:
        """Create a directory and any missing parents.

        An existing directory is not an error.
        """
        ...

    def make_symlink(self, target: str, link_path: Path) -> None:
        """Create ``link_path`` pointing at ``target``.

        Raises:
            FileExistsError: If ``link_path`` is occupied.
        """
        ...

    def copy_bytes(
        self,
        source: Path,
        destination: Path,
        exclusive: bool = False,
        bytes_count: int | None = None,
    ) -> int:
        """Copy file content from ``source`` to ``destination``.

        Args:
            source: File to read.
            destination: File to write, truncated if it exists.
            exclusive: Fail with ``FileExistsError`` if destination exists.
            bytes_count: Maximum number of bytes to copy, None for all.

        Returns:
            Number of bytes copied.
        """
        ...

    def delete_file(self, path: Path) -> None:
        """Remove a file or symlink."""
        ...

    def delete_dir(self, path: Path) -> None:
        """Remove an empty directory.

        Raises:
            OSError: With ``ENOTEMPTY`` if the directory has entries.
        """
        ...

    def stat(self, path: Path, follow_symlinks: bool = True) -> os.stat_result:
        """Read file status."""
        ...

    def access(self, path: Path, mode: int) -> bool:
        """Check access for the current process.

        Args:
            path: File to check.
            mode: ``os.R_OK``, ``os.W_OK`` or ``os.X_OK``.

        Returns:
            True if the access is allowed.
        """
        ...

    def set_mode(self, path: Path, mode: int) -> None:
        """Write permission bits."""
        ...

    def set_times(self, path: Path, atime: float, mtime: float) -> None:
        """Write access and modification times (POSIX seconds)."""
        ...

    def set_owner(self, path: Path, uid: int, gid: int) -> None:
        """Write owner and group."""
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read a whole file."""
        ...

    def write_bytes(self, path: Path, data: bytes, append: bool = False, exclusive: bool = False) -> None:
        """Write a whole file, truncating unless ``append`` is set."""
        ...

    def open(self, path: Path, options: OpenOptions) -> IO[Any]:
        """Open a file according to resolved options."""
        ...

    def read_line(self, handle: IO[Any]) -> str | bytes:
        """Read one line, returning an empty value at end of stream."""
        ...

    def close(self, handle: IO[Any]) -> None:
        """Close a handle. Closing twice is allowed."""
        ...

    def get_cwd(self) -> str:
        """Return the current working directory."""
        ...

    def set_cwd(self, path: Path) -> None:
        """Change the current working directory."""
        ...
