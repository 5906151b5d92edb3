"""Production implementation of the OS primitive layer.

RealFileSystem wraps ``os``, ``shutil`` and ``gzip``. It satisfies the
FileSystem protocol structurally and never classifies errors itself.
"""

from __future__ import annotations

import gzip
import os
import shutil
from pathlib import Path
from typing import IO, Any

from filekit.types import OpenOptions

# Chunk size used when a byte limit is given to copy_bytes
COPY_CHUNK_SIZE = 64 * 1024


class RealFileSystem:
    """Filesystem primitives backed by the running OS."""

    def read_link(self, path: Path) -> str:
        """Read the target of a symbolic link."""
        return os.readlink(path)

    def list_dir(self, path: Path) -> list[str]:
        """List directory entries."""
        return os.listdir(path)

    def make_dir(self, path: Path) -> None:
        """Create a single directory."""
        os.mkdir(path)

    def make_dirs(self, path: Path) -> None:
        """Create a directory and its parents."""
        os.makedirs(path, exist_ok=True)

    def make_symlink(self, target: str, link_path: Path) -> None:
        """Create a symbolic link."""
        os.symlink(target, link_path)

    def copy_bytes(
        self,
        source: Path,
        destination: Path,
        exclusive: bool = False,
        bytes_count: int | None = None,
    ) -> int:
        """Copy file content, optionally refusing to overwrite."""
        with open(source, "rb") as src, open(destination, "xb" if exclusive else "wb") as dst:
            if bytes_count is None:
                shutil.copyfileobj(src, dst)
                return dst.tell()
            remaining = bytes_count
            while remaining > 0:
                chunk = src.read(min(COPY_CHUNK_SIZE, remaining))
                if not chunk:
                    break
                dst.write(chunk)
                remaining -= len(chunk)
            return bytes_count - remaining

    def delete_file(self, path: Path) -> None:
        """Remove a file or symlink."""
        os.unlink(path)

    def delete_dir(self, path: Path) -> None:
        """Remove an empty directory."""
        os.rmdir(path)

    def stat(self, path: Path, follow_symlinks: bool = True) -> os.stat_result:
        """Read file status."""
        return os.stat(path, follow_symlinks=follow_symlinks)

    def access(self, path: Path, mode: int) -> bool:
        """Check access for the current process."""
        return os.access(path, mode)

    def set_mode(self, path: Path, mode: int) -> None:
        """Write permission bits."""
        os.chmod(path, mode)

    def set_times(self, path: Path, atime: float, mtime: float) -> None:
        """Write access and modification times."""
        os.utime(path, (atime, mtime))

    def set_owner(self, path: Path, uid: int, gid: int) -> None:
        """Write owner and group."""
        os.chown(path, uid, gid)

    def read_bytes(self, path: Path) -> bytes:
        """Read a whole file."""
        return Path(path).read_bytes()

    def write_bytes(self, path: Path, data: bytes, append: bool = False, exclusive: bool = False) -> None:
        """Write a whole file.

        ``exclusive`` wins over ``append``: the file must not exist.
        """
        mode = "xb" if exclusive else "ab" if append else "wb"
        with open(path, mode) as handle:
            handle.write(data)

    def open(self, path: Path, options: OpenOptions) -> IO[Any]:
        """Open a file according to resolved options."""
        mode = options.python_mode()
        if options.compressed:
            return gzip.open(path, mode, encoding=options.encoding)
        return open(path, mode, encoding=options.encoding)

    def read_line(self, handle: IO[Any]) -> str | bytes:
        """Read one line from an open handle."""
        return handle.readline()

    def close(self, handle: IO[Any]) -> None:
        """Close an open handle."""
        handle.close()

    def get_cwd(self) -> str:
        """Return the current working directory."""
        return os.getcwd()

    def set_cwd(self, path: Path) -> None:
        """Change the current working directory."""
        os.chdir(path)
