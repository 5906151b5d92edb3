"""Tests for filesystem abstraction."""

from __future__ import annotations

import gzip
import os
from pathlib import Path

import pytest

from filekit.filesystem import RealFileSystem
from filekit.protocols import FileSystem
from filekit.types import OpenOptions


class TestRealFileSystem:
    """Tests for RealFileSystem implementation."""

    def test_satisfies_protocol(self) -> None:
        """Test structural conformance."""
        assert isinstance(RealFileSystem(), FileSystem)

    def test_list_dir(self, samples: Path) -> None:
        """Test listing directory entries."""
        fs = RealFileSystem()

        assert sorted(fs.list_dir(samples)) == ["1.txt", "sub"]

    def test_list_dir_on_file(self, samples: Path) -> None:
        """Test listing a file raises NotADirectoryError."""
        fs = RealFileSystem()

        with pytest.raises(NotADirectoryError):
            fs.list_dir(samples / "1.txt")

    def test_read_link_on_regular_file(self, samples: Path) -> None:
        """A regular file is not a link."""
        fs = RealFileSystem()

        with pytest.raises(OSError):
            fs.read_link(samples / "1.txt")

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_make_and_read_symlink(self, tmp_path: Path) -> None:
        """Test creating a link and reading its target."""
        fs = RealFileSystem()
        link = tmp_path / "link"

        fs.make_symlink("target.txt", link)

        assert fs.read_link(link) == "target.txt"

    def test_make_dir(self, tmp_path: Path) -> None:
        """Test creating a single directory."""
        fs = RealFileSystem()

        fs.make_dir(tmp_path / "one")

        assert (tmp_path / "one").is_dir()
        with pytest.raises(FileExistsError):
            fs.make_dir(tmp_path / "one")

    def test_make_dirs(self, tmp_path: Path) -> None:
        """Test creating nested directories."""
        fs = RealFileSystem()

        fs.make_dirs(tmp_path / "a" / "b")
        fs.make_dirs(tmp_path / "a" / "b")

        assert (tmp_path / "a" / "b").is_dir()

    def test_copy_bytes(self, tmp_path: Path, nested_tree: Path) -> None:
        """Test copying a whole file."""
        fs = RealFileSystem()
        target = tmp_path / "copy"

        copied = fs.copy_bytes(nested_tree / "dir" / "c", target)

        assert copied == 9
        assert target.read_bytes() == b"\x00charlie\xff"

    def test_copy_bytes_exclusive(self, samples: Path) -> None:
        """Exclusive copy refuses an existing destination."""
        fs = RealFileSystem()

        with pytest.raises(FileExistsError):
            fs.copy_bytes(samples / "1.txt", samples / "sub" / "2.txt", exclusive=True)

        assert (samples / "sub" / "2.txt").read_text() == "b"

    def test_copy_bytes_limit_beyond_size(self, tmp_path: Path, samples: Path) -> None:
        """A limit larger than the file copies everything."""
        fs = RealFileSystem()

        assert fs.copy_bytes(samples / "1.txt", tmp_path / "x", bytes_count=100) == 1

    def test_delete_file_and_dir(self, samples: Path) -> None:
        """Test primitive deletion."""
        fs = RealFileSystem()

        fs.delete_file(samples / "sub" / "2.txt")
        fs.delete_dir(samples / "sub")

        assert not (samples / "sub").exists()

    def test_delete_dir_not_empty(self, samples: Path) -> None:
        """Test removing a populated directory."""
        fs = RealFileSystem()

        with pytest.raises(OSError):
            fs.delete_dir(samples)

    def test_stat_without_following(self, samples: Path) -> None:
        """Test lstat semantics."""
        fs = RealFileSystem()

        assert fs.stat(samples / "1.txt", follow_symlinks=False).st_size == 1

    def test_set_mode_and_times(self, samples: Path) -> None:
        """Test writing metadata."""
        fs = RealFileSystem()
        target = samples / "1.txt"

        fs.set_mode(target, 0o600)
        fs.set_times(target, 10, 20)

        assert int(target.stat().st_mtime) == 20
        if os.name != "nt":
            assert target.stat().st_mode & 0o777 == 0o600

    def test_access(self, samples: Path) -> None:
        """Test access checks on an existing and a missing file."""
        fs = RealFileSystem()

        assert fs.access(samples / "1.txt", os.R_OK) is True
        assert fs.access(samples / "missing", os.R_OK) is False

    def test_write_bytes_append_exclusive(self, samples: Path) -> None:
        """Exclusive is honoured together with append."""
        fs = RealFileSystem()

        with pytest.raises(FileExistsError):
            fs.write_bytes(samples / "1.txt", b"z", append=True, exclusive=True)

        assert (samples / "1.txt").read_text() == "a"

    def test_write_and_read_bytes(self, tmp_path: Path) -> None:
        """Test whole-file helpers."""
        fs = RealFileSystem()
        target = tmp_path / "data"

        fs.write_bytes(target, b"ab")
        fs.write_bytes(target, b"cd", append=True)

        assert fs.read_bytes(target) == b"abcd"

    def test_write_bytes_exclusive(self, samples: Path) -> None:
        """Test exclusive whole-file writes."""
        fs = RealFileSystem()

        with pytest.raises(FileExistsError):
            fs.write_bytes(samples / "1.txt", b"z", exclusive=True)

    def test_open_read_line_close(self, three_line_file: Path) -> None:
        """Test reading lines through an open handle."""
        fs = RealFileSystem()

        handle = fs.open(three_line_file, OpenOptions.from_modes([]))
        first = fs.read_line(handle)
        fs.close(handle)

        assert first == b"one\n"
        assert handle.closed

    def test_open_compressed(self, tmp_path: Path) -> None:
        """Test opening a gzip file for text reading."""
        fs = RealFileSystem()
        target = tmp_path / "lines.gz"
        with gzip.open(target, "wb") as f:
            f.write(b"zipped\n")

        handle = fs.open(target, OpenOptions.from_modes(["compressed", "utf8"]))
        try:
            assert fs.read_line(handle) == "zipped\n"
        finally:
            fs.close(handle)

    def test_cwd(self, in_tmp_path: Path, samples: Path) -> None:
        """Test reading and setting the working directory."""
        fs = RealFileSystem()

        fs.set_cwd(samples)

        assert Path(fs.get_cwd()).resolve() == samples.resolve()
