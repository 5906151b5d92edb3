"""Tests for shared data types and configuration."""

from __future__ import annotations

import os
import stat
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from filekit.config import ConflictPolicy, FilesConfig, always_overwrite, never_overwrite
from filekit.types import FileAccess, FileMode, FileStat, FileType, OpenOptions


class TestOpenOptions:
    """Tests for OpenOptions resolution."""

    def test_default_is_binary_read(self) -> None:
        """No modes means read in binary."""
        options = OpenOptions.from_modes([])

        assert options.read
        assert options.binary
        assert options.python_mode() == "rb"

    @pytest.mark.parametrize(
        ("modes", "expected"),
        [
            (["write"], "wb"),
            (["append"], "ab"),
            (["exclusive"], "xb"),
            (["append", "exclusive"], "xb"),
            (["read", "write"], "r+b"),
            (["read", "append"], "a+b"),
            (["write", "utf8"], "w"),
            (["utf8"], "r"),
            (["compressed"], "rb"),
            (["write", "compressed", "utf8"], "wt"),
        ],
    )
    def test_python_mode(self, modes: list[str], expected: str) -> None:
        """Test the mode string for common combinations."""
        assert OpenOptions.from_modes(modes).python_mode() == expected

    def test_utf8_uses_encoding(self) -> None:
        """Test the text encoding."""
        assert OpenOptions.from_modes([FileMode.UTF8], encoding="latin-1").encoding == "latin-1"

    def test_exclusive_compressed_is_valid(self) -> None:
        """Exclusive implies writing, not reading."""
        options = OpenOptions.from_modes(["exclusive", "compressed"])

        assert not options.read
        assert options.write

    def test_compressed_read_write_rejected(self) -> None:
        """Test the compressed read-write combination."""
        with pytest.raises(ValidationError):
            OpenOptions.from_modes(["read", "write", "compressed"])

    def test_unknown_mode(self) -> None:
        """Test an unknown mode name."""
        with pytest.raises(ValueError):
            OpenOptions.from_modes(["sideways"])


class TestFileType:
    """Tests for FileType.from_mode."""

    def test_modes(self) -> None:
        """Test mapping mode bits to types."""
        assert FileType.from_mode(stat.S_IFREG | 0o644) is FileType.REGULAR
        assert FileType.from_mode(stat.S_IFDIR | 0o755) is FileType.DIRECTORY
        assert FileType.from_mode(stat.S_IFLNK | 0o777) is FileType.SYMLINK
        assert FileType.from_mode(stat.S_IFCHR) is FileType.DEVICE
        assert FileType.from_mode(stat.S_IFIFO) is FileType.OTHER


class TestFileAccess:
    """Tests for FileAccess.from_flags."""

    def test_flags(self) -> None:
        """Test combining read and write permission."""
        assert FileAccess.from_flags(readable=True, writable=True) is FileAccess.READ_WRITE
        assert FileAccess.from_flags(readable=True, writable=False) is FileAccess.READ
        assert FileAccess.from_flags(readable=False, writable=True) is FileAccess.WRITE
        assert FileAccess.from_flags(readable=False, writable=False) is FileAccess.NONE


class TestFileStat:
    """Tests for FileStat."""

    def test_from_stat_result(self, tmp_path: Path) -> None:
        """Test building from os.stat output."""
        path = tmp_path / "f.txt"
        path.write_bytes(b"12345")
        os.utime(path, (100, 200))

        info = FileStat.from_stat_result(os.stat(path), time="posix")

        assert info.size == 5
        assert info.type is FileType.REGULAR
        assert (info.atime, info.mtime) == (100, 200)
        assert info.mtime_timestamp == 200.0

    def test_permissions_strip_type_bits(self) -> None:
        """Test permission bits."""
        info = FileStat(
            size=0,
            type=FileType.REGULAR,
            atime=0,
            mtime=0,
            ctime=0,
            mode=stat.S_IFREG | 0o640,
        )

        assert info.permissions == 0o640

    def test_datetime_timestamps(self) -> None:
        """Test converting datetime fields back to timestamps."""
        when = datetime(2021, 5, 6, tzinfo=timezone.utc)
        info = FileStat(size=0, type=FileType.REGULAR, atime=when, mtime=when, ctime=when, mode=0)

        assert info.atime_timestamp == when.timestamp()

    def test_frozen(self) -> None:
        """Test immutability."""
        info = FileStat(size=0, type=FileType.REGULAR, atime=0, mtime=0, ctime=0, mode=0)

        with pytest.raises(ValidationError):
            info.size = 1


class TestFilesConfig:
    """Tests for FilesConfig and conflict policies."""

    def test_defaults(self) -> None:
        """Test default configuration."""
        config = FilesConfig()

        assert config.conflict_policy is ConflictPolicy.OVERWRITE
        assert config.default_modes == []
        assert config.encoding == "utf-8"
        assert config.stat_time == "local"

    def test_policy_callbacks(self) -> None:
        """Test resolving policies to callbacks."""
        assert ConflictPolicy.OVERWRITE.callback() is always_overwrite
        assert ConflictPolicy.SKIP.callback() is never_overwrite

    def test_from_strings(self) -> None:
        """Test validation from plain values."""
        config = FilesConfig(conflict_policy="skip", default_modes=["utf8"], stat_time="posix")

        assert config.conflict_policy is ConflictPolicy.SKIP
        assert config.default_modes == [FileMode.UTF8]

    def test_invalid_time_format(self) -> None:
        """Test rejecting an unknown time format."""
        with pytest.raises(ValidationError):
            FilesConfig(stat_time="lunar")
