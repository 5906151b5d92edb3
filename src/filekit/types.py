"""Shared data types for filekit."""

from __future__ import annotations

import os
import stat as stat_codes
from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

__all__ = ["FileAccess", "FileMode", "FileStat", "FileType", "OpenOptions", "TimeFormat"]

TimeFormat = Literal["local", "universal", "posix"]


class FileType(str, Enum):
    """Kind of filesystem entry."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    DEVICE = "device"
    OTHER = "other"

    @classmethod
    def from_mode(cls, mode: int) -> FileType:
        if stat_codes.S_ISREG(mode):
            return cls.REGULAR
        if stat_codes.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat_codes.S_ISLNK(mode):
            return cls.SYMLINK
        if stat_codes.S_ISCHR(mode) or stat_codes.S_ISBLK(mode):
            return cls.DEVICE
        return cls.OTHER


class FileAccess(str, Enum):
    """Access the current process has to a file."""

    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"
    NONE = "none"

    @classmethod
    def from_flags(cls, readable: bool, writable: bool) -> FileAccess:
        if readable and writable:
            return cls.READ_WRITE
        if readable:
            return cls.READ
        if writable:
            return cls.WRITE
        return cls.NONE


def _convert_time(timestamp: float, time: TimeFormat) -> datetime | int:
    if time == "posix":
        return int(timestamp)
    if time == "universal":
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return datetime.fromtimestamp(timestamp)


def _to_timestamp(value: datetime | int) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    return float(value)


class FileStat(BaseModel):
    """Information about a file, as reported by the OS.

    Times are ``datetime`` objects (local or UTC) or integer POSIX seconds,
    depending on the ``time`` argument given to ``from_stat_result``.
    """

    model_config = ConfigDict(frozen=True)

    size: int
    type: FileType
    access: FileAccess = FileAccess.NONE
    atime: datetime | int
    mtime: datetime | int
    ctime: datetime | int
    mode: int
    links: int = 1
    major_device: int = 0
    minor_device: int = 0
    inode: int = 0
    uid: int = 0
    gid: int = 0

    @classmethod
    def from_stat_result(
        cls,
        result: os.stat_result,
        access: FileAccess = FileAccess.NONE,
        time: TimeFormat = "local",
    ) -> FileStat:
        """Build a FileStat from ``os.stat`` output.

        Args:
            result: Raw stat result.
            access: Access computed for the path.
            time: Representation for atime/mtime/ctime.

        Returns:
            Populated FileStat.
        """
        rdev = getattr(result, "st_rdev", 0)
        is_device = stat_codes.S_ISCHR(result.st_mode) or stat_codes.S_ISBLK(result.st_mode)
        return cls(
            size=result.st_size,
            type=FileType.from_mode(result.st_mode),
            access=access,
            atime=_convert_time(result.st_atime, time),
            mtime=_convert_time(result.st_mtime, time),
            ctime=_convert_time(result.st_ctime, time),
            mode=result.st_mode,
            links=result.st_nlink,
            major_device=result.st_dev,
            minor_device=os.minor(rdev) if is_device and hasattr(os, "minor") else 0,
            inode=result.st_ino,
            uid=result.st_uid,
            gid=result.st_gid,
        )

    @property
    def permissions(self) -> int:
        """Permission bits only, suitable for chmod."""
        return stat_codes.S_IMODE(self.mode)

    @property
    def atime_timestamp(self) -> float:
        return _to_timestamp(self.atime)

    @property
    def mtime_timestamp(self) -> float:
        return _to_timestamp(self.mtime)


class FileMode(str, Enum):
    """Mode flags accepted when opening or writing a file."""

    READ = "read"
    WRITE = "write"
    APPEND = "append"
    EXCLUSIVE = "exclusive"
    BINARY = "binary"
    UTF8 = "utf8"
    COMPRESSED = "compressed"


class OpenOptions(BaseModel):
    """Resolved options for opening a file.

    Without any of read, write or append the file is opened for reading.
    Files are binary unless ``utf8`` is requested.
    """

    model_config = ConfigDict(frozen=True)

    read: bool = False
    write: bool = False
    append: bool = False
    exclusive: bool = False
    compressed: bool = False
    encoding: str | None = None

    @model_validator(mode="after")
    def _check_combination(self) -> OpenOptions:
        if self.compressed and self.read and (self.write or self.append):
            raise ValueError("compressed files can be opened for reading or writing, not both")
        return self

    @classmethod
    def from_modes(
        cls, modes: list[FileMode | str] | tuple[FileMode | str, ...] = (), encoding: str = "utf-8"
    ) -> OpenOptions:
        """Resolve a list of mode names into options.

        Args:
            modes: Mode names or FileMode members.
            encoding: Encoding used when ``utf8`` is among the modes.

        Returns:
            Validated OpenOptions.

        Raises:
            ValueError: If a mode name is unknown or the combination is invalid.
        """
        resolved = tuple(FileMode(m) for m in modes)
        flags = set(resolved)
        explicit = flags & {FileMode.READ, FileMode.WRITE, FileMode.APPEND, FileMode.EXCLUSIVE}
        return cls(
            read=FileMode.READ in flags or not explicit,
            write=FileMode.WRITE in flags or FileMode.EXCLUSIVE in flags,
            append=FileMode.APPEND in flags,
            exclusive=FileMode.EXCLUSIVE in flags,
            compressed=FileMode.COMPRESSED in flags,
            encoding=encoding if FileMode.UTF8 in flags else None,
        )

    @property
    def binary(self) -> bool:
        return self.encoding is None

    def python_mode(self) -> str:
        """Mode string understood by ``open`` and ``gzip.open``.

        Reading combined with writing keeps existing content (``r+``), so
        the file must already exist.
        """
        if self.exclusive:
            mode = "x+" if self.read else "x"
        elif self.append:
            mode = "a+" if self.read else "a"
        elif self.write:
            mode = "r+" if self.read else "w"
        else:
            mode = "r"
        if self.binary:
            return mode + "b"
        # gzip defaults to binary, text must be explicit
        return mode + "t" if self.compressed else mode
