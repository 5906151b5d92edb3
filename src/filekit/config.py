"""Defaults resolved at the API layer.

The engines take fully-specified parameters; anything a caller may leave
out is filled in by ``Files`` from a ``FilesConfig``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from filekit.types import FileMode, TimeFormat

__all__ = [
    "ConflictCallback",
    "ConflictPolicy",
    "FilesConfig",
    "always_overwrite",
    "never_overwrite",
]

# Decides whether an existing destination is replaced: (source, destination) -> overwrite?
ConflictCallback = Callable[[Path, Path], bool]


def always_overwrite(source: Path, destination: Path) -> bool:
    return True


def never_overwrite(source: Path, destination: Path) -> bool:
    return False


class ConflictPolicy(str, Enum):
    """What to do when a copy destination already exists."""

    OVERWRITE = "overwrite"
    SKIP = "skip"

    def callback(self) -> ConflictCallback:
        return always_overwrite if self is ConflictPolicy.OVERWRITE else never_overwrite


class FilesConfig(BaseModel):
    """Configuration for a ``Files`` facade."""

    model_config = ConfigDict(frozen=True)

    conflict_policy: ConflictPolicy = ConflictPolicy.OVERWRITE
    default_modes: list[FileMode] = Field(default_factory=list)
    encoding: str = "utf-8"
    stat_time: TimeFormat = "local"
