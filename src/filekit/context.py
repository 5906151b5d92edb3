"""Application context for dependency injection.

This module separates object creation from object use, enabling CLI
commands to be tested with a Files facade built over a test double.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from filekit.config import FilesConfig
from filekit.files import Files
from filekit.protocols import FileSystem


@dataclass
class AppContext:
    """Container for CLI dependencies."""

    files: Files
    config: FilesConfig = field(default_factory=FilesConfig)


def create_context(
    config: FilesConfig | None = None,
    filesystem: FileSystem | None = None,
    should_abort: Callable[[], bool] | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Use this in production code. For tests, construct AppContext directly
    or pass a fake filesystem.

    Args:
        config: Override configuration.
        filesystem: Override the primitive layer (for testing).
        should_abort: Optional abort check for recursive walks.

    Returns:
        Configured AppContext.
    """
    config = config or FilesConfig()
    files = Files.create(filesystem=filesystem, config=config, should_abort=should_abort)
    return AppContext(files=files, config=config)
