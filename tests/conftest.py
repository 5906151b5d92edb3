"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from filekit.files import Files
from filekit.filesystem import RealFileSystem

# Deeper than the default interpreter recursion limit
DEEP_TREE_DEPTH = 1200


# ============================================================================
# Facade Fixtures
# ============================================================================


@pytest.fixture
def files() -> Files:
    """Create a Files facade over the real filesystem."""
    return Files.create()


@pytest.fixture
def in_tmp_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with tmp_path as working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ============================================================================
# Sample Tree Fixtures
# ============================================================================


@pytest.fixture
def samples(tmp_path: Path) -> Path:
    """Create samples/{1.txt, sub/2.txt}."""
    root = tmp_path / "samples"
    (root / "sub").mkdir(parents=True)
    (root / "1.txt").write_text("a")
    (root / "sub" / "2.txt").write_text("b")
    return root


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """Create a tree with files {a, dir/b, dir/c}."""
    root = tmp_path / "tree"
    (root / "dir").mkdir(parents=True)
    (root / "a").write_bytes(b"alpha")
    (root / "dir" / "b").write_bytes(b"bravo")
    (root / "dir" / "c").write_bytes(b"\x00charlie\xff")
    return root


@pytest.fixture
def deep_tree(tmp_path: Path) -> Iterator[Path]:
    """Create deep/d/d/.../leaf.txt, 1200 directories below the root.

    Deep trees under tmp_path are removed iteratively on teardown, since
    pytest's recursive temp-dir cleanup cannot handle them.
    """
    root = tmp_path / "deep"
    current = root
    current.mkdir()
    for _ in range(DEEP_TREE_DEPTH):
        current = current / "d"
        current.mkdir()
    (current / "leaf.txt").write_text("bottom")
    yield root
    _remove_contents_iteratively(tmp_path)


def _remove_contents_iteratively(top: Path) -> None:
    """Delete everything below top without recursion."""
    stack = [(str(top), False)]
    while stack:
        path, visited = stack.pop()
        if visited:
            if path != str(top):
                os.rmdir(path)
            continue
        stack.append((path, True))
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    stack.append((entry.path, False))
                else:
                    os.unlink(entry.path)


@pytest.fixture
def three_line_file(tmp_path: Path) -> Path:
    """Create a file with three lines."""
    path = tmp_path / "three.txt"
    path.write_bytes(b"one\ntwo\nthree\n")
    return path


# ============================================================================
# Filesystem Doubles
# ============================================================================


class RecordingFileSystem(RealFileSystem):
    """Real filesystem that records primitive calls.

    ``delete_dir`` asserts the directory is empty before removing it.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def delete_file(self, path: Path) -> None:
        self.calls.append(("delete_file", Path(path)))
        super().delete_file(path)

    def delete_dir(self, path: Path) -> None:
        assert os.listdir(path) == [], f"{path} not empty when removed"
        self.calls.append(("delete_dir", Path(path)))
        super().delete_dir(path)

    def close(self, handle) -> None:
        self.calls.append(("close", handle))
        super().close(handle)


@pytest.fixture
def recording_filesystem() -> RecordingFileSystem:
    """Create a RecordingFileSystem."""
    return RecordingFileSystem()


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all primitive calls without touching real files.
    """
    fs = MagicMock()
    fs.list_dir.return_value = []
    fs.read_link.side_effect = OSError(22, "Invalid argument")
    return fs
