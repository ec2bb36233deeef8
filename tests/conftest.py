"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from merkledag.core import Directory, File
from merkledag.storage import FileBlobStore, MemoryBlobStore


@pytest.fixture
def store() -> MemoryBlobStore:
    """Create an empty in-memory blob store."""
    return MemoryBlobStore()


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Create a temporary store directory with its objects/ layout."""
    store_path = tmp_path / ".merkledag"
    store_path.mkdir()
    (store_path / "objects").mkdir()
    return store_path


@pytest.fixture
def file_store(store_dir: Path) -> FileBlobStore:
    """Create an on-disk blob store."""
    return FileBlobStore(store_dir)


@pytest.fixture
def sample_dir() -> Directory:
    """Directory /d containing a.txt = "hello" and b.txt = "world"."""
    return Directory().add("a.txt", File(b"hello")).add("b.txt", File(b"world"))


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree on disk."""
    root = tmp_path / "tree"
    (root / "docs").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"hello")
    (root / "b.txt").write_bytes(b"world")
    (root / "docs" / "readme.md").write_bytes(b"# readme\n")
    return root
