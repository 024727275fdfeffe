"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["blobfs._pytest_plugin"]

This makes the ``bfs`` fixture automatically available::

    def test_something(bfs):
        with bfs.create("a.txt") as f:
            f.write(b"hello")
"""

import pytest

from ._fs import BlobFileSystem
from ._store import MemoryBlobStore


@pytest.fixture
def bfs() -> BlobFileSystem:
    """A :class:`BlobFileSystem` over a fresh :class:`MemoryBlobStore`.

    Provides an independent instance per test (function scope).
    """
    return BlobFileSystem(MemoryBlobStore())
