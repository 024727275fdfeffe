import pytest
from blobfs import BlobFileSystem, MemoryBlobStore

pytest_plugins = ["pytester"]


@pytest.fixture
def store() -> MemoryBlobStore:
    """A fresh in-memory blob store per test, recording every call."""
    return MemoryBlobStore(record_ops=True)


@pytest.fixture
def bfs(store) -> BlobFileSystem:
    """Default bfs fixture over the ``store`` fixture."""
    return BlobFileSystem(store)
