"""Async wrapper around BlobFileSystem.

Every store call blocks, so all I/O is delegated to :func:`asyncio.to_thread`
and the event loop is never blocked by the network.
"""

from __future__ import annotations

import asyncio

from ._fs import BlobFileSystem
from ._store import BlobStore
from ._typing import FileInfo


class AsyncBlobHandle:
    """Async wrapper for a single read or write handle."""

    def __init__(self, _sync_handle) -> None:  # type: ignore[no-untyped-def]
        self._h = _sync_handle

    async def read(self, size: int = -1) -> bytes:
        return await asyncio.to_thread(self._h.read, size)

    async def write(self, data: bytes) -> int:
        return await asyncio.to_thread(self._h.write, data)

    async def seek(self, offset: int, whence: int = 0) -> int:
        return await asyncio.to_thread(self._h.seek, offset, whence)

    async def tell(self) -> int:
        return await asyncio.to_thread(self._h.tell)

    async def close(self) -> None:
        await asyncio.to_thread(self._h.close)

    async def abort(self) -> None:
        await asyncio.to_thread(self._h.abort)

    async def __aenter__(self) -> AsyncBlobHandle:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[no-untyped-def]
        if exc_type is not None and hasattr(self._h, "abort"):
            await self.abort()
        else:
            await self.close()


class AsyncBlobFileSystem:
    """Thin async facade over :class:`BlobFileSystem`."""

    def __init__(self, store: BlobStore) -> None:
        self._sync = BlobFileSystem(store)

    async def open(self, path: str, mode: str = "rb") -> AsyncBlobHandle:
        h = await asyncio.to_thread(self._sync.open, path, mode)
        return AsyncBlobHandle(h)

    async def create(self, path: str) -> AsyncBlobHandle:
        h = await asyncio.to_thread(self._sync.create, path)
        return AsyncBlobHandle(h)

    async def remove(self, path: str) -> None:
        await asyncio.to_thread(self._sync.remove, path)

    async def stat(self, path: str) -> FileInfo:
        return await asyncio.to_thread(self._sync.stat, path)

    async def readdir(self, path: str) -> list[FileInfo]:
        return await asyncio.to_thread(self._sync.readdir, path)

    async def listdir(self, path: str) -> list[str]:
        return await asyncio.to_thread(self._sync.listdir, path)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._sync.exists, path)

    async def is_dir(self, path: str) -> bool:
        return await asyncio.to_thread(self._sync.is_dir, path)

    async def is_file(self, path: str) -> bool:
        return await asyncio.to_thread(self._sync.is_file, path)

    async def get_size(self, path: str) -> int:
        return await asyncio.to_thread(self._sync.get_size, path)

    async def mkdir(self, path: str, exist_ok: bool = False) -> None:
        await asyncio.to_thread(self._sync.mkdir, path, exist_ok)

    async def makedirs(self, path: str) -> None:
        await asyncio.to_thread(self._sync.makedirs, path)

    async def rmdir(self, path: str) -> None:
        await asyncio.to_thread(self._sync.rmdir, path)

    async def walk(self, path: str = ".") -> list[tuple[str, list[str], list[str]]]:
        return await asyncio.to_thread(lambda: list(self._sync.walk(path)))

    async def glob(self, pattern: str, prefix: str = "") -> list[str]:
        return await asyncio.to_thread(self._sync.glob, pattern, prefix)
