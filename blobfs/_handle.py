from __future__ import annotations

import io
import logging
import warnings
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._store import BlobStore

logger = logging.getLogger(__name__)


class BlobReadHandle:
    """Read-only handle over one committed object.

    The body is fetched eagerly when the handle is opened, so later writes to
    the same key never show through an open handle.
    """

    def __init__(self, path: str, data: bytes) -> None:
        self._path = path
        self._data = data
        self._cursor: int = 0
        self._is_closed: bool = False

    @property
    def name(self) -> str:
        return self._path

    @property
    def mode(self) -> str:
        return "rb"

    @property
    def closed(self) -> bool:
        return self._is_closed

    def _assert_open(self) -> None:
        if self._is_closed:
            raise ValueError("I/O operation on closed file.")

    def read(self, size: int = -1) -> bytes:
        self._assert_open()
        current_size = len(self._data)
        if self._cursor >= current_size:
            return b""
        if size < 0:
            end = current_size
        else:
            end = min(self._cursor + size, current_size)
        data = self._data[self._cursor:end]
        self._cursor = end
        return data

    def readline(self, size: int = -1) -> bytes:
        """Return bytes up to and including the next line ending.

        ``\\n``, ``\\r\\n`` and a bare ``\\r`` all end a line.
        """
        self._assert_open()
        data = self._data
        start = self._cursor
        if start >= len(data):
            return b""
        end = len(data)
        if size >= 0:
            end = min(end, start + size)
        nl = data.find(b"\n", start, end)
        cr = data.find(b"\r", start, end)
        if cr != -1 and (nl == -1 or cr < nl):
            stop = cr + 1
            if stop < end and data[stop : stop + 1] == b"\n":
                stop += 1
        elif nl != -1:
            stop = nl + 1
        else:
            stop = end
        self._cursor = stop
        return data[start:stop]

    def readall(self) -> bytes:
        return self.read()

    def write(self, data: bytes) -> int:
        raise io.UnsupportedOperation("not writable in mode 'rb'")

    def seek(self, offset: int, whence: int = 0) -> int:
        self._assert_open()
        if whence == 0:
            if offset < 0:
                raise ValueError("seek offset must be >= 0 for SEEK_SET")
            new_pos = offset
        elif whence == 1:
            new_pos = self._cursor + offset
        elif whence == 2:
            new_pos = len(self._data) + offset
        else:
            raise ValueError(f"Invalid whence value: {whence}. Must be 0, 1, or 2.")
        if new_pos < 0:
            raise ValueError(f"Resulting cursor position {new_pos} is negative.")
        self._cursor = new_pos
        return self._cursor

    def tell(self) -> int:
        self._assert_open()
        return self._cursor

    def readable(self) -> bool:
        self._assert_open()
        return True

    def writable(self) -> bool:
        self._assert_open()
        return False

    def seekable(self) -> bool:
        self._assert_open()
        return True

    def close(self) -> None:
        if self._is_closed:
            return
        self._is_closed = True
        self._data = b""

    def __enter__(self) -> BlobReadHandle:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __del__(self) -> None:
        if not getattr(self, "_is_closed", True):
            warnings.warn(
                "blobfs BlobReadHandle was not closed properly. "
                "Always use 'with fs.open(...) as f:' to release the fetched body.",
                ResourceWarning,
                stacklevel=1,
            )
            self.close()


class BlobWriteHandle:
    """Buffered write handle.

    Written bytes accumulate in memory; :meth:`close` commits them with a
    single ``put``. Nothing is visible to readers before that. If the
    ``with`` block exits with an exception the buffer is discarded instead.
    """

    def __init__(self, store: BlobStore, path: str, key: str) -> None:
        self._store = store
        self._path = path
        self._key = key
        self._buffer: io.BytesIO | None = io.BytesIO()
        self._is_closed: bool = False

    @property
    def name(self) -> str:
        return self._path

    @property
    def mode(self) -> str:
        return "wb"

    @property
    def closed(self) -> bool:
        return self._is_closed

    def _assert_open(self) -> io.BytesIO:
        if self._is_closed or self._buffer is None:
            raise ValueError("I/O operation on closed file.")
        return self._buffer

    def read(self, size: int = -1) -> bytes:
        raise io.UnsupportedOperation("not readable in mode 'wb'")

    def readline(self, size: int = -1) -> bytes:
        raise io.UnsupportedOperation("not readable in mode 'wb'")

    def write(self, data: bytes) -> int:
        buffer = self._assert_open()
        return buffer.write(data)

    def tell(self) -> int:
        return self._assert_open().tell()

    def flush(self) -> None:
        # Objects cannot be appended to; only close() reaches the store.
        self._assert_open()

    def readable(self) -> bool:
        self._assert_open()
        return False

    def writable(self) -> bool:
        self._assert_open()
        return True

    def seekable(self) -> bool:
        self._assert_open()
        return False

    def close(self) -> None:
        if self._is_closed:
            return
        buffer = self._buffer
        self._is_closed = True
        self._buffer = None
        if buffer is None:
            return
        data = buffer.getvalue()
        buffer.close()
        self._store.put(self._key, data)
        logger.debug("committed %s (%d bytes)", self._key, len(data))

    def abort(self) -> None:
        """Close the handle without writing anything to the store."""
        if self._is_closed:
            return
        self._is_closed = True
        if self._buffer is not None:
            self._buffer.close()
            self._buffer = None
        logger.debug("discarded pending write to %s", self._key)

    def __enter__(self) -> BlobWriteHandle:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.abort()
        else:
            self.close()

    def __del__(self) -> None:
        if not getattr(self, "_is_closed", True):
            warnings.warn(
                "blobfs BlobWriteHandle was not closed; its data was never committed. "
                "Always use 'with fs.create(...) as f:' to ensure the write is stored.",
                ResourceWarning,
                stacklevel=1,
            )
            self.abort()
