"""Text view over a blobfs read or write handle.

A read handle already holds the whole object body, so lines are cut from it
directly. A write handle only buffers until it is closed, so the text view
encodes into it and never reads back.
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._handle import BlobReadHandle, BlobWriteHandle


class BlobTextHandle:
    """Decode/encode text through a :class:`BlobReadHandle` or :class:`BlobWriteHandle`.

    Leaving a ``with`` block on the text handle leaves the wrapped handle the
    same way: a clean exit commits a pending write, an exception discards it.

    >>> with BlobTextHandle(fs.create("reports/hello.txt")) as t:
    ...     t.write("hello world\\n")
    """

    def __init__(
        self,
        handle: BlobReadHandle | BlobWriteHandle,
        encoding: str = "utf-8",
        errors: str = "strict",
    ) -> None:
        self._handle = handle
        self._encoding = encoding
        self._errors = errors

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def errors(self) -> str:
        return self._errors

    @property
    def name(self) -> str:
        return self._handle.name

    def _require(self, mode: str) -> None:
        if self._handle.mode != mode:
            verb = "readable" if mode == "rb" else "writable"
            raise io.UnsupportedOperation(
                f"{self._handle.name!r} is not {verb} (opened with mode '{self._handle.mode}')"
            )

    def write(self, text: str) -> int:
        """Encode *text* into the pending object; returns the number of characters."""
        self._require("wb")
        self._handle.write(text.encode(self._encoding, self._errors))
        return len(text)

    def read(self, size: int = -1) -> str:
        """Decode the rest of the body, or the next *size* bytes of it."""
        self._require("rb")
        return self._handle.read(size).decode(self._encoding, self._errors)

    def readline(self, limit: int = -1) -> str:
        self._require("rb")
        return self._handle.readline(limit).decode(self._encoding, self._errors)

    def readlines(self) -> list[str]:
        return list(self)

    def __iter__(self) -> Iterator[str]:
        self._require("rb")
        while True:
            line = self.readline()
            if not line:
                return
            yield line

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> BlobTextHandle:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._handle.__exit__(exc_type, exc, tb)
