from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Protocol

from ._exceptions import BlobNotFoundError
from ._typing import BlobInfo, ListResult


class BlobStore(Protocol):
    """Flat key/value object store with prefix listing.

    Keys are opaque strings. Every method is a single, independent call;
    implementations decide about transport, retries and consistency.
    """

    def put(self, key: str, data: bytes) -> None:
        """Store *data* at *key*, replacing any previous object."""

    def get(self, key: str) -> bytes:
        """Return the object body. Raise BlobNotFoundError when absent."""

    def head(self, key: str) -> BlobInfo:
        """Return object metadata. Raise BlobNotFoundError when absent."""

    def delete(self, key: str) -> None:
        """Delete the object at *key*. Deleting an absent key is not an error."""

    def list(
        self, prefix: str, delimiter: str = "", limit: int | None = None
    ) -> ListResult:
        """List objects whose key starts with *prefix*.

        With a *delimiter*, keys whose remainder after *prefix* contains it are
        rolled up into common prefixes. *limit* bounds objects + prefixes.
        """


@dataclass
class StoreOp:
    name: str
    args: tuple[object, ...]


class MemoryBlobStore:
    """In-process blob store with the same semantics as a real object store.

    With *record_ops* every call is appended to :attr:`ops`; it is off by
    default so a long-lived store does not grow. With a positive *delete_delay*,
    deleted keys remain visible to ``get``/``head``/``list`` for that many
    seconds, simulating an eventually consistent store.
    """

    def __init__(self, delete_delay: float = 0.0, record_ops: bool = False) -> None:
        if delete_delay < 0:
            raise ValueError("delete_delay must be >= 0")
        self._delete_delay = delete_delay
        self._objects: dict[str, tuple[bytes, float]] = {}
        self._pending_deletes: dict[str, float] = {}
        self._lock = threading.Lock()
        self._record_ops = record_ops
        self.ops: list[StoreOp] = []

    def _record(self, name: str, *args: object) -> None:
        if self._record_ops:
            self.ops.append(StoreOp(name, args))

    def _expire(self) -> None:
        if not self._pending_deletes:
            return
        now = time.monotonic()
        for key, deadline in list(self._pending_deletes.items()):
            if now >= deadline:
                del self._pending_deletes[key]
                self._objects.pop(key, None)

    def put(self, key: str, data: bytes) -> None:
        data = bytes(data)
        with self._lock:
            self._record("put", key)
            self._expire()
            self._pending_deletes.pop(key, None)
            self._objects[key] = (data, time.time())

    def get(self, key: str) -> bytes:
        with self._lock:
            self._record("get", key)
            self._expire()
            entry = self._objects.get(key)
            if entry is None:
                raise BlobNotFoundError(key)
            return entry[0]

    def head(self, key: str) -> BlobInfo:
        with self._lock:
            self._record("head", key)
            self._expire()
            entry = self._objects.get(key)
            if entry is None:
                raise BlobNotFoundError(key)
            data, modified_at = entry
            return BlobInfo(key=key, size=len(data), modified_at=modified_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._record("delete", key)
            self._expire()
            if key not in self._objects:
                return
            if self._delete_delay > 0:
                self._pending_deletes.setdefault(
                    key, time.monotonic() + self._delete_delay
                )
            else:
                del self._objects[key]

    def list(
        self, prefix: str, delimiter: str = "", limit: int | None = None
    ) -> ListResult:
        with self._lock:
            self._record("list", prefix, delimiter)
            self._expire()
            snapshot = sorted(
                (k, v) for k, v in self._objects.items() if k.startswith(prefix)
            )
        result = ListResult()
        seen: set[str] = set()
        for key, (data, modified_at) in snapshot:
            if limit is not None and len(result.objects) + len(result.prefixes) >= limit:
                break
            rest = key[len(prefix):]
            if delimiter and delimiter in rest:
                common = prefix + rest[: rest.index(delimiter) + len(delimiter)]
                if common not in seen:
                    seen.add(common)
                    result.prefixes.append(common)
                continue
            result.objects.append(
                BlobInfo(key=key, size=len(data), modified_at=modified_at)
            )
        return result

    def keys(self) -> list[str]:
        """Return every visible key, sorted. Not part of the BlobStore contract."""
        with self._lock:
            self._expire()
            return sorted(self._objects)
