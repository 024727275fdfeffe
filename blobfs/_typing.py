from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, TypedDict


class FileInfo(TypedDict):
    name: str
    size: int
    is_dir: bool
    modified_at: float | None


@dataclass(frozen=True)
class BlobInfo:
    key: str
    size: int
    modified_at: float


@dataclass
class ListResult:
    objects: list[BlobInfo] = field(default_factory=list)
    prefixes: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.objects or self.prefixes)


class FileSystem(Protocol):
    """Capability set of a read-write virtual filesystem.

    ``join`` is what :func:`blobfs.glob` needs on top of ``stat`` and
    ``readdir``.
    """

    def open(self, path: str, mode: str = "rb"): ...

    def create(self, path: str): ...

    def remove(self, path: str) -> None: ...

    def stat(self, path: str) -> FileInfo: ...

    def readdir(self, path: str) -> list[FileInfo]: ...

    def join(self, *elems: str) -> str: ...
