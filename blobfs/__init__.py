from typing import TYPE_CHECKING

from ._exceptions import BlobNotFoundError, is_not_exist
from ._fs import BlobFileSystem
from ._glob import glob
from ._handle import BlobReadHandle, BlobWriteHandle
from ._s3 import Boto3S3Store
from ._store import BlobStore, MemoryBlobStore
from ._text import BlobTextHandle
from ._typing import BlobInfo, FileInfo, FileSystem, ListResult

if TYPE_CHECKING:
    from ._async import AsyncBlobFileSystem, AsyncBlobHandle


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name in ("AsyncBlobFileSystem", "AsyncBlobHandle"):
        from ._async import AsyncBlobFileSystem, AsyncBlobHandle

        globals()["AsyncBlobFileSystem"] = AsyncBlobFileSystem
        globals()["AsyncBlobHandle"] = AsyncBlobHandle
        return globals()[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "BlobFileSystem",
    "BlobReadHandle",
    "BlobWriteHandle",
    "BlobTextHandle",
    "BlobStore",
    "MemoryBlobStore",
    "Boto3S3Store",
    "BlobNotFoundError",
    "BlobInfo",
    "FileInfo",
    "FileSystem",
    "ListResult",
    "glob",
    "is_not_exist",
    "AsyncBlobFileSystem",
    "AsyncBlobHandle",
]
__version__ = "0.1.0"
