from __future__ import annotations

import logging
from collections.abc import Iterator

from ._exceptions import BlobNotFoundError
from ._glob import glob as _glob
from ._handle import BlobReadHandle, BlobWriteHandle
from ._path import ROOT, base_name, dir_prefix, join, key_to_path, path_to_key
from ._store import BlobStore
from ._typing import BlobInfo, FileInfo

logger = logging.getLogger(__name__)

SEP = "/"


class BlobFileSystem:
    """Hierarchical read-write filesystem emulated on top of a flat blob store.

    Directories are never stored: a path is a directory when at least one key
    lives under ``<key>/`` (a descendant, or the empty marker object written by
    :meth:`makedirs`). Nothing is cached; every call goes to the store.
    """

    def __init__(self, store: BlobStore) -> None:
        self._store = store

    @property
    def store(self) -> BlobStore:
        return self._store

    # -- directory emulation --

    def _head(self, key: str) -> BlobInfo | None:
        try:
            return self._store.head(key)
        except BlobNotFoundError:
            return None

    def _has_children(self, key: str) -> bool:
        return bool(self._store.list(dir_prefix(key), delimiter=SEP, limit=1))

    def _classify(self, key: str) -> tuple[BlobInfo | None, bool]:
        """Return ``(object metadata, is_dir)`` for *key*.

        Children win: a key that holds an object and also has keys under it
        is reported as a directory.
        """
        info = self._head(key)
        is_dir = self._has_children(key)
        if info is not None and is_dir:
            logger.debug("%s is both an object and a prefix; reporting a directory", key)
        return info, is_dir

    def join(self, *elems: str) -> str:
        return join(*elems)

    def stat(self, path: str) -> FileInfo:
        key = path_to_key(path)
        if not key:
            return FileInfo(name=ROOT, size=0, is_dir=True, modified_at=None)
        info, is_dir = self._classify(key)
        if is_dir:
            return FileInfo(name=base_name(key), size=0, is_dir=True, modified_at=None)
        if info is None:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        return FileInfo(
            name=base_name(key),
            size=info.size,
            is_dir=False,
            modified_at=info.modified_at,
        )

    def exists(self, path: str) -> bool:
        try:
            self.stat(path)
        except (FileNotFoundError, ValueError):
            return False
        return True

    def is_dir(self, path: str) -> bool:
        try:
            return self.stat(path)["is_dir"]
        except (FileNotFoundError, ValueError):
            return False

    def is_file(self, path: str) -> bool:
        try:
            return not self.stat(path)["is_dir"]
        except (FileNotFoundError, ValueError):
            return False

    def get_size(self, path: str) -> int:
        info = self.stat(path)
        if info["is_dir"]:
            raise IsADirectoryError(f"Is a directory: '{path}'")
        return info["size"]

    # -- files --

    def open(self, path: str, mode: str = "rb") -> BlobReadHandle | BlobWriteHandle:
        valid_modes = {"rb", "wb"}
        if mode not in valid_modes:
            raise ValueError(
                f"Invalid mode '{mode}'. blobfs supports binary modes only: {valid_modes}"
            )
        if mode == "wb":
            return self.create(path)
        key = path_to_key(path)
        if not key:
            raise IsADirectoryError(f"Is a directory: '{path}'")
        try:
            data = self._store.get(key)
        except BlobNotFoundError:
            if self._has_children(key):
                raise IsADirectoryError(f"Is a directory: '{path}'") from None
            raise FileNotFoundError(f"No such file: '{path}'") from None
        return BlobReadHandle(key_to_path(key), data)

    def create(self, path: str) -> BlobWriteHandle:
        key = path_to_key(path)
        if not key:
            raise IsADirectoryError(f"Is a directory: '{path}'")
        return BlobWriteHandle(self._store, key_to_path(key), key)

    def remove(self, path: str) -> None:
        """Delete the object stored at *path*.

        Keys under *path* are left alone. A path that is only a synthetic
        directory cannot be removed; a path with neither an object nor
        children is removed without error.
        """
        key = path_to_key(path)
        if not key:
            raise ValueError("Cannot remove the root directory.")
        if self._head(key) is None:
            if self._has_children(key):
                raise IsADirectoryError(f"Is a directory: '{path}'")
            return
        self._store.delete(key)
        logger.debug("removed %s", key)

    # -- directories --

    def mkdir(self, path: str, exist_ok: bool = False) -> None:
        key = path_to_key(path)
        if not key:
            is_dir, info = True, None
        else:
            info, is_dir = self._classify(key)
        if is_dir:
            if not exist_ok:
                raise FileExistsError(f"Directory exists: '{path}'")
            return
        if info is not None:
            raise FileExistsError(f"File exists at path: '{path}'")
        self.makedirs(path)

    def makedirs(self, path: str) -> None:
        """Make *path* and all its ancestors stat-able as directories.

        Writes an empty marker at ``<key>/`` for every level that has no keys
        under it yet. Safe to call again after a partial failure.
        """
        key = path_to_key(path)
        if not key:
            return
        current = ""
        for part in key.split(SEP):
            current = current + SEP + part if current else part
            if self._has_children(current):
                continue
            self._store.put(dir_prefix(current), b"")
            logger.debug("wrote directory marker %s", dir_prefix(current))

    def rmdir(self, path: str) -> None:
        """Remove the empty directory at *path* by deleting its marker.

        A directory that still has entries besides its marker is left alone.
        An object stored at the same key as the directory is kept.
        """
        key = path_to_key(path)
        if not key:
            raise ValueError("Cannot remove the root directory.")
        prefix = dir_prefix(key)
        listing = self._store.list(prefix, delimiter=SEP, limit=2)
        if not listing:
            if self._head(key) is not None:
                raise NotADirectoryError(f"Not a directory: '{path}'")
            raise FileNotFoundError(f"No such directory: '{path}'")
        others = [o for o in listing.objects if o.key != prefix]
        if others or listing.prefixes:
            raise OSError(f"Directory not empty: '{path}'")
        self._store.delete(prefix)
        logger.debug("removed directory marker %s", prefix)

    def readdir(self, path: str) -> list[FileInfo]:
        key = path_to_key(path)
        prefix = dir_prefix(key)
        listing = self._store.list(prefix, delimiter=SEP)
        if key and not listing:
            if self._head(key) is not None:
                raise NotADirectoryError(f"Not a directory: '{path}'")
            raise FileNotFoundError(f"No such directory: '{path}'")

        entries: dict[str, FileInfo] = {}
        for common in listing.prefixes:
            name = common[len(prefix):].rstrip(SEP)
            if name:
                entries[name] = FileInfo(name=name, size=0, is_dir=True, modified_at=None)
        for obj in listing.objects:
            name = obj.key[len(prefix):]
            # The marker itself, or a name already known as a directory.
            if not name or name in entries:
                continue
            entries[name] = FileInfo(
                name=name, size=obj.size, is_dir=False, modified_at=obj.modified_at
            )
        return [entries[name] for name in sorted(entries)]

    def listdir(self, path: str) -> list[str]:
        return [info["name"] for info in self.readdir(path)]

    def walk(self, path: str = ROOT) -> Iterator[tuple[str, list[str], list[str]]]:
        """Recursively walk the directory tree (top-down).

        .. warning::
            Weak consistency: every level is listed when it is reached, so
            concurrent writers may or may not be observed. Directories that
            vanish mid-walk are skipped.
        """
        top = key_to_path(path_to_key(path))
        entries = self.readdir(top)
        yield from self._walk_dir(top, entries)

    def _walk_dir(
        self, dir_path: str, entries: list[FileInfo]
    ) -> Iterator[tuple[str, list[str], list[str]]]:
        dirnames = [e["name"] for e in entries if e["is_dir"]]
        filenames = [e["name"] for e in entries if not e["is_dir"]]
        yield dir_path, dirnames, filenames
        for name in dirnames:
            child_path = join(dir_path, name)
            try:
                child_entries = self.readdir(child_path)
            except FileNotFoundError:
                continue
            yield from self._walk_dir(child_path, child_entries)

    def glob(self, pattern: str, prefix: str = "") -> list[str]:
        """Return a sorted list of paths matching *pattern*.

        Supports ``*``, ``?`` and ``[seq]`` within a single path segment.
        """
        return sorted(_glob(self, prefix, pattern))
