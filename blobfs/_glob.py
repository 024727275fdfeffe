"""Shell-pattern matching over an emulated directory tree.

Only the part of the tree a pattern can reach is listed: the walk starts at
the deepest literal directory of the pattern and descends one level per
remaining pattern segment.
"""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING

from ._path import split_parts

if TYPE_CHECKING:
    from ._typing import FileSystem

_MAGIC = re.compile(r"[*?\[]")


def has_magic(segment: str) -> bool:
    return _MAGIC.search(segment) is not None


def glob(fs: FileSystem, prefix: str, pattern: str) -> list[str]:
    """Return the paths under *prefix* matching *pattern*, in no particular order.

    *pattern* is matched against full paths, one segment at a time: ``*``
    never crosses a ``/``. Each match is built with ``fs.join(prefix, ...)``.
    """
    parts = split_parts(pattern)
    prefix_parts = split_parts(prefix)
    if len(prefix_parts) > len(parts):
        return []
    for name, segment in zip(prefix_parts, parts):
        if not fnmatchcase(name, segment):
            return []

    idx = len(prefix_parts)
    literal: list[str] = []
    while idx < len(parts) and not has_magic(parts[idx]):
        literal.append(parts[idx])
        idx += 1
    base = fs.join(prefix, *literal)

    if idx == len(parts):
        try:
            fs.stat(base)
        except FileNotFoundError:
            return []
        return [base]

    matches: list[str] = []
    _glob_level(fs, base, parts, idx, matches)
    return matches


def _glob_level(
    fs: FileSystem, dir_path: str, parts: list[str], idx: int, matches: list[str]
) -> None:
    try:
        entries = fs.readdir(dir_path)
    except (FileNotFoundError, NotADirectoryError):
        return
    segment = parts[idx]
    is_last = idx == len(parts) - 1
    for entry in entries:
        name = entry["name"]
        if not fnmatchcase(name, segment):
            continue
        child_path = fs.join(dir_path, name)
        if is_last:
            matches.append(child_path)
        elif entry["is_dir"]:
            _glob_level(fs, child_path, parts, idx + 1, matches)
