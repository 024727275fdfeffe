import posixpath

SEP = "/"
ROOT = "."


def normalize_path(path: str) -> str:
    if not path:
        return ROOT

    # Traversal check: simulate path resolution from root (depth 0)
    parts = path.split(SEP)
    depth = 0
    for part in parts:
        if part == "..":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Path traversal attempt detected: '{path}'")
        elif part and part != ".":
            depth += 1

    normalized = posixpath.normpath(SEP + path).lstrip(SEP)
    return normalized or ROOT


def path_to_key(path: str) -> str:
    npath = normalize_path(path)
    return "" if npath == ROOT else npath


def key_to_path(key: str) -> str:
    return key or ROOT


def dir_prefix(key: str) -> str:
    return key + SEP if key else ""


def split_parts(path: str) -> list[str]:
    key = path_to_key(path)
    return key.split(SEP) if key else []


def base_name(key: str) -> str:
    return key.rsplit(SEP, 1)[-1] if key else ROOT


def join(*elems: str) -> str:
    parts = [e for e in elems if e]
    if not parts:
        return ROOT
    return normalize_path(SEP.join(parts))
