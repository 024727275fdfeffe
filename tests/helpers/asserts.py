import time


def write_file(bfs, path: str, data: bytes = b"x") -> None:
    with bfs.create(path) as f:
        f.write(data)


def read_file(bfs, path: str) -> bytes:
    with bfs.open(path) as f:
        return f.read()


def wait_until(predicate, timeout: float = 2.0, interval: float = 0.01) -> bool:
    """Poll *predicate* until it returns True or *timeout* seconds pass."""
    deadline = time.monotonic() + timeout
    while True:
        if predicate():
            return True
        if time.monotonic() >= deadline:
            return False
        time.sleep(interval)


def assert_marker_free(entries) -> None:
    names = [e["name"] for e in entries]
    assert "" not in names
    assert len(names) == len(set(names))
