class BlobNotFoundError(FileNotFoundError):
    """Raised by a blob store when no object exists at a key. Subclass of FileNotFoundError."""
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No such blob: '{key}'")


def is_not_exist(exc: BaseException) -> bool:
    """Return True if *exc* reports a path or key that does not exist."""
    return isinstance(exc, FileNotFoundError)
