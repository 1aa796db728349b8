"""Storage exceptions: backing-file read and write failures.

These are fatal: they propagate out of the shell loop and end the process.
"""

from pathlib import Path

from .base import UserManagerError


class StorageError(UserManagerError):
    """Raised when the backing file cannot be read or written."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot access data file: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class CorruptStoreError(StorageError):
    """Raised when the backing file is not valid JSON, or in strict mode not a JSON array."""

    pass
