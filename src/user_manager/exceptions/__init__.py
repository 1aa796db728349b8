"""Exception hierarchy for User Manager."""

from .base import UserManagerError
from .config import ConfigurationError, InvalidConfigError
from .records import ConflictError, NotFoundError, RecordError, ValidationError
from .storage import CorruptStoreError, StorageError

__all__ = [
    "UserManagerError",
    "RecordError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "StorageError",
    "CorruptStoreError",
    "ConfigurationError",
    "InvalidConfigError",
]
