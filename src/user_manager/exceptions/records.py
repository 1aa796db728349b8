"""Record-level exceptions: validation, uniqueness, missing targets.

These are recoverable: the shell reports them and returns to the menu.
"""

from typing import Optional

from .base import UserManagerError


class RecordError(UserManagerError):
    """Base class for per-operation record errors."""

    pass


class ValidationError(RecordError):
    """Raised when a field has the wrong shape or is out of range."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConflictError(RecordError):
    """Raised when a uniqueness rule would be violated."""

    def __init__(self, message: str = "email already exists", email: Optional[str] = None):
        super().__init__(message)
        self.email = email


class NotFoundError(RecordError):
    """Raised when the target record does not exist."""

    def __init__(self, user_id: str):
        super().__init__(f"user not found: {user_id}")
        self.user_id = user_id
