"""
User Manager - a small user directory kept in a single JSON file.

Records (id, name, email, optional age) are created, edited, deleted and
searched through an interactive menu or one-shot commands.
"""

__version__ = "0.1.0"

from .models import User
from .repository import UserRepository
from .storage import JsonUserStore

__all__ = [
    "User",
    "UserRepository",
    "JsonUserStore",
]
