"""CRUD and search over the user store.

Each operation is a full read-modify-write cycle: load every record,
validate, mutate in memory, save every record. Nothing is cached between
calls, so the backing file is always the source of truth.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Any, List, Mapping, Optional

from .exceptions import ConflictError, NotFoundError, ValidationError
from .logging_config import get_logger
from .models import User
from .storage import JsonUserStore
from .validation import normalize_email, require_email, require_non_empty, validate_age

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("name", "email", "age")


class UserRepository:
    """Record operations on top of a JsonUserStore."""

    def __init__(self, store: JsonUserStore):
        self.store = store

    # -------------------------------------- queries --------------------------------------

    def get(self, user_id: str) -> User:
        users = self.store.load()
        return users[self._index_of(users, user_id)]

    def search(self, keyword: str) -> List[User]:
        """Case-insensitive substring match over id, name and email.

        A blank keyword matches every record.
        """
        needle = (keyword or "").strip().lower()
        users = self.store.load()
        if not needle:
            return users
        return [
            u for u in users
            if needle in u.id.lower() or needle in u.name.lower() or needle in u.email.lower()
        ]

    def list_users(self) -> List[User]:
        return self.search("")

    # -------------------------------------- mutations --------------------------------------

    def add(self, name: str, email: str, age: Optional[int] = None) -> User:
        """Create a record with a freshly generated id.

        Raises:
            ValidationError: If a field is empty, malformed or out of range.
            ConflictError: If another record already uses the email (any case).
        """
        name = require_non_empty(name, "name")
        email = require_email(email)
        age = validate_age(age)

        users = self.store.load()
        self._ensure_email_free(users, email)

        user = User(id=str(uuid.uuid4()), name=name, email=email, age=age)
        users.append(user)
        self.store.save(users)

        logger.info(f"Added user {user.id}")
        return user

    def update(self, user_id: str, updates: Mapping[str, Any]) -> User:
        """Apply the fields present in ``updates`` to an existing record.

        Only ``name``, ``email`` and ``age`` may appear; ``age=None`` clears
        the age. The merged record is validated as a whole, so a record that
        was already invalid on disk is rejected here. When nothing would
        change, the file is not written.

        Raises:
            NotFoundError: If no record has ``user_id``.
            ValidationError: For an unknown or immutable key, or a bad value.
            ConflictError: If the new email belongs to another record.
        """
        for key in updates:
            if key == "id":
                raise ValidationError("id cannot be changed", field="id")
            if key not in UPDATABLE_FIELDS:
                raise ValidationError(f"unknown field: {key}", field=key)

        users = self.store.load()
        index = self._index_of(users, user_id)
        current = users[index]
        if not updates:
            return current

        changes: dict = {}
        if "name" in updates:
            changes["name"] = require_non_empty(updates["name"], "name")
        if "email" in updates:
            changes["email"] = require_email(updates["email"])
            self._ensure_email_free(users, changes["email"], exclude_id=current.id)
        if "age" in updates:
            changes["age"] = validate_age(updates["age"])

        updated = replace(current, **changes)
        self._validate_record(updated)
        if updated == current:
            return current

        users[index] = updated
        self.store.save(users)

        logger.info(f"Updated user {updated.id}: {', '.join(sorted(changes))}")
        return updated

    def delete(self, user_id: str) -> bool:
        """Remove a record.

        Raises:
            NotFoundError: If no record has ``user_id``.
        """
        users = self.store.load()
        removed = users.pop(self._index_of(users, user_id))
        self.store.save(users)

        logger.info(f"Deleted user {removed.id}")
        return True

    # -------------------------------------- helpers --------------------------------------

    def _index_of(self, users: List[User], user_id: str) -> int:
        wanted = (user_id or "").strip()
        # records loaded without an id have id "" and are not addressable
        if not wanted:
            raise NotFoundError(wanted)
        for i, user in enumerate(users):
            if user.id == wanted:
                return i
        raise NotFoundError(wanted)

    def _ensure_email_free(
        self, users: List[User], email: str, exclude_id: Optional[str] = None
    ) -> None:
        key = normalize_email(email)
        for user in users:
            if user.id != exclude_id and normalize_email(user.email) == key:
                raise ConflictError("email already exists", email=email)

    def _validate_record(self, user: User) -> None:
        require_non_empty(user.name, "name")
        require_email(user.email)
        validate_age(user.age)
