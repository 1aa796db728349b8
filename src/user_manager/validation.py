"""Field validation for user records."""

from __future__ import annotations

import re
from typing import Any

from .exceptions import ValidationError

MIN_AGE = 0
MAX_AGE = 150

AGE_ERROR = f"age must be an integer in [{MIN_AGE},{MAX_AGE}]"

# local@domain.tld shape only, not RFC 5322
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_INT_RE = re.compile(r"[+-]?\d+")


def require_non_empty(value: str | None, field_name: str) -> str:
    """Trim ``value`` and reject it if nothing is left."""
    trimmed = (value or "").strip()
    if not trimmed:
        raise ValidationError(f"{field_name} must not be empty", field=field_name)
    return trimmed


def is_valid_email(value: str) -> bool:
    """Return True if ``value`` is shaped like ``local@domain.tld``."""
    return _EMAIL_RE.fullmatch(value) is not None


def require_email(value: str | None) -> str:
    """Trim and shape-check an email address."""
    email = require_non_empty(value, "email")
    if not is_valid_email(email):
        raise ValidationError("email must look like local@domain.tld", field="email")
    return email


def normalize_email(value: str) -> str:
    """Key used for case-insensitive email comparison."""
    return value.strip().lower()


def parse_optional_age(raw: str | None) -> int | None:
    """Parse raw age input.

    Blank input means "not specified" and yields None. Anything else must be
    a base-10 integer in the inclusive range [0, 150].
    """
    text = (raw or "").strip()
    if not text:
        return None
    if not _INT_RE.fullmatch(text):
        raise ValidationError(AGE_ERROR, field="age")
    return validate_age(int(text))


def validate_age(value: Any) -> int | None:
    """Range-check an already typed age. None passes through."""
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(AGE_ERROR, field="age")
    if not MIN_AGE <= value <= MAX_AGE:
        raise ValidationError(AGE_ERROR, field="age")
    return value
