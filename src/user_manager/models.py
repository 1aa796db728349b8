"""Data models for User Manager"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class User:
    """A single user record.

    ``age`` is optional; an absent age is omitted from the stored object
    rather than written as ``null`` or ``0``.
    """

    id: str
    name: str
    email: str
    age: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
        }
        if self.age is not None:
            data["age"] = self.age
        return data

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "User":
        """Build a record from a stored object.

        Tolerant of hand-edited files: missing or ``null`` strings become
        ``""`` and a ``null`` age is treated as absent. Nothing is validated
        here.
        """
        return cls(
            id=_text(d.get("id")),
            name=_text(d.get("name")),
            email=_text(d.get("email")),
            age=d.get("age"),
        )

    def describe(self) -> str:
        """One-line listing form used by the shell."""
        age = f"{self.age} years old" if self.age is not None else "Age not specified"
        return f"- {self.name} - <{self.email}> (ID: {self.id}) - {age}"


def _text(value: Any) -> str:
    return "" if value is None else str(value)
