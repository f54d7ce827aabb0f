"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar


@dataclass
class User:
    """Core attributes describing an application user."""

    participant_type: ClassVar[str] = "user"

    id: int | None
    name: str
    email: str
    created_at: datetime | None = None
    is_active: bool = True


__all__ = ["User"]
