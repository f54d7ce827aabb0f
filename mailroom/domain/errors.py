"""Exceptions raised by the mailroom domain and its collaborators."""

from __future__ import annotations


class MailroomError(Exception):
    """Base class for every error surfaced by mailroom."""


class ValidationError(MailroomError, ValueError):
    """Raised when content or recipients fail validation before any write."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class NotFoundError(MailroomError, LookupError):
    """Raised when a participant has no receipt for the requested item."""


class StorageError(MailroomError):
    """Wraps a failure reported by the storage layer."""


__all__ = ["MailroomError", "NotFoundError", "StorageError", "ValidationError"]
