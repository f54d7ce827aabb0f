"""Domain entity binding a notification or message to one recipient."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .message import Message
from .notification import Notification

MAILBOX_INBOX = "inbox"
MAILBOX_SENTBOX = "sentbox"


@dataclass
class Receipt:
    """Per-recipient read state for a delivered notification or message."""

    id: int | None
    target: Notification | Message
    receiver_type: str
    receiver_id: int
    mailbox_type: str | None = None
    is_read: bool = False
    is_deleted: bool = False
    read_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def kind(self) -> str:
        return self.target.kind

    @property
    def notification(self) -> Notification | Message:
        """Alias for ``target`` used by notification-oriented callers."""

        return self.target

    def mark_as_read(self, now: datetime) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.read_at = now
        self.updated_at = now

    def mark_as_unread(self, now: datetime) -> None:
        if not self.is_read:
            return
        self.is_read = False
        self.read_at = None
        self.updated_at = now


__all__ = ["MAILBOX_INBOX", "MAILBOX_SENTBOX", "Receipt"]
