"""Domain entity representing a broadcast notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import ClassVar

from mailroom.utils import Clock, ensure_app_timezone, now_in_app_timezone

KIND_NOTIFICATION = "notification"
KIND_MESSAGE = "message"

EXPIRE_OFFSET = timedelta(seconds=1)


@dataclass
class Notification:
    """Content shared by every receipt delivered for one broadcast event.

    Only ``expires`` changes after creation, and only through :meth:`expire`.
    A notification is *expired* while ``expires`` lies strictly in the past;
    the state is computed against the clock on every call and never stored.
    """

    kind: ClassVar[str] = KIND_NOTIFICATION

    id: int | None
    subject: str
    body: str
    sender_type: str | None = None
    sender_id: int | None = None
    expires: datetime | None = None
    notification_code: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_system(self) -> bool:
        """Return ``True`` when nobody in particular sent the notification."""

        return self.sender_id is None

    def is_expired(self, clock: Clock = now_in_app_timezone) -> bool:
        """Return ``True`` when ``expires`` is set and strictly before now."""

        expires = ensure_app_timezone(self.expires)
        if expires is None:
            return False
        return expires < ensure_app_timezone(clock())

    def expire(self, clock: Clock = now_in_app_timezone) -> None:
        """Move ``expires`` one second into the past unless already expired.

        The change is staged on the instance only; persisting it is up to the
        caller.
        """

        if self.is_expired(clock):
            return
        self.expires = clock() - EXPIRE_OFFSET


__all__ = ["EXPIRE_OFFSET", "KIND_MESSAGE", "KIND_NOTIFICATION", "Notification"]
