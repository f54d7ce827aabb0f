"""Aggregate application use cases."""

from .messages import send_message
from .notifications import (
    expire_notification,
    is_read,
    is_unread,
    mark_as_read,
    mark_as_unread,
    notify,
    notify_all,
)

__all__ = [
    "expire_notification",
    "is_read",
    "is_unread",
    "mark_as_read",
    "mark_as_unread",
    "notify",
    "notify_all",
    "send_message",
]
