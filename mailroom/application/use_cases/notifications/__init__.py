"""Use cases for delivering and tracking notifications."""

from .expire import expire_notification
from .notify import Delivery, dispatch_notification, notify, notify_all
from .read_state import is_read, is_unread, mark_as_read, mark_as_unread
from .validators import ensure_valid_content, normalize_recipients

__all__ = [
    "Delivery",
    "dispatch_notification",
    "ensure_valid_content",
    "expire_notification",
    "is_read",
    "is_unread",
    "mark_as_read",
    "mark_as_unread",
    "normalize_recipients",
    "notify",
    "notify_all",
]
