"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository, NotificationScope
from .receipt_repository import ReceiptRepository, ReceiptScope
from .scopes import Scope
from .user_repository import UserRepository

__all__ = [
    "NotificationRepository",
    "NotificationScope",
    "ReceiptRepository",
    "ReceiptScope",
    "Scope",
    "UserRepository",
]
