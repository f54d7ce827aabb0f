"""ORM models used by the application infrastructure."""

from .notification import NotificationModel
from .receipt import ReceiptModel
from .user import UserModel

__all__ = [
    "NotificationModel",
    "ReceiptModel",
    "UserModel",
]
