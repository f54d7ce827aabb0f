"""Domain entities exposed by the application."""

from .message import Message
from .notification import (
    EXPIRE_OFFSET,
    KIND_MESSAGE,
    KIND_NOTIFICATION,
    Notification,
)
from .participant import Participant, participant_key, participant_type
from .receipt import MAILBOX_INBOX, MAILBOX_SENTBOX, Receipt
from .user import User

__all__ = [
    "EXPIRE_OFFSET",
    "KIND_MESSAGE",
    "KIND_NOTIFICATION",
    "MAILBOX_INBOX",
    "MAILBOX_SENTBOX",
    "Message",
    "Notification",
    "Participant",
    "participant_key",
    "participant_type",
    "Receipt",
    "User",
]
