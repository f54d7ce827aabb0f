"""Use case for sending private messages between participants."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from mailroom.application.use_cases.notifications.validators import (
    ensure_valid_content,
    normalize_recipients,
)
from mailroom.config import Settings, get_settings
from mailroom.domain.entities import (
    MAILBOX_INBOX,
    MAILBOX_SENTBOX,
    Message,
    Receipt,
    participant_key,
)
from mailroom.infrastructure.repositories import NotificationRepository, ReceiptRepository
from mailroom.utils import Clock, now_in_app_timezone

logger = logging.getLogger(__name__)


def send_message(
    session: Session,
    sender: Any,
    recipients: Any,
    subject: str,
    body: str,
    *,
    settings: Settings | None = None,
    clock: Clock | None = None,
) -> Receipt:
    """Deliver a message to ``recipients`` and file a copy in the sender's sentbox.

    Each recipient gets an unread ``inbox`` receipt; the sender gets a read
    ``sentbox`` receipt, which is returned.
    """

    settings = settings or get_settings()
    clock = clock or now_in_app_timezone

    subject, body = ensure_valid_content(subject, body, settings=settings)
    participants = normalize_recipients(recipients)
    sender_type, sender_id = participant_key(sender)

    now = clock()
    message = Message(
        id=None,
        subject=subject,
        body=body,
        sender_type=sender_type,
        sender_id=sender_id,
        created_at=now,
    )
    message_repository = NotificationRepository(session, clock=clock)
    message_repository.add(message)

    receipt_repository = ReceiptRepository(session, clock=clock)
    for participant in participants:
        receiver_type, receiver_id = participant_key(participant)
        receipt_repository.add(
            Receipt(
                id=None,
                target=message,
                receiver_type=receiver_type,
                receiver_id=receiver_id,
                mailbox_type=MAILBOX_INBOX,
                created_at=now,
            )
        )

    sent = receipt_repository.add(
        Receipt(
            id=None,
            target=message,
            receiver_type=sender_type,
            receiver_id=sender_id,
            mailbox_type=MAILBOX_SENTBOX,
            is_read=True,
            read_at=now,
            created_at=now,
        )
    )
    message_repository.commit()
    logger.info(
        "Message %s sent by %s %s to %d recipient(s)",
        message.id,
        sender_type,
        sender_id,
        len(participants),
    )
    return sent


__all__ = ["send_message"]
