"""Fan-out of notifications to one or many recipients."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from mailroom.config import Settings, get_settings
from mailroom.domain.entities import Notification, Receipt, participant_key
from mailroom.infrastructure.repositories import NotificationRepository, ReceiptRepository
from mailroom.utils import Clock, ensure_app_timezone, now_in_app_timezone

from .validators import ensure_valid_content, normalize_recipients

logger = logging.getLogger(__name__)


@dataclass
class Delivery:
    """Outcome of a fan-out: the shared notification and one receipt per recipient."""

    notification: Notification
    receipts: list[Receipt] = field(default_factory=list)

    def receipt_for(self, participant: Any) -> Receipt | None:
        receiver_type, receiver_id = participant_key(participant)
        for receipt in self.receipts:
            if (receipt.receiver_type, receipt.receiver_id) == (receiver_type, receiver_id):
                return receipt
        return None


def dispatch_notification(
    session: Session,
    recipients: Any,
    subject: str,
    body: str,
    sender: Any | None = None,
    expires: datetime | None = None,
    notification_code: str | None = None,
    *,
    settings: Settings | None = None,
    clock: Clock | None = None,
) -> Delivery:
    """Store one notification and one receipt for every distinct recipient.

    Validation happens before anything touches the session. The notification
    and its receipts are staged in the same transaction and committed once;
    a storage failure rolls the whole fan-out back and surfaces as
    ``StorageError``.
    """

    settings = settings or get_settings()
    clock = clock or now_in_app_timezone

    subject, body = ensure_valid_content(subject, body, settings=settings)
    participants = normalize_recipients(recipients)

    sender_type, sender_id = participant_key(sender) if sender is not None else (None, None)
    now = clock()
    notification = Notification(
        id=None,
        subject=subject,
        body=body,
        sender_type=sender_type,
        sender_id=sender_id,
        expires=ensure_app_timezone(expires),
        notification_code=notification_code,
        created_at=now,
    )

    notification_repository = NotificationRepository(session, clock=clock)
    notification_repository.add(notification)
    receipt_repository = ReceiptRepository(session, clock=clock)
    delivery = Delivery(notification=notification)
    for participant in participants:
        receiver_type, receiver_id = participant_key(participant)
        receipt = Receipt(
            id=None,
            target=notification,
            receiver_type=receiver_type,
            receiver_id=receiver_id,
            created_at=now,
        )
        delivery.receipts.append(receipt_repository.add(receipt))

    notification_repository.commit()
    logger.info(
        "Notification %s delivered to %d recipient(s)",
        notification.id,
        len(delivery.receipts),
    )
    return delivery


def notify_all(
    session: Session,
    recipients: Any,
    subject: str,
    body: str,
    sender: Any | None = None,
    expires: datetime | None = None,
    notification_code: str | None = None,
    *,
    settings: Settings | None = None,
    clock: Clock | None = None,
) -> Notification:
    """Notify ``recipients`` and return the shared notification."""

    delivery = dispatch_notification(
        session,
        recipients,
        subject,
        body,
        sender,
        expires,
        notification_code,
        settings=settings,
        clock=clock,
    )
    return delivery.notification


def notify(
    session: Session,
    recipient: Any,
    subject: str,
    body: str,
    sender: Any | None = None,
    expires: datetime | None = None,
    notification_code: str | None = None,
    *,
    settings: Settings | None = None,
    clock: Clock | None = None,
) -> Receipt:
    """Notify a single ``recipient`` and return its receipt."""

    delivery = dispatch_notification(
        session,
        [recipient],
        subject,
        body,
        sender,
        expires,
        notification_code,
        settings=settings,
        clock=clock,
    )
    return delivery.receipts[0]


__all__ = ["Delivery", "dispatch_notification", "notify", "notify_all"]
