"""Use case persisting the expiry of a notification."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from mailroom.domain.entities import Notification
from mailroom.infrastructure.repositories import NotificationRepository
from mailroom.utils import Clock, now_in_app_timezone

logger = logging.getLogger(__name__)


def expire_notification(
    session: Session, notification: Notification, *, clock: Clock | None = None
) -> Notification:
    """Expire ``notification`` and save it.

    Already expired notifications are returned untouched: neither
    :meth:`Notification.expire` nor the repository is called.
    """

    clock = clock or now_in_app_timezone
    if notification.is_expired(clock):
        return notification

    notification.expire(clock)
    NotificationRepository(session, clock=clock).save(notification)
    logger.info("Notification %s expired at %s", notification.id, notification.expires)
    return notification


__all__ = ["expire_notification"]
