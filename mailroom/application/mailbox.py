"""Per-participant mailbox views derived from stored receipts."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from mailroom.domain.entities import Notification, participant_key
from mailroom.infrastructure.repositories import ReceiptRepository, ReceiptScope
from mailroom.utils import Clock, now_in_app_timezone


class Mailbox:
    """Read-only views over the receipts addressed to ``owner``.

    Nothing is cached: every view issues a fresh query when evaluated, so
    unread counts and expiry filters always reflect the current receipt set
    and clock.
    """

    def __init__(
        self, session: Session, owner: Any, *, clock: Clock = now_in_app_timezone
    ) -> None:
        participant_key(owner)
        self.owner = owner
        self._repository = ReceiptRepository(session, clock=clock)

    @property
    def receipts(self) -> ReceiptScope:
        """Every receipt of the owner, in delivery order."""

        return self._repository.for_participant(self.owner)

    @property
    def notifications(self) -> ReceiptScope:
        """Notifications delivered to the owner, yielded as :class:`Notification`."""

        return self.receipts.notifications_only().targets()

    @property
    def messages(self) -> ReceiptScope:
        """Messages the owner sent or received, yielded as :class:`Message`."""

        return self.receipts.messages_only().targets()

    @property
    def inbox(self) -> ReceiptScope:
        return self.receipts.messages_only().inbox()

    @property
    def sentbox(self) -> ReceiptScope:
        return self.receipts.messages_only().sentbox()

    def receipts_for(self, target: Notification) -> ReceiptScope:
        if target.id is None:
            raise ValueError("Cannot look up receipts for an unsaved notification")
        return self.receipts.for_target(target.id)

    def unread_count(self) -> int:
        return self.receipts.unread().count()


def get_mailbox(session: Session, owner: Any, *, clock: Clock | None = None) -> Mailbox:
    """Return the mailbox of ``owner``."""

    return Mailbox(session, owner, clock=clock or now_in_app_timezone)


__all__ = ["Mailbox", "get_mailbox"]
