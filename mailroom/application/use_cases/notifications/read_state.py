"""Use cases reading and updating per-recipient read state."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from mailroom.domain.entities import Notification, Receipt, participant_key
from mailroom.domain.errors import NotFoundError
from mailroom.infrastructure.repositories import ReceiptRepository
from mailroom.utils import Clock, now_in_app_timezone


def _find_receipt(
    repository: ReceiptRepository, target: Notification, participant: Any
) -> Receipt | None:
    if target.id is None or getattr(participant, "id", None) is None:
        return None
    return repository.get_for(target.id, participant)


def _require_receipt(
    repository: ReceiptRepository, target: Notification, participant: Any
) -> Receipt:
    receipt = _find_receipt(repository, target, participant)
    if receipt is None:
        receiver_type, receiver_id = participant_key(participant)
        msg = f"No receipt of {target.kind} {target.id} for {receiver_type} {receiver_id}"
        raise NotFoundError(msg)
    return receipt


def mark_as_read(
    session: Session,
    target: Notification,
    participant: Any,
    *,
    clock: Clock | None = None,
) -> Receipt:
    """Flag ``participant``'s receipt for ``target`` as read."""

    clock = clock or now_in_app_timezone
    repository = ReceiptRepository(session, clock=clock)
    receipt = _require_receipt(repository, target, participant)
    if receipt.is_read:
        return receipt
    receipt.mark_as_read(clock())
    return repository.save(receipt)


def mark_as_unread(
    session: Session,
    target: Notification,
    participant: Any,
    *,
    clock: Clock | None = None,
) -> Receipt:
    """Flag ``participant``'s receipt for ``target`` as unread."""

    clock = clock or now_in_app_timezone
    repository = ReceiptRepository(session, clock=clock)
    receipt = _require_receipt(repository, target, participant)
    if not receipt.is_read:
        return receipt
    receipt.mark_as_unread(clock())
    return repository.save(receipt)


def is_read(session: Session, target: Notification, participant: Any) -> bool:
    """Return ``True`` when ``participant`` has read ``target``.

    Participants without a receipt get ``False`` rather than an error.
    """

    receipt = _find_receipt(ReceiptRepository(session), target, participant)
    return receipt is not None and receipt.is_read


def is_unread(session: Session, target: Notification, participant: Any) -> bool:
    """Return ``True`` when ``participant`` holds an unread receipt for ``target``."""

    receipt = _find_receipt(ReceiptRepository(session), target, participant)
    return receipt is not None and not receipt.is_read


__all__ = ["is_read", "is_unread", "mark_as_read", "mark_as_unread"]
