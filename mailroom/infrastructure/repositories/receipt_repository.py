"""Persistence helpers for receipt entities."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session, contains_eager

from mailroom.domain.entities import (
    KIND_MESSAGE,
    KIND_NOTIFICATION,
    MAILBOX_INBOX,
    MAILBOX_SENTBOX,
    Notification,
    Receipt,
    participant_key,
)
from mailroom.infrastructure.models import NotificationModel, ReceiptModel
from mailroom.utils import (
    Clock,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .base import commit_or_raise, flush_or_raise
from .notification_repository import NotificationRepository
from .scopes import Scope


def _receipt_target(receipt: Receipt) -> Notification:
    return receipt.target


class ReceiptScope(Scope[Any]):
    """Query scope over receipts joined with their notification."""

    def notifications_only(self) -> "ReceiptScope":
        return self.filter(NotificationModel.kind == KIND_NOTIFICATION)

    def messages_only(self) -> "ReceiptScope":
        return self.filter(NotificationModel.kind == KIND_MESSAGE)

    def inbox(self) -> "ReceiptScope":
        return self.filter(ReceiptModel.mailbox_type == MAILBOX_INBOX)

    def sentbox(self) -> "ReceiptScope":
        return self.filter(ReceiptModel.mailbox_type == MAILBOX_SENTBOX)

    def unread(self) -> "ReceiptScope":
        return self.filter(ReceiptModel.is_read.is_(False))

    def read(self) -> "ReceiptScope":
        return self.filter(ReceiptModel.is_read.is_(True))

    def for_target(self, target_id: int) -> "ReceiptScope":
        return self.filter(ReceiptModel.notification_id == target_id)

    def targets(self) -> "ReceiptScope":
        """Yield the referenced notification or message instead of the receipt."""

        projected = self._derive(self._query)
        base_convert = self._convert
        projected._convert = lambda row: _receipt_target(base_convert(row))
        return projected


class ReceiptRepository:
    """Provide storage operations for :class:`Receipt` objects."""

    def __init__(self, session: Session, *, clock: Clock = now_in_app_timezone) -> None:
        self.session = session
        self.clock = clock

    def get(self, receipt_id: int) -> Receipt | None:
        model = self.session.get(ReceiptModel, receipt_id)
        return self._to_entity(model) if model else None

    def get_for(self, target_id: int, participant: Any) -> Receipt | None:
        """Return ``participant``'s receipt for the notification ``target_id``."""

        return self.for_participant(participant).for_target(target_id).first()

    def for_participant(self, participant: Any) -> ReceiptScope:
        receiver_type, receiver_id = participant_key(participant)
        query = (
            self.session.query(ReceiptModel)
            .join(NotificationModel, ReceiptModel.notification_id == NotificationModel.id)
            .options(contains_eager(ReceiptModel.notification))
            .filter(ReceiptModel.receiver_type == receiver_type)
            .filter(ReceiptModel.receiver_id == receiver_id)
        )
        return ReceiptScope(
            query,
            clock=self.clock,
            convert=self._to_entity,
            order_column=ReceiptModel.id,
        )

    def add(self, receipt: Receipt) -> Receipt:
        """Stage ``receipt`` and assign its identifier without committing."""

        if receipt.target.id is None:
            raise ValueError("The receipt target must be stored before its receipts")
        if receipt.created_at is None:
            receipt.created_at = self.clock()
        model = ReceiptModel()
        self._apply_entity_to_model(model, receipt, include_creation_fields=True)
        self.session.add(model)
        flush_or_raise(self.session)
        receipt.id = model.id
        receipt.created_at = ensure_app_timezone(receipt.created_at)
        return receipt

    def save(self, receipt: Receipt) -> Receipt:
        """Write the read state of ``receipt`` and commit."""

        if receipt.id is None:
            raise ValueError("Receipt id is required for updates")
        model = self.session.get(ReceiptModel, receipt.id)
        if model is None:
            msg = f"Receipt with id {receipt.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, receipt, include_creation_fields=False)
        self.session.add(model)
        commit_or_raise(self.session)
        return receipt

    @staticmethod
    def _apply_entity_to_model(
        model: ReceiptModel, receipt: Receipt, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            model.notification_id = receipt.target.id
            model.receiver_type = receipt.receiver_type
            model.receiver_id = receipt.receiver_id
            model.mailbox_type = receipt.mailbox_type
            model.created_at = ensure_app_naive_datetime(receipt.created_at)
        model.is_read = receipt.is_read
        model.is_deleted = receipt.is_deleted
        model.read_at = ensure_app_naive_datetime(receipt.read_at)
        model.updated_at = ensure_app_naive_datetime(receipt.updated_at)

    @staticmethod
    def _to_entity(model: ReceiptModel) -> Receipt:
        return Receipt(
            id=model.id,
            target=NotificationRepository._to_entity(model.notification),
            receiver_type=model.receiver_type,
            receiver_id=model.receiver_id,
            mailbox_type=model.mailbox_type,
            is_read=model.is_read,
            is_deleted=model.is_deleted,
            read_at=ensure_app_timezone(model.read_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["ReceiptRepository", "ReceiptScope"]
