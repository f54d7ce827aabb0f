"""Persistence helpers for notification and message entities."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from mailroom.domain.entities import KIND_MESSAGE, KIND_NOTIFICATION, Message, Notification
from mailroom.domain.errors import ValidationError
from mailroom.infrastructure.models import NotificationModel, ReceiptModel
from mailroom.utils import (
    Clock,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .base import commit_or_raise, flush_or_raise
from .scopes import Scope


class NotificationScope(Scope[Notification]):
    """Query scope yielding :class:`Notification` or :class:`Message` entities."""

    def unread(self) -> "NotificationScope":
        """Keep notifications that at least one recipient has not read yet."""

        pending = select(ReceiptModel.notification_id).where(
            ReceiptModel.is_read.is_(False)
        )
        return self.filter(NotificationModel.id.in_(pending))

    def with_code(self, notification_code: str) -> "NotificationScope":
        return self.filter(NotificationModel.notification_code == notification_code)


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session, *, clock: Clock = now_in_app_timezone) -> None:
        self.session = session
        self.clock = clock

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def scope(self, kind: str | None = KIND_NOTIFICATION) -> NotificationScope:
        """Return a scope over stored notifications of ``kind`` (all kinds if ``None``)."""

        query = self.session.query(NotificationModel)
        if kind is not None:
            query = query.filter(NotificationModel.kind == kind)
        return NotificationScope(
            query,
            clock=self.clock,
            convert=self._to_entity,
            order_column=NotificationModel.id,
        )

    def add(self, notification: Notification) -> Notification:
        """Stage ``notification`` in the session and assign its identifier.

        The same instance is returned so receipts created afterwards can share
        it. Nothing is committed. Length limits are checked by the use cases,
        which know the configured settings; blank content is refused here.
        """

        for field in ("subject", "body"):
            value = getattr(notification, field)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(field, "can't be blank")
        if notification.created_at is None:
            notification.created_at = self.clock()
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        flush_or_raise(self.session)
        notification.id = model.id
        notification.created_at = ensure_app_timezone(notification.created_at)
        notification.expires = ensure_app_timezone(notification.expires)
        return notification

    def save(self, notification: Notification) -> Notification:
        """Write the mutable fields of ``notification`` and commit."""

        if notification.id is None:
            raise ValueError("Notification id is required for updates")
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            msg = f"Notification with id {notification.id} not found"
            raise ValueError(msg)
        notification.updated_at = self.clock()
        self._apply_entity_to_model(model, notification, include_creation_fields=False)
        self.session.add(model)
        commit_or_raise(self.session)
        return notification

    def commit(self) -> None:
        commit_or_raise(self.session)

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.kind = notification.kind
            model.subject = notification.subject
            model.body = notification.body
            model.sender_type = notification.sender_type
            model.sender_id = notification.sender_id
            model.notification_code = notification.notification_code
            model.created_at = ensure_app_naive_datetime(notification.created_at)
        model.expires = ensure_app_naive_datetime(notification.expires)
        model.updated_at = ensure_app_naive_datetime(notification.updated_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        entity_class = Message if model.kind == KIND_MESSAGE else Notification
        return entity_class(
            id=model.id,
            subject=model.subject,
            body=model.body,
            sender_type=model.sender_type,
            sender_id=model.sender_id,
            expires=ensure_app_timezone(model.expires),
            notification_code=model.notification_code,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository", "NotificationScope"]
