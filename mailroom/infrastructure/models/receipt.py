"""SQLAlchemy model for per-recipient receipts."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from mailroom.infrastructure.database import Base
from mailroom.utils import now_in_app_naive_datetime


class ReceiptModel(Base):
    """Database representation of a delivered notification or message."""

    __tablename__ = "receipt"
    __table_args__ = (
        UniqueConstraint(
            "notification_id",
            "receiver_type",
            "receiver_id",
            "mailbox_type",
            name="uq_receipt_notification_receiver_mailbox",
        ),
        Index(
            "uq_receipt_notification_receiver",
            "notification_id",
            "receiver_type",
            "receiver_id",
            unique=True,
            sqlite_where=text("mailbox_type IS NULL"),
            postgresql_where=text("mailbox_type IS NULL"),
        ),
        Index("ix_receipt_receiver", "receiver_type", "receiver_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    receiver_type = Column(String(50), nullable=False)
    receiver_id = Column(Integer, nullable=False)
    mailbox_type = Column(String(25), nullable=True)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    is_deleted = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    read_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True)

    notification = relationship("NotificationModel", lazy="joined")


__all__ = ["ReceiptModel"]
