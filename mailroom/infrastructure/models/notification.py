"""SQLAlchemy model for notifications and messages."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from mailroom.infrastructure.database import Base
from mailroom.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation shared by notifications and messages."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(String(20), nullable=False, default="notification", index=True)
    subject = Column(Text, nullable=False)
    body = Column(Text, nullable=False)
    sender_type = Column(String(50), nullable=True)
    sender_id = Column(Integer, nullable=True)
    expires = Column(DateTime(), nullable=True, index=True)
    notification_code = Column(String(120), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
