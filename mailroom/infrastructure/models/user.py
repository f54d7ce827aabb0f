"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from mailroom.infrastructure.database import Base
from mailroom.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a mailbox owner."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    is_active = Column(Boolean, nullable=False, default=True)


__all__ = ["UserModel"]
