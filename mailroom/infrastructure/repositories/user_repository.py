"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from mailroom.domain.entities import User
from mailroom.infrastructure.models import UserModel
from mailroom.utils import ensure_app_naive_datetime, ensure_app_timezone

from .base import commit_or_raise


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        model.name = user.name
        model.email = user.email
        model.is_active = user.is_active
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        self.session.add(model)
        commit_or_raise(self.session)
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            created_at=ensure_app_timezone(model.created_at),
            is_active=model.is_active,
        )


__all__ = ["UserRepository"]
