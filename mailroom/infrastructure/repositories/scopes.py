"""Chainable, lazily evaluated query scopes over mailroom tables."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from sqlalchemy import or_
from sqlalchemy.orm import Query

from mailroom.infrastructure.models import NotificationModel
from mailroom.utils import Clock, ensure_app_naive_datetime

T = TypeVar("T")
ScopeT = TypeVar("ScopeT", bound="Scope[Any]")


class Scope(Generic[T]):
    """Immutable wrapper around a query; every filter returns a new scope.

    Rows are converted with ``convert`` only when the scope is evaluated, and
    expiry filters read the clock at that moment rather than when the scope is
    built.
    """

    def __init__(
        self,
        query: Query,
        *,
        clock: Clock,
        convert: Callable[[Any], T],
        order_column: Any,
    ) -> None:
        self._query = query
        self._clock = clock
        self._convert = convert
        self._order_column = order_column

    def _derive(self: ScopeT, query: Query) -> ScopeT:
        derived = copy.copy(self)
        derived._query = query
        return derived

    def filter(self: ScopeT, *criteria: Any) -> ScopeT:
        return self._derive(self._query.filter(*criteria))

    def expired(self: ScopeT) -> ScopeT:
        """Keep rows whose notification expiry lies strictly in the past."""

        now = ensure_app_naive_datetime(self._clock())
        return self.filter(
            NotificationModel.expires.is_not(None),
            NotificationModel.expires < now,
        )

    def unexpired(self: ScopeT) -> ScopeT:
        """Keep rows that never expire or whose expiry is not yet in the past."""

        now = ensure_app_naive_datetime(self._clock())
        return self.filter(
            or_(
                NotificationModel.expires.is_(None),
                NotificationModel.expires >= now,
            )
        )

    def all(self) -> list[T]:
        rows = self._query.order_by(self._order_column.asc()).all()
        return [self._convert(row) for row in rows]

    def first(self) -> T | None:
        row = self._query.order_by(self._order_column.asc()).first()
        return self._convert(row) if row is not None else None

    def last(self) -> T | None:
        row = self._query.order_by(self._order_column.desc()).first()
        return self._convert(row) if row is not None else None

    def count(self) -> int:
        return self._query.order_by(None).count()

    def exists(self) -> bool:
        return self.first() is not None

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self.exists()


__all__ = ["Scope"]
