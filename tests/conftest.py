"""Shared fixtures for the mailroom test-suite."""

from __future__ import annotations

import pathlib
import sys
from datetime import datetime, timedelta, timezone

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from mailroom.config import Settings, reset_settings_cache
from mailroom.domain.entities import User
from mailroom.infrastructure.database import (
    build_engine,
    build_session_factory,
    initialize_database,
)
from mailroom.infrastructure.repositories import UserRepository
from mailroom.utils import get_app_timezone

FIXED_NOW = datetime(2026, 3, 14, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    """Clock returning a controllable instant."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture(autouse=True)
def _utc_application(monkeypatch: pytest.MonkeyPatch):
    """Pin the application timezone so stored timestamps round-trip predictably."""

    monkeypatch.setenv("APP_TIMEZONE", "UTC")
    reset_settings_cache()
    get_app_timezone.cache_clear()
    yield
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.fixture()
def settings() -> Settings:
    return Settings(database_url="sqlite://", subject_max_length=20, body_max_length=50)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture()
def session():
    engine = build_engine("sqlite://")
    initialize_database(engine)
    db = build_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture()
def users(session) -> list[User]:
    repository = UserRepository(session)
    return [
        repository.create(User(id=None, name=name, email=f"{name.lower()}@example.com"))
        for name in ("Alice", "Bob", "Carol")
    ]


@pytest.fixture()
def alice(users) -> User:
    return users[0]


@pytest.fixture()
def bob(users) -> User:
    return users[1]


@pytest.fixture()
def carol(users) -> User:
    return users[2]
