"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mailroom.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    In-memory SQLite databases share a single connection so every session sees
    the same tables.
    """

    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    options: dict[str, object] = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    logger.debug("Using SQLite database at %s", database_url)
    return create_engine(database_url, **options)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""

    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def initialize_database(engine: Engine) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from mailroom.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Return the cached session factory for the configured database."""

    settings: Settings = get_settings()
    engine = build_engine(settings.database_url)
    initialize_database(engine)
    return build_session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
