"""Session helpers shared by the repository implementations."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mailroom.domain.errors import StorageError

logger = logging.getLogger(__name__)


def flush_or_raise(session: Session) -> None:
    """Flush pending changes, translating driver failures into ``StorageError``."""

    try:
        session.flush()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Flushing pending changes failed: %s", exc)
        raise StorageError("Could not stage changes in the database") from exc


def commit_or_raise(session: Session) -> None:
    """Commit the current transaction, rolling back when the database refuses it."""

    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Committing changes failed: %s", exc)
        raise StorageError("Could not persist changes to the database") from exc


__all__ = ["commit_or_raise", "flush_or_raise"]
