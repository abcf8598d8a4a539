"""Shared commit helper for repositories."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bcet_connect.domain.errors import PersistenceFailure

logger = logging.getLogger(__name__)


def commit_or_rollback(session: Session, *, action: str) -> None:
    """Commit ``session``; on failure roll back and raise :class:`PersistenceFailure`."""

    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Database commit failed while trying to %s: %s", action, exc)
        raise PersistenceFailure(f"Could not {action}") from exc


__all__ = ["commit_or_rollback"]
