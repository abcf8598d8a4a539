"""Use cases for read, dismiss, delete and archive transitions."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from bcet_connect.domain.entities import Notification
from bcet_connect.domain.errors import InvalidArgument, NotFound
from bcet_connect.infrastructure.notifications import (
    EVENT_ALL_READ,
    EVENT_READ,
    NotificationPublisher,
)
from bcet_connect.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)

_NOT_FOUND_MESSAGE = "Notification not found"


def _require_ids(user_id: int, notification_id: int) -> None:
    if not user_id:
        raise InvalidArgument("A user id is required")
    if not isinstance(notification_id, int) or notification_id <= 0:
        raise InvalidArgument("Invalid notification id")


def _push(publisher: NotificationPublisher | None, user_id: int, event_type: str, payload: dict) -> None:
    if publisher is None:
        return
    try:
        publisher.dispatch_event(user_id, event_type=event_type, payload=payload)
    except Exception:  # noqa: BLE001 - the state change is already committed
        logger.warning("Could not push %s to user %s", event_type, user_id, exc_info=True)


def mark_notification_read(
    session: Session,
    publisher: NotificationPublisher | None,
    user_id: int,
    notification_id: int,
) -> Notification:
    """Mark one of ``user_id``'s notifications as read.

    Repeating the call is harmless and keeps the original ``read_at``.
    """

    _require_ids(user_id, notification_id)
    repository = NotificationRepository(session)
    notification = repository.mark_as_read(user_id, notification_id)
    if notification is None:
        raise NotFound(_NOT_FOUND_MESSAGE)

    _push(
        publisher,
        user_id,
        EVENT_READ,
        {"id": notification.id, "unread_count": repository.count_unread(user_id)},
    )
    return notification


def mark_all_notifications_read(
    session: Session,
    publisher: NotificationPublisher | None,
    user_id: int,
) -> int:
    """Mark every unread notification of ``user_id`` as read; return how many changed."""

    if not user_id:
        raise InvalidArgument("A user id is required")
    modified = NotificationRepository(session).mark_all_as_read(user_id)
    _push(publisher, user_id, EVENT_ALL_READ, {"modified": modified, "unread_count": 0})
    return modified


def dismiss_notification(session: Session, user_id: int, notification_id: int) -> Notification:
    _require_ids(user_id, notification_id)
    notification = NotificationRepository(session).dismiss(user_id, notification_id)
    if notification is None:
        raise NotFound(_NOT_FOUND_MESSAGE)
    return notification


def delete_notification(session: Session, user_id: int, notification_id: int) -> None:
    _require_ids(user_id, notification_id)
    if not NotificationRepository(session).delete(user_id, notification_id):
        raise NotFound(_NOT_FOUND_MESSAGE)


def archive_notifications(session: Session, user_id: int, older_than: datetime) -> int:
    """Archive ``user_id``'s notifications created before ``older_than``."""

    if not user_id:
        raise InvalidArgument("A user id is required")
    if older_than is None:
        raise InvalidArgument("An archive cutoff is required")
    archived = NotificationRepository(session).archive_older_than(user_id, older_than)
    if archived:
        logger.info("Archived %d notification(s) for user %s", archived, user_id)
    return archived


__all__ = [
    "archive_notifications",
    "delete_notification",
    "dismiss_notification",
    "mark_all_notifications_read",
    "mark_notification_read",
]
