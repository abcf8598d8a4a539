"""Use case for persisting a notification and pushing it to live channels."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from bcet_connect.domain.entities import (
    CATEGORY_GENERIC,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    PRIORITY_NORMAL,
    Notification,
)
from bcet_connect.domain.errors import InvalidArgument
from bcet_connect.infrastructure.notifications import NotificationPublisher
from bcet_connect.infrastructure.repositories import NotificationRepository
from bcet_connect.utils import now_utc

logger = logging.getLogger(__name__)

_TITLE_MAX_LENGTH = 160


def create_notification(
    session: Session,
    publisher: NotificationPublisher | None,
    *,
    user_id: int | None,
    title: str,
    category: str = CATEGORY_GENERIC,
    message: str = "",
    actor_id: int | None = None,
    redirect_url: str | None = None,
    payload: dict[str, Any] | None = None,
    priority: str = PRIORITY_NORMAL,
) -> Notification:
    """Store a notification for ``user_id`` and push a copy to their channels.

    The record is committed before anything is pushed. A failing push is
    logged and otherwise ignored: clients that miss it see the notification
    on their next listing.
    """

    if not user_id:
        raise InvalidArgument("A notification requires a recipient")
    if category not in NOTIFICATION_CATEGORIES:
        raise InvalidArgument(f"Unknown notification category '{category}'")
    if priority not in NOTIFICATION_PRIORITIES:
        raise InvalidArgument(f"Unknown notification priority '{priority}'")
    title = (title or "").strip()
    if not title:
        raise InvalidArgument("A notification requires a title")

    notification = Notification(
        id=None,
        user_id=user_id,
        actor_id=actor_id,
        category=category,
        title=title[:_TITLE_MAX_LENGTH],
        message=(message or "").strip(),
        redirect_url=redirect_url,
        payload=dict(payload or {}),
        priority=priority,
        created_at=now_utc(),
    )
    saved = NotificationRepository(session).create(notification)

    if publisher is not None:
        try:
            publisher.dispatch(saved)
        except Exception:  # noqa: BLE001 - delivery never fails the create
            logger.warning(
                "Realtime delivery of notification %s to user %s failed",
                saved.id,
                saved.user_id,
                exc_info=True,
            )
    return saved


__all__ = ["create_notification"]
