"""Use cases for reading a user's notifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from bcet_connect.config import get_settings
from bcet_connect.domain.entities import NotificationPage
from bcet_connect.domain.errors import InvalidArgument
from bcet_connect.infrastructure.repositories import NotificationRepository


def clamp_pagination(page: int | None, page_size: int | None, *, default: int, cap: int) -> tuple[int, int]:
    """Return ``(page, page_size)`` forced to positive values, size capped at ``cap``."""

    safe_page = page if isinstance(page, int) and page > 0 else 1
    safe_size = page_size if isinstance(page_size, int) and page_size > 0 else default
    return safe_page, min(safe_size, cap)


def list_notifications(
    session: Session,
    user_id: int,
    *,
    page: int | None = 1,
    page_size: int | None = None,
    only_unread: bool = False,
    hide_dismissed: bool = False,
) -> NotificationPage:
    """Return a newest-first page of the user's non-archived notifications."""

    if not user_id:
        raise InvalidArgument("A user id is required")
    settings = get_settings()
    page, limit = clamp_pagination(
        page,
        page_size,
        default=settings.notifications_default_page_size,
        cap=settings.notifications_max_page_size,
    )

    repository = NotificationRepository(session)
    items = repository.list_for_user(
        user_id,
        offset=(page - 1) * limit,
        limit=limit,
        only_unread=only_unread,
        hide_dismissed=hide_dismissed,
    )
    total = repository.count_for_user(
        user_id, only_unread=only_unread, hide_dismissed=hide_dismissed
    )
    return NotificationPage(
        items=list(items),
        total=total,
        page=page,
        limit=limit,
        unread_count=repository.count_unread(user_id),
    )


def count_unread(session: Session, user_id: int) -> int:
    """Return how many unread, non-archived notifications ``user_id`` has."""

    if not user_id:
        raise InvalidArgument("A user id is required")
    return NotificationRepository(session).count_unread(user_id)


__all__ = ["clamp_pagination", "count_unread", "list_notifications"]
