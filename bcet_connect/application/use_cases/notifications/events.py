"""Notification producers for feed activity and announcements."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from bcet_connect.domain.entities import (
    CATEGORY_BROADCAST,
    CATEGORY_COMMENT,
    CATEGORY_CONTENT_UPDATE,
    CATEGORY_REACTION,
    PRIORITY_HIGH,
    Notification,
)
from bcet_connect.infrastructure.notifications import EVENT_BROADCAST, NotificationPublisher

from .create_notification import create_notification


def _post_url(post_id: int) -> str:
    return f"/feed/{post_id}"


def notify_new_post(
    session: Session,
    publisher: NotificationPublisher | None,
    *,
    recipient_id: int,
    actor_id: int,
    post_id: int,
) -> Notification | None:
    """Tell a follower that someone they follow shared a post."""

    if recipient_id == actor_id:
        return None
    return create_notification(
        session,
        publisher,
        user_id=recipient_id,
        actor_id=actor_id,
        category=CATEGORY_CONTENT_UPDATE,
        title="New post",
        message="Someone you follow shared a new post",
        redirect_url=_post_url(post_id),
        payload={"post_id": post_id},
    )


def notify_like(
    session: Session,
    publisher: NotificationPublisher | None,
    *,
    recipient_id: int,
    actor_id: int,
    post_id: int,
) -> Notification | None:
    if recipient_id == actor_id:
        return None
    return create_notification(
        session,
        publisher,
        user_id=recipient_id,
        actor_id=actor_id,
        category=CATEGORY_REACTION,
        title="New like",
        message="Someone liked your post",
        redirect_url=_post_url(post_id),
        payload={"post_id": post_id},
    )


def notify_comment(
    session: Session,
    publisher: NotificationPublisher | None,
    *,
    recipient_id: int,
    actor_id: int,
    post_id: int,
) -> Notification | None:
    if recipient_id == actor_id:
        return None
    return create_notification(
        session,
        publisher,
        user_id=recipient_id,
        actor_id=actor_id,
        category=CATEGORY_COMMENT,
        title="New comment",
        message="Someone commented on your post",
        redirect_url=_post_url(post_id),
        payload={"post_id": post_id},
    )


def notify_broadcast(
    session: Session,
    publisher: NotificationPublisher | None,
    *,
    recipient_ids: Iterable[int],
    title: str,
    message: str = "",
    redirect_url: str | None = None,
    actor_id: int | None = None,
) -> list[Notification]:
    """Persist a high priority announcement for every recipient."""

    created: list[Notification] = []
    seen: set[int] = set()
    for recipient_id in recipient_ids:
        if not recipient_id or recipient_id in seen or recipient_id == actor_id:
            continue
        seen.add(recipient_id)
        created.append(
            create_notification(
                session,
                publisher,
                user_id=recipient_id,
                actor_id=actor_id,
                category=CATEGORY_BROADCAST,
                title=title,
                message=message,
                redirect_url=redirect_url,
                priority=PRIORITY_HIGH,
            )
        )
    return created


def broadcast_to_role(
    publisher: NotificationPublisher,
    *,
    role: str,
    title: str,
    message: str = "",
    redirect_url: str | None = None,
) -> None:
    """Push a transient announcement to everyone connected under ``role``.

    Nothing is stored; offline users do not receive it.
    """

    publisher.dispatch_to_role(
        role,
        event_type=EVENT_BROADCAST,
        payload={
            "role": role,
            "category": CATEGORY_BROADCAST,
            "title": title,
            "message": message,
            "redirect_url": redirect_url,
            "priority": PRIORITY_HIGH,
        },
    )


def broadcast_to_topic(
    publisher: NotificationPublisher,
    *,
    topic: str,
    title: str,
    message: str = "",
    redirect_url: str | None = None,
) -> None:
    """Push a transient announcement to the channels subscribed to ``topic``."""

    publisher.dispatch_to_topic(
        topic,
        event_type=EVENT_BROADCAST,
        payload={
            "topic": topic,
            "category": CATEGORY_BROADCAST,
            "title": title,
            "message": message,
            "redirect_url": redirect_url,
            "priority": PRIORITY_HIGH,
        },
    )


__all__ = [
    "notify_new_post",
    "notify_like",
    "notify_comment",
    "notify_broadcast",
    "broadcast_to_role",
    "broadcast_to_topic",
]
