"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

CATEGORY_CONTENT_UPDATE = "content-update"
CATEGORY_REACTION = "reaction"
CATEGORY_COMMENT = "comment"
CATEGORY_BROADCAST = "broadcast"
CATEGORY_SYSTEM = "system"
CATEGORY_GENERIC = "generic"

NOTIFICATION_CATEGORIES = (
    CATEGORY_CONTENT_UPDATE,
    CATEGORY_REACTION,
    CATEGORY_COMMENT,
    CATEGORY_BROADCAST,
    CATEGORY_SYSTEM,
    CATEGORY_GENERIC,
)

PRIORITY_LOW = "low"
PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"

NOTIFICATION_PRIORITIES = (PRIORITY_LOW, PRIORITY_NORMAL, PRIORITY_HIGH)


@dataclass
class Notification:
    """Information message delivered to a specific user.

    ``payload`` is an opaque key/value bag: its shape is agreed between the
    producer of the notification and the client that renders it.
    """

    id: int | None
    user_id: int
    title: str
    category: str = CATEGORY_GENERIC
    message: str = ""
    actor_id: int | None = None
    redirect_url: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    priority: str = PRIORITY_NORMAL
    is_read: bool = False
    read_at: datetime | None = None
    dismissed: bool = False
    archived: bool = False
    created_at: datetime | None = None


@dataclass
class NotificationPage:
    """A page of notifications plus the counters the client badge needs."""

    items: list[Notification]
    total: int
    page: int
    limit: int
    unread_count: int


__all__ = [
    "Notification",
    "NotificationPage",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "CATEGORY_CONTENT_UPDATE",
    "CATEGORY_REACTION",
    "CATEGORY_COMMENT",
    "CATEGORY_BROADCAST",
    "CATEGORY_SYSTEM",
    "CATEGORY_GENERIC",
    "PRIORITY_LOW",
    "PRIORITY_NORMAL",
    "PRIORITY_HIGH",
]
