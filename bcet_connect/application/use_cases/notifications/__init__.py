"""Notification use cases: creation, fan-out, listing and state changes."""

from .create_notification import create_notification
from .events import (
    broadcast_to_role,
    broadcast_to_topic,
    notify_broadcast,
    notify_comment,
    notify_like,
    notify_new_post,
)
from .list_notifications import clamp_pagination, count_unread, list_notifications
from .update_notifications import (
    archive_notifications,
    delete_notification,
    dismiss_notification,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "create_notification",
    "notify_new_post",
    "notify_like",
    "notify_comment",
    "notify_broadcast",
    "broadcast_to_role",
    "broadcast_to_topic",
    "clamp_pagination",
    "list_notifications",
    "count_unread",
    "mark_notification_read",
    "mark_all_notifications_read",
    "dismiss_notification",
    "delete_notification",
    "archive_notifications",
]
