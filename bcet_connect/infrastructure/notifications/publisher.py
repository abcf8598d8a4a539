"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from anyio import from_thread

from bcet_connect.domain.entities import Notification
from bcet_connect.utils import isoformat_or_none

from .registry import DeliveryRegistry

logger = logging.getLogger(__name__)

EVENT_NEW = "notification:new"
EVENT_READ = "notification:read"
EVENT_ALL_READ = "notification:allRead"
EVENT_BROADCAST = "notification:broadcast"


class NotificationPublisher:
    """Serialize notifications and schedule their delivery.

    Every push is fire-and-forget: it is scheduled on the running event loop
    (or handed to it from a worker thread) and its outcome is only logged.
    """

    def __init__(self, registry: DeliveryRegistry) -> None:
        self._registry = registry
        self._pending: set[asyncio.Task[Any]] = set()

    @property
    def registry(self) -> DeliveryRegistry:
        return self._registry

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its user."""

        message = {"type": EVENT_NEW, "data": serialize_notification(notification)}
        self._schedule(self._registry.push_to_principal, notification.user_id, message)

    def dispatch_event(self, user_id: int, *, event_type: str, payload: Any) -> None:
        """Schedule a realtime ``event_type`` event for ``user_id``."""

        if not user_id:
            return
        message = {"type": event_type, "data": payload}
        self._schedule(self._registry.push_to_principal, user_id, message)

    def dispatch_to_role(self, role: str, *, event_type: str, payload: Any) -> None:
        """Schedule an event for every channel connected under ``role``."""

        message = {"type": event_type, "data": payload}
        self._schedule(self._registry.push_to_role, role, message)

    def dispatch_to_topic(self, topic: str, *, event_type: str, payload: Any) -> None:
        """Schedule an event for every channel subscribed to ``topic``."""

        message = {"type": event_type, "data": payload}
        self._schedule(self._registry.push_to_topic, topic, message)

    async def drain(self) -> None:
        """Wait for the pushes scheduled so far to finish."""

        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _schedule(
        self,
        push: Callable[[Any, dict[str, Any]], Awaitable[int]],
        target: Any,
        message: dict[str, Any],
    ) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                # Sync endpoints run in anyio worker threads.
                from_thread.run_sync(self._spawn, push, target, message)
            except RuntimeError:
                logger.debug(
                    "No event loop available; %s push to %s skipped",
                    message.get("type"),
                    target,
                )
        else:
            self._spawn(push, target, message)

    def _spawn(
        self,
        push: Callable[[Any, dict[str, Any]], Awaitable[int]],
        target: Any,
        message: dict[str, Any],
    ) -> None:
        task = asyncio.get_running_loop().create_task(push(target, message))
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Realtime push failed: %s", exc, exc_info=exc)
        else:
            logger.debug("Realtime push reached %s channel(s)", task.result())


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "actor_id": notification.actor_id,
        "category": notification.category,
        "title": notification.title,
        "message": notification.message,
        "redirect_url": notification.redirect_url,
        "payload": dict(notification.payload or {}),
        "priority": notification.priority,
        "is_read": notification.is_read,
        "read_at": isoformat_or_none(notification.read_at),
        "created_at": isoformat_or_none(notification.created_at),
    }


__all__ = [
    "EVENT_ALL_READ",
    "EVENT_BROADCAST",
    "EVENT_NEW",
    "EVENT_READ",
    "NotificationPublisher",
    "serialize_notification",
]
