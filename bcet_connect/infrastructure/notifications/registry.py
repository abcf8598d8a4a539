"""Registry of live websocket channels grouped by user, role and topic."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from typing import Any, DefaultDict, Protocol, Set

from bcet_connect.domain.errors import DeliveryUnavailable

logger = logging.getLogger(__name__)


class Channel(Protocol):
    """Minimal interface of a push channel (a Starlette ``WebSocket`` fits)."""

    async def send_json(self, data: Any) -> None: ...

    async def close(self, code: int = 1000, reason: str | None = None) -> None: ...


class DeliveryRegistry:
    """Track live channels per principal, role and topic and fan payloads out.

    Built once per application and handed to whoever needs to push. Pushing
    before :meth:`init` or after :meth:`shutdown` reaches nobody: it logs and
    returns zero instead of raising, so a notification never depends on live
    delivery.
    """

    def __init__(self) -> None:
        self._by_principal: DefaultDict[int, Set[Channel]] = defaultdict(set)
        self._by_role: DefaultDict[str, Set[Channel]] = defaultdict(set)
        self._by_topic: DefaultDict[str, Set[Channel]] = defaultdict(set)
        self._topics: dict[Channel, Set[str]] = {}
        self._owners: dict[Channel, tuple[int, str | None]] = {}
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def init(self) -> None:
        self._running = True
        logger.info("Delivery registry started")

    async def shutdown(self) -> None:
        """Stop delivering and close every channel still registered."""

        self._running = False
        channels = list(self._owners)
        for channel in channels:
            try:
                await channel.close(code=1001, reason="Server shutting down")
            except Exception as exc:  # noqa: BLE001 - channel may already be gone
                logger.debug("Ignoring error while closing channel: %s", exc)
        self._by_principal.clear()
        self._by_role.clear()
        self._by_topic.clear()
        self._topics.clear()
        self._owners.clear()
        logger.info("Delivery registry stopped (%d channel(s) closed)", len(channels))

    def register_channel(self, principal_id: int, role: str | None, channel: Channel) -> None:
        """Register ``channel`` for ``principal_id`` and ``role``."""

        if channel in self._owners:
            if self._owners[channel] == (principal_id, role):
                return
            self.unregister_channel(channel)
        self._owners[channel] = (principal_id, role)
        self._by_principal[principal_id].add(channel)
        if role:
            self._by_role[role].add(channel)

    def subscribe(self, channel: Channel, topics: Iterable[Any]) -> list[str]:
        """Join ``channel`` to each named topic and return the names joined.

        Blank or non-string names are skipped. Subscriptions last until the
        channel is unregistered.
        """

        if channel not in self._owners:
            raise KeyError("Channel is not registered")
        joined = []
        for topic in topics:
            if not isinstance(topic, str) or not topic.strip():
                continue
            name = topic.strip()
            self._by_topic[name].add(channel)
            self._topics.setdefault(channel, set()).add(name)
            joined.append(name)
        return joined

    def unregister_channel(self, channel: Channel) -> None:
        """Forget ``channel``; unknown channels are ignored."""

        owner = self._owners.pop(channel, None)
        if owner is None:
            return
        principal_id, role = owner
        self._discard(self._by_principal, principal_id, channel)
        if role:
            self._discard(self._by_role, role, channel)
        for topic in self._topics.pop(channel, ()):
            self._discard(self._by_topic, topic, channel)

    def connection_count(
        self,
        principal_id: int | None = None,
        *,
        role: str | None = None,
        topic: str | None = None,
    ) -> int:
        if principal_id is not None:
            return len(self._by_principal.get(principal_id, ()))
        if role is not None:
            return len(self._by_role.get(role, ()))
        if topic is not None:
            return len(self._by_topic.get(topic, ()))
        return len(self._owners)

    async def push_to_principal(self, principal_id: int, payload: dict[str, Any]) -> int:
        """Send ``payload`` to every live channel of ``principal_id``."""

        if not self._ensure_running(f"user {principal_id}"):
            return 0
        channels = list(self._by_principal.get(principal_id, ()))
        return await self._send_all(channels, payload)

    async def push_to_role(self, role: str, payload: dict[str, Any]) -> int:
        """Send ``payload`` to every live channel registered under ``role``."""

        if not self._ensure_running(f"role {role}"):
            return 0
        channels = list(self._by_role.get(role, ()))
        return await self._send_all(channels, payload)

    async def push_to_topic(self, topic: str, payload: dict[str, Any]) -> int:
        """Send ``payload`` to every channel subscribed to ``topic``."""

        if not self._ensure_running(f"topic {topic}"):
            return 0
        channels = list(self._by_topic.get(topic, ()))
        return await self._send_all(channels, payload)

    def _ensure_running(self, target: str) -> bool:
        if self._running:
            return True
        error = DeliveryUnavailable()
        logger.warning("Push to %s skipped: %s", target, error.message)
        return False

    async def _send_all(self, channels: list[Channel], payload: dict[str, Any]) -> int:
        reached = 0
        for channel in channels:
            try:
                await channel.send_json(payload)
            except Exception as exc:  # noqa: BLE001 - drop the broken channel
                logger.info("Dropping channel after failed send: %s", exc)
                self.unregister_channel(channel)
            else:
                reached += 1
        return reached

    @staticmethod
    def _discard(index: DefaultDict[Any, Set[Channel]], key: Any, channel: Channel) -> None:
        channels = index.get(key)
        if channels is None:
            return
        channels.discard(channel)
        if not channels:
            index.pop(key, None)


__all__ = ["Channel", "DeliveryRegistry"]
