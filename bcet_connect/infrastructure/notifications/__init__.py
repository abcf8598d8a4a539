"""Realtime notification helpers for the infrastructure layer."""

from .publisher import (
    EVENT_ALL_READ,
    EVENT_BROADCAST,
    EVENT_NEW,
    EVENT_READ,
    NotificationPublisher,
    serialize_notification,
)
from .registry import Channel, DeliveryRegistry

__all__ = [
    "Channel",
    "DeliveryRegistry",
    "NotificationPublisher",
    "serialize_notification",
    "EVENT_NEW",
    "EVENT_READ",
    "EVENT_ALL_READ",
    "EVENT_BROADCAST",
]
