"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    actor_id: int | None = None
    category: str
    title: str
    message: str = ""
    redirect_url: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    priority: str
    is_read: bool
    read_at: datetime | None = None
    dismissed: bool = False
    created_at: datetime


class NotificationListResponse(BaseModel):
    items: list[NotificationRead]
    total: int
    page: int
    limit: int
    unread_count: int


class UnreadCountResponse(BaseModel):
    unread_count: int


class MarkAllReadResponse(BaseModel):
    modified: int


class BroadcastRequest(BaseModel):
    """Announcement sent by an administrator."""

    title: str = Field(..., min_length=1, max_length=160)
    message: str = Field(default="", max_length=2000)
    redirect_url: str | None = Field(default=None, max_length=500)
    role: str | None = Field(
        default=None,
        description="Only push live to this role; nothing is stored when set",
    )
    topic: str | None = Field(
        default=None,
        min_length=1,
        max_length=80,
        description="Only push live to channels subscribed to this topic; nothing is stored",
    )


class BroadcastResponse(BaseModel):
    recipients: int
    persisted: bool


__all__ = [
    "BroadcastRequest",
    "BroadcastResponse",
    "MarkAllReadResponse",
    "NotificationListResponse",
    "NotificationRead",
    "UnreadCountResponse",
]
