"""Pydantic models for feed requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FeedCategoryValue = Literal[
    "personal", "community", "mentor", "admin-broadcast", "job-teaser", "event-teaser"
]
FeedVisibilityValue = Literal["followers", "community", "public"]


class FeedMediaSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: Literal["image", "video"]
    url: str = Field(..., min_length=1, max_length=1000)
    provider_id: str | None = Field(default=None, max_length=255)


class FeedCommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    author_id: int
    text: str
    created_at: datetime | None = None


class FeedItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int
    category: str
    text: str = ""
    media: list[FeedMediaSchema] = Field(default_factory=list)
    community_id: int | None = None
    ref_id: str | None = None
    visibility: str
    likes: list[int] = Field(default_factory=list)
    likes_count: int = 0
    comments: list[FeedCommentRead] = Field(default_factory=list)
    is_pinned: bool = False
    created_at: datetime
    updated_at: datetime | None = None


class PostCreate(BaseModel):
    """Body of ``POST /feed``; media must already be uploaded."""

    text: str | None = Field(default=None, max_length=5000)
    media: list[FeedMediaSchema] = Field(default_factory=list, max_length=6)
    category: FeedCategoryValue = "personal"
    visibility: FeedVisibilityValue = "followers"
    community_id: int | None = Field(default=None, gt=0)
    ref_id: str | None = Field(default=None, max_length=64)


class PostUpdate(BaseModel):
    text: str | None = Field(default=None, max_length=5000)
    visibility: FeedVisibilityValue | None = None


class PinRequest(BaseModel):
    pinned: bool = True


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=1000)


class LikeResponse(BaseModel):
    liked: bool
    likes_count: int


__all__ = [
    "CommentCreate",
    "FeedCommentRead",
    "FeedItemRead",
    "FeedMediaSchema",
    "LikeResponse",
    "PinRequest",
    "PostCreate",
    "PostUpdate",
]
