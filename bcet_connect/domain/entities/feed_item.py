"""Domain entities describing feed posts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

FEED_CATEGORY_ALL = "ALL"
FEED_CATEGORY_PERSONAL = "personal"
FEED_CATEGORY_COMMUNITY = "community"
FEED_CATEGORY_MENTOR = "mentor"
FEED_CATEGORY_ADMIN_BROADCAST = "admin-broadcast"
FEED_CATEGORY_JOB_TEASER = "job-teaser"
FEED_CATEGORY_EVENT_TEASER = "event-teaser"

FEED_CATEGORIES = (
    FEED_CATEGORY_PERSONAL,
    FEED_CATEGORY_COMMUNITY,
    FEED_CATEGORY_MENTOR,
    FEED_CATEGORY_ADMIN_BROADCAST,
    FEED_CATEGORY_JOB_TEASER,
    FEED_CATEGORY_EVENT_TEASER,
)

VISIBILITY_FOLLOWERS = "followers"
VISIBILITY_COMMUNITY = "community"
VISIBILITY_PUBLIC = "public"

FEED_VISIBILITIES = (VISIBILITY_FOLLOWERS, VISIBILITY_COMMUNITY, VISIBILITY_PUBLIC)

MEDIA_KINDS = ("image", "video")


@dataclass
class FeedMedia:
    """Reference to a media file kept by the external media store."""

    kind: str
    url: str
    provider_id: str | None = None


@dataclass
class FeedComment:
    author_id: int
    text: str
    created_at: datetime | None = None
    id: int | None = None


@dataclass
class FeedItem:
    """A post shown in the campus feed."""

    id: int | None
    author_id: int
    category: str = FEED_CATEGORY_PERSONAL
    text: str = ""
    media: list[FeedMedia] = field(default_factory=list)
    community_id: int | None = None
    ref_id: str | None = None
    visibility: str = VISIBILITY_FOLLOWERS
    likes: list[int] = field(default_factory=list)
    comments: list[FeedComment] = field(default_factory=list)
    is_pinned: bool = False
    is_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def likes_count(self) -> int:
        return len(self.likes)


@dataclass
class LikeResult:
    """Outcome of toggling a like."""

    liked: bool
    likes_count: int


__all__ = [
    "FeedItem",
    "FeedMedia",
    "FeedComment",
    "LikeResult",
    "FEED_CATEGORIES",
    "FEED_CATEGORY_ALL",
    "FEED_CATEGORY_PERSONAL",
    "FEED_CATEGORY_COMMUNITY",
    "FEED_CATEGORY_MENTOR",
    "FEED_CATEGORY_ADMIN_BROADCAST",
    "FEED_CATEGORY_JOB_TEASER",
    "FEED_CATEGORY_EVENT_TEASER",
    "FEED_VISIBILITIES",
    "VISIBILITY_FOLLOWERS",
    "VISIBILITY_COMMUNITY",
    "VISIBILITY_PUBLIC",
    "MEDIA_KINDS",
]
