"""Domain entities exposed by the application."""

from .feed_item import (
    FEED_CATEGORIES,
    FEED_CATEGORY_ADMIN_BROADCAST,
    FEED_CATEGORY_ALL,
    FEED_CATEGORY_COMMUNITY,
    FEED_CATEGORY_EVENT_TEASER,
    FEED_CATEGORY_JOB_TEASER,
    FEED_CATEGORY_MENTOR,
    FEED_CATEGORY_PERSONAL,
    FEED_VISIBILITIES,
    MEDIA_KINDS,
    VISIBILITY_COMMUNITY,
    VISIBILITY_FOLLOWERS,
    VISIBILITY_PUBLIC,
    FeedComment,
    FeedItem,
    FeedMedia,
    LikeResult,
)
from .notification import (
    CATEGORY_BROADCAST,
    CATEGORY_COMMENT,
    CATEGORY_CONTENT_UPDATE,
    CATEGORY_GENERIC,
    CATEGORY_REACTION,
    CATEGORY_SYSTEM,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_NORMAL,
    Notification,
    NotificationPage,
)
from .user import ROLE_ADMIN, ROLE_ALUMNI, ROLE_FACULTY, ROLE_STUDENT, USER_ROLES, User

__all__ = [
    "FeedComment",
    "FeedItem",
    "FeedMedia",
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
    "User",
    "USER_ROLES",
    "ROLE_STUDENT",
    "ROLE_ALUMNI",
    "ROLE_FACULTY",
    "ROLE_ADMIN",
]
