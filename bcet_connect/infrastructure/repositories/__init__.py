"""Repository implementations for infrastructure layer."""

from .community_repository import CommunityRepository
from .feed_repository import FeedRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "CommunityRepository",
    "FeedRepository",
    "NotificationRepository",
    "UserRepository",
]
