"""ORM models used by the application infrastructure."""

from .community import CommunityModel, community_member_table
from .feed_item import FeedCommentModel, FeedItemModel, FeedLikeModel
from .notification import NotificationModel
from .user import UserModel, user_follow_table

__all__ = [
    "CommunityModel",
    "community_member_table",
    "FeedItemModel",
    "FeedLikeModel",
    "FeedCommentModel",
    "NotificationModel",
    "UserModel",
    "user_follow_table",
]
