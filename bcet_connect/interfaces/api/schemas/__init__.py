from .auth import Token
from .feed import (
    CommentCreate,
    FeedCommentRead,
    FeedItemRead,
    FeedMediaSchema,
    LikeResponse,
    PinRequest,
    PostCreate,
    PostUpdate,
)
from .notification import (
    BroadcastRequest,
    BroadcastResponse,
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationRead,
    UnreadCountResponse,
)
from .user import (
    CommunityCreate,
    CommunityRead,
    FollowResponse,
    MembershipResponse,
    UserCreate,
    UserRead,
)

__all__ = [
    "Token",
    "CommentCreate",
    "FeedCommentRead",
    "FeedItemRead",
    "FeedMediaSchema",
    "LikeResponse",
    "PinRequest",
    "PostCreate",
    "PostUpdate",
    "BroadcastRequest",
    "BroadcastResponse",
    "MarkAllReadResponse",
    "NotificationListResponse",
    "NotificationRead",
    "UnreadCountResponse",
    "CommunityCreate",
    "CommunityRead",
    "FollowResponse",
    "MembershipResponse",
    "UserCreate",
    "UserRead",
]
