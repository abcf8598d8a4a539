"""Feed use cases: the personalised feed plus post management."""

from .get_feed import get_feed
from .interactions import add_comment, toggle_like
from .manage_posts import MediaCleanup, create_post, delete_post, pin_post, update_post

__all__ = [
    "get_feed",
    "create_post",
    "update_post",
    "pin_post",
    "delete_post",
    "toggle_like",
    "add_comment",
    "MediaCleanup",
]
