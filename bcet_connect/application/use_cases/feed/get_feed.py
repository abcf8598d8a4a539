"""Use case computing the personalised feed of a viewer."""

from __future__ import annotations

from sqlalchemy.orm import Session

from bcet_connect.config import get_settings
from bcet_connect.domain.entities import FEED_CATEGORIES, FEED_CATEGORY_ALL, FeedItem
from bcet_connect.domain.errors import InvalidArgument
from bcet_connect.infrastructure.repositories import FeedRepository, UserRepository

from ..notifications.list_notifications import clamp_pagination


def get_feed(
    session: Session,
    viewer_id: int,
    *,
    category: str = FEED_CATEGORY_ALL,
    page: int | None = 1,
    page_size: int | None = None,
) -> list[FeedItem]:
    """Return the feed items ``viewer_id`` may see, pinned first then newest.

    Visibility is resolved against the viewer's current following and
    community sets, so every call reflects the latest social graph. The
    viewer's own posts and admin broadcasts are always included, and a
    category filter never hides the viewer's own posts.
    """

    if category != FEED_CATEGORY_ALL and category not in FEED_CATEGORIES:
        raise InvalidArgument(f"Unknown feed category '{category}'")

    viewer = UserRepository(session).get(viewer_id) if viewer_id else None
    if viewer is None:
        raise InvalidArgument("Unknown viewer")

    settings = get_settings()
    page, limit = clamp_pagination(
        page,
        page_size,
        default=settings.feed_default_page_size,
        cap=settings.feed_max_page_size,
    )
    return FeedRepository(session).list_visible_to(
        viewer.id,
        following_ids=viewer.following,
        community_ids=viewer.communities,
        category=category,
        offset=(page - 1) * limit,
        limit=limit,
    )


__all__ = ["get_feed"]
