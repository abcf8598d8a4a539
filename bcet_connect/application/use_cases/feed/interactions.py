"""Likes and comments on feed posts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from bcet_connect.domain.entities import FeedItem, LikeResult
from bcet_connect.domain.errors import InvalidArgument, NotFound
from bcet_connect.infrastructure.notifications import NotificationPublisher
from bcet_connect.infrastructure.repositories import FeedRepository, UserRepository

from ..notifications import notify_comment, notify_like

logger = logging.getLogger(__name__)

_COMMENT_MAX_LENGTH = 1000


def _get_visible_post(
    session: Session, repository: FeedRepository, post_id: int, user_id: int
) -> FeedItem:
    # Posts the user cannot see in their feed answer exactly like missing ones.
    viewer = UserRepository(session).get(user_id)
    post = None
    if viewer is not None:
        post = repository.get_visible_to(
            post_id,
            viewer.id,
            following_ids=viewer.following,
            community_ids=viewer.communities,
        )
    if post is None:
        raise NotFound("Post not found")
    return post


def toggle_like(
    session: Session,
    publisher: NotificationPublisher | None,
    post_id: int,
    user_id: int,
) -> LikeResult:
    """Like the post, or remove the like when ``user_id`` already liked it."""

    repository = FeedRepository(session)
    post = _get_visible_post(session, repository, post_id, user_id)

    if repository.has_like(post_id, user_id):
        repository.remove_like(post_id, user_id)
        liked = False
    else:
        liked = repository.add_like(post_id, user_id)
        if liked:
            try:
                notify_like(
                    session,
                    publisher,
                    recipient_id=post.author_id,
                    actor_id=user_id,
                    post_id=post_id,
                )
            except Exception:  # noqa: BLE001 - the like is already stored
                logger.exception("Could not notify author of post %s about a like", post_id)
        else:
            # Lost a race with a concurrent like from the same user.
            liked = True
    return LikeResult(liked=liked, likes_count=repository.count_likes(post_id))


def add_comment(
    session: Session,
    publisher: NotificationPublisher | None,
    post_id: int,
    user_id: int,
    text: str | None,
) -> FeedItem:
    body = (text or "").strip()
    if not body:
        raise InvalidArgument("Comment text required")
    if len(body) > _COMMENT_MAX_LENGTH:
        raise InvalidArgument(f"Comments cannot exceed {_COMMENT_MAX_LENGTH} characters")

    repository = FeedRepository(session)
    post = _get_visible_post(session, repository, post_id, user_id)
    updated = repository.add_comment(post_id, user_id, body)
    if updated is None:
        raise NotFound("Post not found")

    try:
        notify_comment(
            session,
            publisher,
            recipient_id=post.author_id,
            actor_id=user_id,
            post_id=post_id,
        )
    except Exception:  # noqa: BLE001 - the comment is already stored
        logger.exception("Could not notify author of post %s about a comment", post_id)
    return updated


__all__ = ["add_comment", "toggle_like"]
