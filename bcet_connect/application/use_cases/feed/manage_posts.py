"""Use cases for creating, editing, pinning and deleting feed posts."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from sqlalchemy.orm import Session

from bcet_connect.domain.entities import (
    FEED_CATEGORIES,
    FEED_CATEGORY_ADMIN_BROADCAST,
    FEED_CATEGORY_PERSONAL,
    FEED_VISIBILITIES,
    MEDIA_KINDS,
    VISIBILITY_COMMUNITY,
    VISIBILITY_FOLLOWERS,
    VISIBILITY_PUBLIC,
    FeedItem,
    FeedMedia,
    User,
)
from bcet_connect.domain.errors import Forbidden, InvalidArgument, NotFound
from bcet_connect.infrastructure.notifications import NotificationPublisher
from bcet_connect.infrastructure.repositories import (
    CommunityRepository,
    FeedRepository,
    UserRepository,
)
from bcet_connect.utils import now_utc

from ..notifications import notify_broadcast, notify_new_post

logger = logging.getLogger(__name__)

_TEXT_MAX_LENGTH = 5000
_POST_NOT_FOUND = "Post not found"

MediaCleanup = Callable[[Sequence[FeedMedia]], None]


def _validate_visibility(visibility: str) -> None:
    if visibility not in FEED_VISIBILITIES:
        raise InvalidArgument(f"Unknown visibility '{visibility}'")


def _clean_text(text: str | None) -> str:
    cleaned = (text or "").strip()
    if len(cleaned) > _TEXT_MAX_LENGTH:
        raise InvalidArgument(f"Post text cannot exceed {_TEXT_MAX_LENGTH} characters")
    return cleaned


def create_post(
    session: Session,
    publisher: NotificationPublisher | None,
    author: User,
    *,
    text: str | None = None,
    media: Sequence[FeedMedia] = (),
    category: str = FEED_CATEGORY_PERSONAL,
    visibility: str = VISIBILITY_FOLLOWERS,
    community_id: int | None = None,
    ref_id: str | None = None,
) -> FeedItem:
    """Create a post for ``author`` and notify whoever should hear about it."""

    body = _clean_text(text)
    media = list(media)
    if not body and not media:
        raise InvalidArgument("Post must contain text or media")
    if category not in FEED_CATEGORIES:
        raise InvalidArgument(f"Unknown feed category '{category}'")
    _validate_visibility(visibility)
    for item in media:
        if item.kind not in MEDIA_KINDS or not item.url:
            raise InvalidArgument("Invalid media reference")
    if category == FEED_CATEGORY_ADMIN_BROADCAST and not author.is_admin():
        raise Forbidden("Only administrators can publish announcements")
    if visibility == VISIBILITY_COMMUNITY and community_id is None:
        raise InvalidArgument("Community posts need a community")
    if community_id is not None and not CommunityRepository(session).exists(community_id):
        raise NotFound("Community not found")

    post = FeedRepository(session).create(
        FeedItem(
            id=None,
            author_id=author.id,
            category=category,
            text=body,
            media=media,
            community_id=community_id,
            ref_id=ref_id,
            visibility=visibility,
            created_at=now_utc(),
        )
    )
    _fan_out_new_post(session, publisher, post)
    return post


def _fan_out_new_post(
    session: Session, publisher: NotificationPublisher | None, post: FeedItem
) -> None:
    users = UserRepository(session)
    try:
        if post.category == FEED_CATEGORY_ADMIN_BROADCAST:
            notify_broadcast(
                session,
                publisher,
                recipient_ids=users.list_active_ids(exclude=post.author_id),
                title="New announcement",
                message=post.text[:200],
                redirect_url=f"/feed/{post.id}",
                actor_id=post.author_id,
            )
        elif post.visibility in (VISIBILITY_FOLLOWERS, VISIBILITY_PUBLIC):
            for follower_id in users.list_follower_ids(post.author_id):
                notify_new_post(
                    session,
                    publisher,
                    recipient_id=follower_id,
                    actor_id=post.author_id,
                    post_id=post.id,
                )
    except Exception:  # noqa: BLE001 - the post is already stored
        logger.exception("Could not notify followers about post %s", post.id)


def _get_editable(session: Session, post_id: int, user: User) -> FeedItem:
    post = FeedRepository(session).get(post_id)
    if post is None or (post.author_id != user.id and not user.is_admin()):
        raise NotFound(_POST_NOT_FOUND)
    return post


def update_post(
    session: Session,
    post_id: int,
    user: User,
    *,
    text: str | None = None,
    visibility: str | None = None,
) -> FeedItem:
    """Edit the text or visibility of a post owned by ``user`` (or any post for admins)."""

    post = _get_editable(session, post_id, user)
    new_text = _clean_text(text) if text is not None else None
    if new_text is not None and not new_text and not post.media:
        raise InvalidArgument("Post must contain text or media")
    if visibility is not None:
        _validate_visibility(visibility)
        if visibility == VISIBILITY_COMMUNITY and post.community_id is None:
            raise InvalidArgument("Community posts need a community")

    updated = FeedRepository(session).update_content(
        post_id, text=new_text, visibility=visibility
    )
    if updated is None:
        raise NotFound(_POST_NOT_FOUND)
    return updated


def pin_post(session: Session, post_id: int, user: User, *, pinned: bool = True) -> FeedItem:
    if not user.is_admin():
        raise Forbidden("Only administrators can pin posts")
    updated = FeedRepository(session).set_pinned(post_id, pinned)
    if updated is None:
        raise NotFound(_POST_NOT_FOUND)
    return updated


def delete_post(
    session: Session,
    post_id: int,
    user: User,
    *,
    cleanup_media: MediaCleanup | None = None,
) -> FeedItem:
    """Soft-delete a post and hand its media to ``cleanup_media``.

    The cleanup callback is expected to schedule work in the background; any
    error it raises is logged and the deletion still stands.
    """

    post = _get_editable(session, post_id, user)
    if not FeedRepository(session).soft_delete(post_id):
        raise NotFound(_POST_NOT_FOUND)
    post.is_deleted = True

    if post.media and cleanup_media is not None:
        try:
            cleanup_media(list(post.media))
        except Exception:  # noqa: BLE001 - media cleanup is best effort
            logger.warning("Could not schedule media cleanup for post %s", post_id, exc_info=True)
    return post


__all__ = ["MediaCleanup", "create_post", "delete_post", "pin_post", "update_post"]
