"""Persistence helpers for feed items, likes and comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bcet_connect.domain.entities import (
    FEED_CATEGORY_ADMIN_BROADCAST,
    FEED_CATEGORY_ALL,
    VISIBILITY_COMMUNITY,
    VISIBILITY_FOLLOWERS,
    VISIBILITY_PUBLIC,
    FeedComment,
    FeedItem,
    FeedMedia,
)
from bcet_connect.infrastructure.models import (
    FeedCommentModel,
    FeedItemModel,
    FeedLikeModel,
)
from bcet_connect.utils import ensure_naive_utc, ensure_utc, now_naive_utc

from ._transactions import commit_or_rollback


class FeedRepository:
    """Provide CRUD operations and the visibility query for feed items."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, item: FeedItem) -> FeedItem:
        model = FeedItemModel(
            author_id=item.author_id,
            category=item.category,
            text=item.text or "",
            media=[self._media_to_dict(media) for media in item.media],
            community_id=item.community_id,
            ref_id=item.ref_id,
            visibility=item.visibility,
            is_pinned=item.is_pinned,
            is_deleted=False,
            created_at=ensure_naive_utc(item.created_at) or now_naive_utc(),
        )
        self.session.add(model)
        commit_or_rollback(self.session, action="save the post")
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, item_id: int, *, include_deleted: bool = False) -> FeedItem | None:
        model = self._get_model(item_id, include_deleted=include_deleted)
        return self._to_entity(model) if model else None

    def get_visible_to(
        self,
        item_id: int,
        viewer_id: int,
        *,
        following_ids: Sequence[int],
        community_ids: Sequence[int],
    ) -> FeedItem | None:
        """Return the item when ``viewer_id`` may see it, ``None`` otherwise."""

        model = (
            self.session.query(FeedItemModel)
            .filter(FeedItemModel.id == item_id)
            .filter(FeedItemModel.is_deleted.is_(False))
            .filter(self._visibility_clause(viewer_id, following_ids, community_ids))
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def list_visible_to(
        self,
        viewer_id: int,
        *,
        following_ids: Sequence[int],
        community_ids: Sequence[int],
        category: str = FEED_CATEGORY_ALL,
        offset: int = 0,
        limit: int = 20,
    ) -> list[FeedItem]:
        """Return the page of items ``viewer_id`` may see, pinned first then newest.

        An item is visible when it is not deleted and at least one rule holds:
        the viewer wrote it, it is an admin broadcast, it is followers-only
        from someone the viewer follows, it is community-only in one of the
        viewer's communities, or it is public. A category filter narrows the
        result but never hides the viewer's own posts.
        """

        query = (
            self.session.query(FeedItemModel)
            .filter(FeedItemModel.is_deleted.is_(False))
            .filter(self._visibility_clause(viewer_id, following_ids, community_ids))
        )
        if category != FEED_CATEGORY_ALL:
            query = query.filter(
                or_(
                    FeedItemModel.category == category,
                    FeedItemModel.author_id == viewer_id,
                )
            )

        query = (
            query.order_by(
                FeedItemModel.is_pinned.desc(),
                FeedItemModel.created_at.desc(),
                FeedItemModel.id.desc(),
            )
            .offset(offset)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def update_content(
        self,
        item_id: int,
        *,
        text: str | None = None,
        visibility: str | None = None,
    ) -> FeedItem | None:
        model = self._get_model(item_id)
        if model is None:
            return None
        if text is not None:
            model.text = text
        if visibility is not None:
            model.visibility = visibility
        model.updated_at = now_naive_utc()
        self.session.add(model)
        commit_or_rollback(self.session, action="update the post")
        self.session.refresh(model)
        return self._to_entity(model)

    def set_pinned(self, item_id: int, pinned: bool) -> FeedItem | None:
        model = self._get_model(item_id)
        if model is None:
            return None
        model.is_pinned = pinned
        commit_or_rollback(self.session, action="pin the post")
        self.session.refresh(model)
        return self._to_entity(model)

    def soft_delete(self, item_id: int) -> bool:
        updated = (
            self.session.query(FeedItemModel)
            .filter(FeedItemModel.id == item_id)
            .filter(FeedItemModel.is_deleted.is_(False))
            .update(
                {
                    FeedItemModel.is_deleted: True,
                    FeedItemModel.updated_at: now_naive_utc(),
                },
                synchronize_session=False,
            )
        )
        commit_or_rollback(self.session, action="delete the post")
        return bool(updated)

    def has_like(self, item_id: int, user_id: int) -> bool:
        return (
            self.session.query(FeedLikeModel.id)
            .filter(FeedLikeModel.feed_item_id == item_id)
            .filter(FeedLikeModel.user_id == user_id)
            .first()
            is not None
        )

    def add_like(self, item_id: int, user_id: int) -> bool:
        """Insert the like; ``False`` when the unique constraint says it exists."""

        self.session.add(
            FeedLikeModel(feed_item_id=item_id, user_id=user_id, created_at=now_naive_utc())
        )
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return False
        return True

    def remove_like(self, item_id: int, user_id: int) -> bool:
        deleted = (
            self.session.query(FeedLikeModel)
            .filter(FeedLikeModel.feed_item_id == item_id)
            .filter(FeedLikeModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        commit_or_rollback(self.session, action="remove the like")
        return bool(deleted)

    def count_likes(self, item_id: int) -> int:
        return (
            self.session.query(FeedLikeModel)
            .filter(FeedLikeModel.feed_item_id == item_id)
            .count()
        )

    def add_comment(self, item_id: int, author_id: int, text: str) -> FeedItem | None:
        self.session.add(
            FeedCommentModel(
                feed_item_id=item_id,
                author_id=author_id,
                text=text,
                created_at=now_naive_utc(),
            )
        )
        commit_or_rollback(self.session, action="save the comment")
        self.session.expire_all()
        return self.get(item_id)

    def _get_model(self, item_id: int, *, include_deleted: bool = False) -> FeedItemModel | None:
        query = self.session.query(FeedItemModel).filter(FeedItemModel.id == item_id)
        if not include_deleted:
            query = query.filter(FeedItemModel.is_deleted.is_(False))
        return query.one_or_none()

    @staticmethod
    def _visibility_clause(
        viewer_id: int,
        following_ids: Sequence[int],
        community_ids: Sequence[int],
    ):
        inclusion = [
            FeedItemModel.author_id == viewer_id,
            FeedItemModel.category == FEED_CATEGORY_ADMIN_BROADCAST,
            FeedItemModel.visibility == VISIBILITY_PUBLIC,
        ]
        if following_ids:
            inclusion.append(
                and_(
                    FeedItemModel.visibility == VISIBILITY_FOLLOWERS,
                    FeedItemModel.author_id.in_(list(following_ids)),
                )
            )
        if community_ids:
            inclusion.append(
                and_(
                    FeedItemModel.visibility == VISIBILITY_COMMUNITY,
                    FeedItemModel.community_id.in_(list(community_ids)),
                )
            )
        return or_(*inclusion)

    @staticmethod
    def _media_to_dict(media: FeedMedia) -> dict[str, str | None]:
        return {"kind": media.kind, "url": media.url, "provider_id": media.provider_id}

    @staticmethod
    def _to_entity(model: FeedItemModel) -> FeedItem:
        return FeedItem(
            id=model.id,
            author_id=model.author_id,
            category=model.category,
            text=model.text or "",
            media=[
                FeedMedia(
                    kind=entry.get("kind", "image"),
                    url=entry.get("url", ""),
                    provider_id=entry.get("provider_id"),
                )
                for entry in (model.media or [])
                if isinstance(entry, dict)
            ],
            community_id=model.community_id,
            ref_id=model.ref_id,
            visibility=model.visibility,
            likes=[like.user_id for like in model.likes],
            comments=[
                FeedComment(
                    id=comment.id,
                    author_id=comment.author_id,
                    text=comment.text,
                    created_at=ensure_utc(comment.created_at),
                )
                for comment in model.comments
            ],
            is_pinned=bool(model.is_pinned),
            is_deleted=bool(model.is_deleted),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["FeedRepository"]
