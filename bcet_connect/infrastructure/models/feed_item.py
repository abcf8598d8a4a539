"""SQLAlchemy models for feed posts, likes and comments."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from bcet_connect.infrastructure.database import Base
from bcet_connect.utils import now_naive_utc


class FeedItemModel(Base):
    """Database representation of a feed post."""

    __tablename__ = "feed_item"
    __table_args__ = (
        Index("ix_feed_item_author_created", "author_id", "created_at"),
        Index("ix_feed_item_category_created", "category", "created_at"),
        Index("ix_feed_item_community_created", "community_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category = Column(String(30), nullable=False, default="personal")
    text = Column(Text, nullable=False, default="")
    media = Column(JSON, nullable=False, default=list)
    community_id = Column(
        Integer, ForeignKey("community.id", ondelete="SET NULL"), nullable=True
    )
    ref_id = Column(String(64), nullable=True)
    visibility = Column(String(20), nullable=False, default="followers", index=True)
    is_pinned = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_naive_utc, index=True)
    updated_at = Column(DateTime, nullable=True, onupdate=now_naive_utc)

    likes = relationship(
        "FeedLikeModel",
        order_by="FeedLikeModel.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    comments = relationship(
        "FeedCommentModel",
        order_by="FeedCommentModel.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class FeedLikeModel(Base):
    __tablename__ = "feed_like"
    __table_args__ = (
        UniqueConstraint("feed_item_id", "user_id", name="uq_feed_like_user"),
    )

    id = Column(Integer, primary_key=True)
    feed_item_id = Column(
        Integer, ForeignKey("feed_item.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_naive_utc)


class FeedCommentModel(Base):
    __tablename__ = "feed_comment"

    id = Column(Integer, primary_key=True)
    feed_item_id = Column(
        Integer, ForeignKey("feed_item.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    text = Column(String(1000), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_naive_utc)


__all__ = ["FeedItemModel", "FeedLikeModel", "FeedCommentModel"]
