"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, JSON, String, Text

from bcet_connect.infrastructure.database import Base
from bcet_connect.utils import now_naive_utc


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        # Serves the unread badge and the newest-first listing.
        Index(
            "ix_notification_user_state",
            "user_id",
            "archived",
            "is_read",
            "created_at",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    actor_id = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)
    category = Column(String(30), nullable=False, default="generic", index=True)
    title = Column(String(160), nullable=False)
    message = Column(Text, nullable=False, default="")
    redirect_url = Column(String(500), nullable=True)
    payload = Column(JSON, nullable=False, default=dict)
    priority = Column(String(10), nullable=False, default="normal")
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(), nullable=True)
    dismissed = Column(Boolean, nullable=False, default=False)
    archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=now_naive_utc)


__all__ = ["NotificationModel"]
