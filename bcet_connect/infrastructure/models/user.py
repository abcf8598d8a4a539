"""SQLAlchemy models for users and the follow graph."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    UniqueConstraint,
)

from bcet_connect.infrastructure.database import Base
from bcet_connect.utils import now_naive_utc

user_follow_table = Table(
    "user_follow",
    Base.metadata,
    Column("follower_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    Column("followed_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime, nullable=False, default=now_naive_utc),
)


class UserModel(Base):
    """Database representation of a campus member."""

    __tablename__ = "user"
    __table_args__ = (UniqueConstraint("email", name="uq_user_email"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(80), nullable=False)
    email = Column(String(120), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="student", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_naive_utc)


__all__ = ["UserModel", "user_follow_table"]
