"""SQLAlchemy models for communities and their members."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table

from bcet_connect.infrastructure.database import Base
from bcet_connect.utils import now_naive_utc

community_member_table = Table(
    "community_member",
    Base.metadata,
    Column(
        "community_id",
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("user_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    Column("joined_at", DateTime, nullable=False, default=now_naive_utc),
)


class CommunityModel(Base):
    __tablename__ = "community"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_naive_utc)


__all__ = ["CommunityModel", "community_member_table"]
