"""Persistence helpers for communities and memberships."""

from __future__ import annotations

from sqlalchemy import delete, insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bcet_connect.infrastructure.models import CommunityModel, community_member_table
from bcet_connect.utils import now_naive_utc

from ._transactions import commit_or_rollback


class CommunityRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, name: str) -> int:
        model = CommunityModel(name=name.strip(), created_at=now_naive_utc())
        self.session.add(model)
        commit_or_rollback(self.session, action="save the community")
        self.session.refresh(model)
        return model.id

    def exists(self, community_id: int) -> bool:
        return self.session.get(CommunityModel, community_id) is not None

    def add_member(self, community_id: int, user_id: int) -> bool:
        try:
            self.session.execute(
                insert(community_member_table).values(
                    community_id=community_id,
                    user_id=user_id,
                    joined_at=now_naive_utc(),
                )
            )
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return False
        return True

    def remove_member(self, community_id: int, user_id: int) -> bool:
        result = self.session.execute(
            delete(community_member_table)
            .where(community_member_table.c.community_id == community_id)
            .where(community_member_table.c.user_id == user_id)
        )
        commit_or_rollback(self.session, action="leave the community")
        return bool(result.rowcount)


__all__ = ["CommunityRepository"]
