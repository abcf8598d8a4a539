"""Persistence layer for user data and the follow graph."""

from __future__ import annotations

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bcet_connect.domain.entities import User
from bcet_connect.infrastructure.models import (
    UserModel,
    community_member_table,
    user_follow_table,
)
from bcet_connect.utils import ensure_naive_utc, ensure_utc, now_naive_utc

from ._transactions import commit_or_rollback


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email.strip().lower(),
            password=user.password,
            role=user.role,
            is_active=user.is_active,
            created_at=ensure_naive_utc(user.created_at) or now_naive_utc(),
        )
        self.session.add(model)
        commit_or_rollback(self.session, action="save the user")
        self.session.refresh(model)
        return self._to_entity(model)

    def list_active_ids(self, *, exclude: int | None = None) -> list[int]:
        query = self.session.query(UserModel.id).filter(UserModel.is_active.is_(True))
        if exclude is not None:
            query = query.filter(UserModel.id != exclude)
        return [user_id for (user_id,) in query.order_by(UserModel.id).all()]

    def list_follower_ids(self, user_id: int) -> list[int]:
        rows = self.session.execute(
            select(user_follow_table.c.follower_id)
            .join(UserModel, UserModel.id == user_follow_table.c.follower_id)
            .where(user_follow_table.c.followed_id == user_id)
            .where(UserModel.is_active.is_(True))
            .order_by(user_follow_table.c.follower_id)
        )
        return [follower_id for (follower_id,) in rows]

    def following_ids(self, user_id: int) -> list[int]:
        rows = self.session.execute(
            select(user_follow_table.c.followed_id)
            .where(user_follow_table.c.follower_id == user_id)
            .order_by(user_follow_table.c.created_at)
        )
        return [followed_id for (followed_id,) in rows]

    def community_ids(self, user_id: int) -> list[int]:
        rows = self.session.execute(
            select(community_member_table.c.community_id)
            .where(community_member_table.c.user_id == user_id)
            .order_by(community_member_table.c.joined_at)
        )
        return [community_id for (community_id,) in rows]

    def follow(self, follower_id: int, followed_id: int) -> bool:
        """Record the follow edge; return ``False`` when it already existed."""

        try:
            self.session.execute(
                insert(user_follow_table).values(
                    follower_id=follower_id,
                    followed_id=followed_id,
                    created_at=now_naive_utc(),
                )
            )
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return False
        return True

    def unfollow(self, follower_id: int, followed_id: int) -> bool:
        result = self.session.execute(
            delete(user_follow_table)
            .where(user_follow_table.c.follower_id == follower_id)
            .where(user_follow_table.c.followed_id == followed_id)
        )
        commit_or_rollback(self.session, action="remove the follow")
        return bool(result.rowcount)

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=model.role,
            is_active=bool(model.is_active),
            created_at=ensure_utc(model.created_at),
            following=self.following_ids(model.id),
            communities=self.community_ids(model.id),
        )


__all__ = ["UserRepository"]
