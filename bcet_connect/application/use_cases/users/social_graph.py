"""Use cases that edit who a user follows and which communities they belong to."""

from __future__ import annotations

from sqlalchemy.orm import Session

from bcet_connect.domain.errors import InvalidArgument, NotFound
from bcet_connect.infrastructure.repositories import CommunityRepository, UserRepository


def follow_user(session: Session, follower_id: int, followed_id: int) -> bool:
    """Make ``follower_id`` follow ``followed_id``; ``False`` if already following."""

    if follower_id == followed_id:
        raise InvalidArgument("You cannot follow yourself")
    repository = UserRepository(session)
    target = repository.get(followed_id)
    if target is None or not target.is_active:
        raise NotFound("User not found")
    return repository.follow(follower_id, followed_id)


def unfollow_user(session: Session, follower_id: int, followed_id: int) -> bool:
    if follower_id == followed_id:
        raise InvalidArgument("You cannot unfollow yourself")
    return UserRepository(session).unfollow(follower_id, followed_id)


def create_community(session: Session, name: str) -> int:
    if not name or not name.strip():
        raise InvalidArgument("A community name is required")
    return CommunityRepository(session).create(name)


def join_community(session: Session, user_id: int, community_id: int) -> bool:
    repository = CommunityRepository(session)
    if not repository.exists(community_id):
        raise NotFound("Community not found")
    return repository.add_member(community_id, user_id)


def leave_community(session: Session, user_id: int, community_id: int) -> bool:
    repository = CommunityRepository(session)
    if not repository.exists(community_id):
        raise NotFound("Community not found")
    return repository.remove_member(community_id, user_id)


__all__ = [
    "create_community",
    "follow_user",
    "join_community",
    "leave_community",
    "unfollow_user",
]
