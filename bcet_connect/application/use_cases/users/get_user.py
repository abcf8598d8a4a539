"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from bcet_connect.domain.entities import User
from bcet_connect.domain.errors import NotFound
from bcet_connect.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int, *, include_inactive: bool = False) -> User:
    """Return the requested user or raise :class:`NotFound`."""

    user = UserRepository(session).get(user_id)
    if user is None or (not include_inactive and not user.is_active):
        raise NotFound("User not found")
    return user
