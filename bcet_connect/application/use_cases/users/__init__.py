"""Use cases for managing users and their social graph."""

from .authenticate_user import AuthenticationResult, AuthenticationStatus, authenticate_user
from .create_user import create_user
from .get_user import get_user
from .social_graph import (
    create_community,
    follow_user,
    join_community,
    leave_community,
    unfollow_user,
)

__all__ = [
    "AuthenticationResult",
    "AuthenticationStatus",
    "authenticate_user",
    "create_user",
    "get_user",
    "create_community",
    "follow_user",
    "unfollow_user",
    "join_community",
    "leave_community",
]
