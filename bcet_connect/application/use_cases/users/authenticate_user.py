"""Password login for campus members."""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple

from sqlalchemy.orm import Session

from bcet_connect.domain.entities import User
from bcet_connect.infrastructure.repositories import UserRepository
from bcet_connect.infrastructure.security import verify_password

logger = logging.getLogger(__name__)


class AuthenticationStatus(Enum):
    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    INACTIVE = "inactive"


class AuthenticationResult(NamedTuple):
    user: User | None
    status: AuthenticationStatus


def authenticate_user(session: Session, email: str, password: str) -> AuthenticationResult:
    """Check ``email``/``password``; the user is only returned when the password matched.

    Unknown emails and wrong passwords are indistinguishable to the caller.
    """

    email = (email or "").strip()
    user = UserRepository(session).get_by_email(email) if email and password else None

    if user is None or not verify_password(password, user.password):
        logger.info("Rejected login attempt for %s", email or "<blank>")
        return AuthenticationResult(None, AuthenticationStatus.INVALID_CREDENTIALS)
    if not user.is_active:
        return AuthenticationResult(user, AuthenticationStatus.INACTIVE)
    return AuthenticationResult(user, AuthenticationStatus.SUCCESS)


__all__ = ["AuthenticationResult", "AuthenticationStatus", "authenticate_user"]
