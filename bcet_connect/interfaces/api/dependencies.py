"""FastAPI dependency utilities."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import BackgroundTasks, Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from bcet_connect.application.use_cases.feed import MediaCleanup
from bcet_connect.domain.entities import FeedMedia, User
from bcet_connect.domain.errors import Forbidden, Unauthenticated
from bcet_connect.infrastructure.database import get_db
from bcet_connect.infrastructure.notifications import NotificationPublisher
from bcet_connect.infrastructure.repositories import UserRepository
from bcet_connect.infrastructure.security import decode_access_token, principal_id_from_claims
from bcet_connect.infrastructure.storage import cleanup_media, get_media_store

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def resolve_current_user(token: str | None, db: Session) -> User:
    """Resolve the authenticated user for the provided bearer token."""

    if not token:
        raise Unauthenticated("Not authenticated")
    try:
        principal_id = principal_id_from_claims(decode_access_token(token))
    except ValueError as exc:
        raise Unauthenticated("Invalid credentials") from exc

    user = UserRepository(db).get(principal_id)
    if user is None or not user.is_active:
        raise Unauthenticated("Invalid credentials")
    return user


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise Forbidden("Administrator role required")
    return current_user


def get_notification_publisher(request: Request) -> NotificationPublisher:
    return request.app.state.notification_publisher


def get_media_cleanup(background_tasks: BackgroundTasks) -> MediaCleanup:
    """Return a callback that removes media after the response is sent."""

    def schedule(media: Sequence[FeedMedia]) -> None:
        background_tasks.add_task(cleanup_media, get_media_store(), list(media))

    return schedule


__all__ = [
    "get_current_user",
    "get_media_cleanup",
    "get_notification_publisher",
    "oauth2_scheme",
    "require_admin",
    "resolve_current_user",
]
