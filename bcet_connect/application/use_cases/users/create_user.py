"""Use case for creating users."""

from sqlalchemy.orm import Session

from bcet_connect.domain.entities import ROLE_STUDENT, USER_ROLES, User
from bcet_connect.domain.errors import InvalidArgument
from bcet_connect.infrastructure.repositories import UserRepository
from bcet_connect.infrastructure.security import get_password_hash
from bcet_connect.utils import now_utc


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str = ROLE_STUDENT,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)

    if not name or not name.strip():
        raise InvalidArgument("A name is required")
    if not email or "@" not in email:
        raise InvalidArgument("A valid email address is required")
    if not password:
        raise InvalidArgument("A password is required")
    if role not in USER_ROLES:
        raise InvalidArgument(f"Unknown role '{role}'")
    if repository.get_by_email(email):
        raise InvalidArgument("Email address is already registered")

    user = User(
        id=None,
        name=name.strip(),
        email=email,
        password=get_password_hash(password),
        role=role,
        is_active=True,
        created_at=now_utc(),
    )
    return repository.create(user)
