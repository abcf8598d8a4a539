"""Domain entity representing a user."""

from dataclasses import dataclass, field
from datetime import datetime

ROLE_STUDENT = "student"
ROLE_ALUMNI = "alumni"
ROLE_FACULTY = "faculty"
ROLE_ADMIN = "admin"

USER_ROLES = (ROLE_STUDENT, ROLE_ALUMNI, ROLE_FACULTY, ROLE_ADMIN)


@dataclass
class User:
    """Core attributes describing a campus member."""

    id: int | None
    name: str
    email: str
    password: str
    role: str = ROLE_STUDENT
    is_active: bool = True
    created_at: datetime | None = None
    following: list[int] = field(default_factory=list)
    communities: list[int] = field(default_factory=list)

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)


__all__ = ["User", "USER_ROLES", "ROLE_STUDENT", "ROLE_ALUMNI", "ROLE_FACULTY", "ROLE_ADMIN"]
