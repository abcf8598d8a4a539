"""Shared fixtures: a throwaway SQLite database and application client."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"bcet_connect_test_{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"

from bcet_connect.config import reset_settings_cache

reset_settings_cache()

from bcet_connect.domain.entities import ROLE_ADMIN, ROLE_STUDENT, User
from bcet_connect.infrastructure import database
from bcet_connect.infrastructure import models  # noqa: F401  # register tables
from bcet_connect.infrastructure.repositories import UserRepository
from bcet_connect.infrastructure.security import create_user_token, get_password_hash
from bcet_connect.utils import now_utc

DEFAULT_PASSWORD = "Secret123"


@pytest.fixture(scope="session")
def password_hash() -> str:
    return get_password_hash(DEFAULT_PASSWORD)


@pytest.fixture(autouse=True)
def clean_database():
    """Give every test empty tables."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()
    yield
    database.engine.dispose()


@pytest.fixture(scope="session", autouse=True)
def remove_database_file():
    yield
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session, password_hash):
    """Factory creating active users straight through the repository."""

    counter = {"value": 0}

    def factory(name: str | None = None, *, role: str = ROLE_STUDENT, is_active: bool = True) -> User:
        counter["value"] += 1
        label = name or f"user{counter['value']}"
        return UserRepository(session).create(
            User(
                id=None,
                name=label,
                email=f"{label}@bcet.edu",
                password=password_hash,
                role=role,
                is_active=is_active,
                created_at=now_utc(),
            )
        )

    return factory


@pytest.fixture()
def admin(make_user) -> User:
    return make_user("admin", role=ROLE_ADMIN)


@pytest.fixture()
def auth_headers():
    """Return a helper building bearer headers for a user."""

    def build(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user.id, user.role)}"}

    return build


@pytest.fixture()
def client():
    """Return a test client bound to a fresh application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


class RecordingPublisher:
    """Stand-in publisher that remembers what would have been pushed."""

    def __init__(self) -> None:
        self.dispatched = []
        self.events = []

    def dispatch(self, notification) -> None:
        self.dispatched.append(notification)

    def dispatch_event(self, user_id, *, event_type, payload) -> None:
        self.events.append((user_id, event_type, payload))

    def dispatch_to_role(self, role, *, event_type, payload) -> None:
        self.events.append((role, event_type, payload))

    def dispatch_to_topic(self, topic, *, event_type, payload) -> None:
        self.events.append((topic, event_type, payload))


class ExplodingPublisher(RecordingPublisher):
    """Publisher whose every push raises, like a dead transport would."""

    def dispatch(self, notification) -> None:
        raise RuntimeError("transport down")

    def dispatch_event(self, user_id, *, event_type, payload) -> None:
        raise RuntimeError("transport down")


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def exploding_publisher() -> ExplodingPublisher:
    return ExplodingPublisher()
