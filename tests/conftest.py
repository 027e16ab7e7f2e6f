"""Shared fixtures: a throwaway SQLite database and a recording email dispatcher."""

from __future__ import annotations

import os
import sys
import tempfile
import threading
from dataclasses import replace
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "linuxworld_classroom_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from classroom.config import get_settings  # noqa: E402

get_settings.cache_clear()

from classroom.application.use_cases.users import create_user  # noqa: E402
from classroom.domain.entities import ROLE_STUDENT, NotificationPreferences, User  # noqa: E402
from classroom.domain.errors import DeliveryError  # noqa: E402
from classroom.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from classroom.infrastructure.models import UserModel  # noqa: E402
from classroom.infrastructure.repositories import UserRepository  # noqa: E402


class RecordingDispatcher:
    """Email dispatcher that records every send and fails on demand."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = set(failing or ())
        self.sent: list[tuple[str, str, str, str]] = []
        self._lock = threading.Lock()

    def send(self, to: str, subject: str, html: str, text: str) -> str:
        if to in self.failing:
            raise DeliveryError(f"mailbox {to} rejected the message", recipient=to)
        with self._lock:
            self.sent.append((to, subject, html, text))
            return f"msg-{len(self.sent)}"

    @property
    def recipients(self) -> list[str]:
        return sorted(to for to, *_ in self.sent)


@pytest.fixture(autouse=True)
def reset_database():
    """Every test starts from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture()
def make_user(session):
    """Factory creating approved users; extra keyword arguments go to ``create_user``."""

    counter = {"value": 0}

    def _make_user(
        *,
        name: str | None = None,
        email: str | None = None,
        password: str = "Secret123!",
        role: str = ROLE_STUDENT,
        mode: str | None = "online",
        group_ids=(),
        email_notifications: bool | None = True,
        **kwargs,
    ) -> User:
        counter["value"] += 1
        user = create_user(
            session,
            name=name or f"User {counter['value']}",
            email=email or f"user{counter['value']}@example.com",
            password=password,
            role=role,
            mode=mode,
            is_approved=kwargs.pop("is_approved", True),
            group_ids=group_ids,
            **kwargs,
        )
        repository = UserRepository(session)
        if email_notifications is False:
            user = repository.update(
                replace(
                    user,
                    notification_preferences=NotificationPreferences(email_notifications=False),
                )
            )
        elif email_notifications is None:
            # Legacy rows carry no preference at all.
            session.query(UserModel).filter(UserModel.id == user.id).update(
                {"email_notifications": None}
            )
            session.commit()
            session.expire_all()
            user = repository.get(user.id)
        return user

    return _make_user


@pytest.fixture()
def client(dispatcher):
    """Test client whose notification emails go to ``dispatcher``."""

    from fastapi.testclient import TestClient

    from classroom.interfaces.api.dependencies import get_email_dispatcher
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_email_dispatcher] = lambda: dispatcher
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def login(client):
    """Return a callable producing bearer headers for the given credentials."""

    def _login(email: str, password: str = "Secret123!") -> dict[str, str]:
        response = client.post("/auth/token", data={"username": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
