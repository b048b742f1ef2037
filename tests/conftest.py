"""Shared pytest fixtures for API tests."""
import os

# Settings are read at import time
os.environ.setdefault("JWT_SECRET", "test-signing-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (registers tables)
from app.auth.tokens import get_token_service
from app.database import Base, get_db
from app.main import create_app
from app.models import User
from app.services.notifier import get_notifier
from app.utils.hashing import hash_password
from app.utils.rate_limit import RateLimiter

ADMIN = {"name": "Admin", "email": "admin@example.com", "password": "secret123"}


class RecordingNotifier:
    """Stands in for the SMTP notifier and remembers each call."""

    def __init__(self):
        self.calls = []

    async def notify(self, recipient, name, email, message):
        self.calls.append({"recipient": recipient, "name": name, "email": email, "message": message})
        return True


@pytest.fixture
def engine():
    """In-memory SQLite shared by the app and the test through one connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return lambda: Session(engine)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(engine, notifier):
    app = create_app(rate_limiter=RateLimiter(max_requests=10_000, window_seconds=900))

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token(client):
    response = client.post("/api/auth/register", json=ADMIN)
    assert response.status_code == 201
    return response.json()["token"]


@pytest.fixture
def admin_headers(admin_token):
    return bearer(admin_token)


@pytest.fixture
def editor_headers(session_factory):
    """Token of a valid user whose role is not admin."""
    with session_factory() as db:
        user = User(
            name="Editor",
            email="editor@example.com",
            password_hash=hash_password("secret123"),
            role="editor",
        )
        db.add(user)
        db.commit()
        user_id = str(user.id)
    return bearer(get_token_service().issue(user_id))


@pytest.fixture
def make_category(client, admin_headers):
    def _make(slug="short-films", pt="Curtas", en="Shorts"):
        response = client.post(
            "/api/categories",
            json={"categoryId": slug, "name": {"pt": pt, "en": en}},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _make


@pytest.fixture
def make_video(client, admin_headers):
    def _make(category="short-films", **overrides):
        body = {
            "title": {"pt": "Filme", "en": "Film"},
            "description": {"pt": "Uma descrição", "en": "A description"},
            "thumbnail": "https://cdn.example.com/thumb.jpg",
            "videoUrl": "https://vimeo.com/123456",
            "category": category,
        }
        body.update(overrides)
        response = client.post("/api/videos", json=body, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _make
