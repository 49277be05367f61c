"""Shared pytest fixtures for the showcase identity tests."""
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

# ---------------------------------------------------------------------------
# Deterministic test environment, set BEFORE any showcase module imports.
# Settings requires both token secrets; the module-level engine gets a
# throwaway in-memory URL and is replaced by dependency overrides below.
# ---------------------------------------------------------------------------
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret-for-pytest-32chars")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret-for-pytest-32chars")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from showcase.core.config import get_settings  # noqa: E402
from showcase.core.storage_utils import get_image_store  # noqa: E402
from showcase.core.tokens import TokenIssuer  # noqa: E402
from showcase.database import create_db_and_tables, get_session  # noqa: E402
from showcase.main import app  # noqa: E402
from showcase.repositories.artist_repo import ArtistRepository  # noqa: E402
from showcase.repositories.user_repo import UserRepository  # noqa: E402
from showcase.services.artist_service import ArtistService  # noqa: E402
from showcase.services.session_service import SessionService  # noqa: E402
from showcase.services.user_service import UserService  # noqa: E402


class FakeImageStore:
    """In-memory ImageStore; can be told to fail or to return no URL."""

    BASE = "https://example.supabase.co/storage/v1/object/public/assets/"

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail = False
        self.return_none = False

    def upload(self, path, file_bytes, content_type):
        if self.fail:
            raise ConnectionError("storage unavailable")
        if self.return_none:
            return None
        self.objects[path] = file_bytes
        return self.BASE + path

    def delete_url(self, url):
        self.deleted.append(url)
        self.objects.pop(url.removeprefix(self.BASE), None)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def image_store():
    return FakeImageStore()


@pytest.fixture
def user_repo():
    return UserRepository()


@pytest.fixture
def user_service(user_repo, settings, image_store):
    return UserService(user_repo, TokenIssuer(settings), image_store)


@pytest.fixture
def session_service(user_repo, settings):
    return SessionService(user_repo, TokenIssuer(settings), settings)


@pytest.fixture
def artist_service(user_repo):
    return ArtistService(user_repo, ArtistRepository())


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def client(engine, image_store):
    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    app.dependency_overrides[get_image_store] = lambda: image_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


API = "/api/v1"


def signup_and_login(client, username="amy", email="amy@x.com", password="pw123456"):
    """Create an account over HTTP and return (user json, auth headers)."""
    r = client.post(
        f"{API}/users/signup",
        json={"username": username, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    r = client.post(f"{API}/users/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    body = r.json()
    return body["user"], {"Authorization": f"Bearer {body['access_token']}"}
