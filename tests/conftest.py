"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any pokecatch import, because the
settings object is created at import time and the JWT secret is required.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("AUTH_BCRYPT_ROUNDS", "4")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///./test-pokecatch.db")
os.environ.setdefault("CATALOG_BASE_URL", "https://catalog.test/api/v2")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Any, AsyncIterator, Iterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pokecatch.adapters.catalog.base import AbstractCatalogClient
from pokecatch.api.dependencies import get_catalog_client
from pokecatch.core import rate_limit
from pokecatch.core.app_factory import create_app
from pokecatch.core.config import settings
from pokecatch.core.errors import NotFoundAppError
from pokecatch.db.session import DatabaseSessionManager


class FakeCatalogClient(AbstractCatalogClient):
    """In-memory catalog returning canned entries."""

    def __init__(self, entries: dict[str, dict[str, Any]] | None = None) -> None:
        self.entries = entries if entries is not None else {
            "pikachu": {"id": 25, "name": "pikachu", "base_experience": 112},
            "eevee": {"id": 133, "name": "eevee", "base_experience": 65},
        }
        self.calls: list[str] = []

    async def lookup(self, name: str) -> dict[str, Any]:
        self.calls.append(name)
        if name not in self.entries:
            raise NotFoundAppError(code="pokemon_not_found", message="Pokemon not found")
        return self.entries[name]


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> Iterator[None]:
    """Give every test a fresh limiter so counts never leak between tests."""
    rate_limit._limiter = None
    rate_limit._limiter_config = None
    yield
    rate_limit._limiter = None
    rate_limit._limiter_config = None


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'pokecatch.db'}"


@pytest_asyncio.fixture
async def db_manager(database_url: str) -> AsyncIterator[DatabaseSessionManager]:
    manager = DatabaseSessionManager(database_url)
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture
def fake_catalog() -> FakeCatalogClient:
    return FakeCatalogClient()


@pytest.fixture
def app(monkeypatch, database_url: str, fake_catalog: FakeCatalogClient) -> FastAPI:
    """Application wired to a per-test SQLite file and the fake catalog."""
    monkeypatch.setattr(settings.database, "url", database_url)
    application = create_app()
    application.dependency_overrides[get_catalog_client] = lambda: fake_catalog
    return application


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client with the lifespan (database, catalog client) running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_and_login(client: TestClient):
    """Register a user and return bearer headers for it."""

    def _register_and_login(email: str = "ash@pallet.town", password: str = "pikachu1") -> dict[str, str]:
        assert client.post("/register", json={"email": email, "password": password}).status_code == 200
        response = client.post("/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register_and_login
