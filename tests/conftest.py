"""Pytest configuration and fixtures."""

import asyncio
import os

# Keep the module-level app in auth_api.main off the production defaults
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-for-testing-only")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from auth_api import models  # noqa: F401
from auth_api.config import Settings
from auth_api.database import Base
from auth_api.main import create_app

TEST_PASSWORD = "Passw0rd"  # noqa: S105

SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///./test.db")

# NullPool so connections never outlive the event loop that opened them
engine = create_async_engine(SQLALCHEMY_DATABASE_URL, poolclass=NullPool)


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's details."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


async def _create_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def _clear_tables() -> None:
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    asyncio.run(_create_schema())
    yield
    asyncio.run(engine.dispose())


@pytest.fixture(scope="function", autouse=True)
def clean_tables():
    """Remove every row after each test."""
    yield
    asyncio.run(_clear_tables())


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        database_url=SQLALCHEMY_DATABASE_URL,
        jwt_secret="test-jwt-secret-for-testing-only",
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create a test client bound to the test database."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Register and log in a user, returning bearer auth headers."""
    email = "test@example.com"
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": TEST_PASSWORD, "name": "Test User"},
    )
    assert response.status_code == 201
    user_id = response.json()["data"]["id"]

    response = client.post("/api/auth/login", json={"email": email, "password": TEST_PASSWORD})
    assert response.status_code == 200
    token = response.json()["data"]["token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)


@pytest.fixture
def session_factory():
    """Session factory on the test database, outside any app."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
