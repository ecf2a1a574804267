"""Test fixtures for the URL shortener application."""

import os

# Settings are read at import time, so the test environment goes in first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdef"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["TOKEN_EXPIRE_MINUTES"] = "60"
os.environ.pop("SHORT_CODE_MAX_ATTEMPTS", None)

from typing import AsyncGenerator, Dict

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.api.dependencies import get_token_issuer
from app.core.security import TokenIssuer
from app.db.session import get_db
from app.main import app as main_app
# Import models to ensure they're registered with SQLModel metadata
from app.models.url import ShortURL  # noqa: F401
from app.models.user import User  # noqa: F401
from tests.utils import TEST_IDENTITY


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create isolated test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def override_get_db(test_db):
    """Override the get_db dependency for testing."""
    async def _override_get_db():
        yield test_db

    return _override_get_db


@pytest.fixture
def test_app(override_get_db) -> FastAPI:
    """FastAPI app with the database dependency pointed at the test session."""
    app = main_app
    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client talking to the app in-process."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def token_issuer() -> TokenIssuer:
    """Issuer sharing the application's signing key."""
    return get_token_issuer()


@pytest.fixture
def auth_headers(token_issuer) -> Dict[str, str]:
    """Authorization header with a fresh token."""
    token = token_issuer.issue(TEST_IDENTITY)
    return {"Authorization": f"Bearer {token.encode()}"}
