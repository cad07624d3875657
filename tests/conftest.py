# tests/conftest.py
import os
import sys
from typing import AsyncGenerator

# Add project root to path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Settings are read at import time; give them test values before src loads
os.environ.setdefault("PROJECT_NAME", "Inventory Manager API")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./unused.db")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:5173")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("SENDER_ADDRESS", "DoNotReply@example.com")
os.environ.setdefault("OTP_HASH_ROUNDS", "4")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from src.main import app as fastapi_app
from src.database import Base, get_async_session
from src.auth import models  # noqa: F401  Ensure models are imported
from src.password_reset import models as password_reset_models  # noqa: F401


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh SQLite database per test, schema created from the models."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def app(session_factory) -> AsyncGenerator[FastAPI, None]:
    """Create FastAPI app with test database dependency override"""

    async def get_test_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_async_session] = get_test_db

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def user_payload() -> dict:
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "a@x.com",
        "age": 36,
        "gender": "female",
        "password": "OldP@ssw0rd1",
    }


@pytest_asyncio.fixture
async def registered_user(async_client: AsyncClient, user_payload: dict) -> dict:
    """Register a user through the API and return the payload used."""
    response = await async_client.post("/api/auth/register", json=user_payload)
    assert response.status_code == 201
    return user_payload
