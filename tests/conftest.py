"""
Test configuration and fixtures for pytest.

Every test gets its own in-memory SQLite database (aiosqlite) with the
full schema, so tests never share rows.
"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import movesbook.models  # noqa
from movesbook.db.async_session import get_async_db
from movesbook.db.base_class import Base
from movesbook.main import app
from movesbook.models.user import User, UserRole
from movesbook.services.async_auth import AsyncAuthService
from tests.utils_jwt import ADMIN_PASSWORD, ATHLETE_PASSWORD, generate_test_jwt



@pytest_asyncio.fixture
async def async_engine():
    """Create an in-memory async engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine):
    return async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def async_db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create an async SQLAlchemy session for service tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(session_factory):
    """Create an HTTP client for the app with the database dependency overridden."""

    async def override_get_async_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_get_async_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides = {}


async def _create_user(session_factory, email: str, username: str, password: str, role: UserRole) -> User:
    async with session_factory() as session:
        user = User(
            email=email,
            username=username,
            full_name=username.title(),
            hashed_password=AsyncAuthService.get_password_hash(password),
            role=role,
            is_active=True,
        )
        session.add(user)
        await session.commit()
        return user


@pytest_asyncio.fixture
async def test_user(session_factory) -> User:
    return await _create_user(session_factory, "athlete@example.com", "athlete", ATHLETE_PASSWORD, UserRole.ATHLETE)


@pytest_asyncio.fixture
async def other_user(session_factory) -> User:
    return await _create_user(session_factory, "rival@example.com", "rival", ATHLETE_PASSWORD, UserRole.ATHLETE)


@pytest_asyncio.fixture
async def admin_user(session_factory) -> User:
    return await _create_user(session_factory, "admin@example.com", "admin", ADMIN_PASSWORD, UserRole.ADMIN)


@pytest_asyncio.fixture
async def auth_headers(test_user):
    return {"Authorization": f"Bearer {generate_test_jwt(test_user.id)}"}


@pytest_asyncio.fixture
async def other_auth_headers(other_user):
    return {"Authorization": f"Bearer {generate_test_jwt(other_user.id)}"}
