"""
GymPass Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── clock:              FixedClock pinned to 2024-01-15T12:00:00Z
    ├── users_repository / gyms_repository / check_ins_repository:
    │                       in-memory repositories (no database)
    ├── mock_db_session:    AsyncMock session for error-path tests
    ├── database:           Database handle on a throwaway SQLite file
    └── test_client:        HTTPX AsyncClient bound to an app using `database`
"""

import os

# Override settings BEFORE any gympass import: the settings singleton is
# built when gympass.config is first imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-secret-not-for-production-use"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"  # bcrypt minimum; keeps tests fast
os.environ["REFRESH_COOKIE_SECURE"] = "false"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from gympass.database import Database
from gympass.models import Role
from gympass.repositories.in_memory import (
    InMemoryCheckInsRepository,
    InMemoryGymsRepository,
    InMemoryUsersRepository,
)
from gympass.repositories.sql import SqlAlchemyUsersRepository
from gympass.security import hash_password


# ══════════════════════════════════════════════════════════════════════════
# Time Control
# ══════════════════════════════════════════════════════════════════════════

class FixedClock:
    """
    A Clock whose "now" only moves when a test says so.

    Usage:
        clock = FixedClock(datetime(2024, 1, 15, 12, tzinfo=timezone.utc))
        service = CheckInsService(..., clock=clock)
        clock.advance(minutes=21)
    """

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


# ══════════════════════════════════════════════════════════════════════════
# Repositories & Sessions
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def users_repository(clock):
    return InMemoryUsersRepository(clock=clock)


@pytest.fixture
def gyms_repository():
    return InMemoryGymsRepository()


@pytest.fixture
def check_ins_repository():
    return InMemoryCheckInsRepository()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    What:    An AsyncMock that simulates AsyncSession behavior.
    Why:     Error-translation paths in the SQL repositories can be driven
             without a real database.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """A Database handle on a fresh SQLite file with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'gympass_test.db'}", echo=False)
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


# ══════════════════════════════════════════════════════════════════════════
# API Client
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(database):
    """
    A fresh application instance bound to the `database` fixture.

    The app uses that handle instead of opening its own, so every test starts
    from empty tables. Tests pin time through `app.dependency_overrides`.
    """
    from gympass.main import create_app

    return create_app(database=database)


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX AsyncClient talking to `app` over ASGITransport (no server)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def create_and_authenticate_user(
    client: AsyncClient,
    database: Database,
    is_admin: bool = False,
    email: str = "johndoe@example.com",
    password: str = "123456",
) -> Tuple[str, str]:
    """
    Insert a user straight into the database and log in through the API.

    Admins cannot self-register, so the row is written with the repository.

    Returns:
        (access_token, refresh_token)
    """
    async with database.session() as session:
        await SqlAlchemyUsersRepository(session).create(
            name="John Doe",
            email=email,
            password_hash=hash_password(password),
            role=Role.ADMIN if is_admin else Role.MEMBER,
        )
        await session.commit()

    response = await client.post("/sessions", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"], refresh_cookie_from(response)


def refresh_cookie_from(response) -> str:
    """Pull the refreshToken value out of the Set-Cookie header."""
    header = response.headers["set-cookie"]
    name, _, value = header.split(";", 1)[0].partition("=")
    assert name.strip() == "refreshToken"
    return value.strip()
