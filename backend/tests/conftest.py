"""
Jotter Backend: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── engine / session_factory: in-memory SQLite with every table created
    ├── db_session: one AsyncSession for repository/service tests
    ├── mock_db_session: AsyncMock session (no database at all)
    ├── test_client: HTTPX AsyncClient wired to the app, DB dependency overridden
    ├── user / other_user: persisted users, each with one registered token
    └── note: "note1" owned by `user`
"""

import os
import tempfile

# Override settings for testing BEFORE any jotter imports
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="jotter_test_"), "test.db")
)
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt minimum; keeps hashing fast
os.environ["LOG_LEVEL"] = "WARNING"

from dataclasses import dataclass  # noqa: E402
from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from jotter.auth import create_access_token, hash_password  # noqa: E402
from jotter.database import Base, get_db_session  # noqa: E402
from jotter.models.note import Note  # noqa: E402
from jotter.models.user import AuthToken, User  # noqa: E402


@dataclass
class AuthedUser:
    """A persisted user plus a bearer token that is registered for them."""

    user: User
    token: str

    @property
    def id(self) -> str:
        return self.user.id

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    """
    In-memory SQLite engine with all tables created.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Data Fixtures
# ══════════════════════════════════════════════════════════════════════════

async def _create_user(session_factory, email: str) -> AuthedUser:
    async with session_factory() as session:
        user = User(email=email, password_hash=hash_password("asdfASDF1234!@#$"))
        session.add(user)
        await session.flush()
        token = create_access_token(subject=user.id)
        session.add(AuthToken(user_id=user.id, token=token))
        await session.commit()
        return AuthedUser(user=user, token=token)


@pytest_asyncio.fixture
async def user(session_factory) -> AuthedUser:
    return await _create_user(session_factory, "user@test.com")


@pytest_asyncio.fixture
async def other_user(session_factory) -> AuthedUser:
    return await _create_user(session_factory, "other@test.com")


@pytest_asyncio.fixture
async def note(session_factory, user) -> Note:
    async with session_factory() as session:
        created = Note(text="note1", completed=False, creator_id=user.id)
        session.add(created)
        await session.commit()
        return created


@pytest_asyncio.fixture
async def fetch_note(session_factory):
    """Reads a note straight from the database, bypassing the API."""

    async def _fetch(note_id: str):
        async with session_factory() as session:
            return await session.get(Note, note_id)

    return _fetch


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is overridden to hand out sessions bound to the
    in-memory test database, with the same commit/rollback semantics.
    """
    from jotter.main import app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
