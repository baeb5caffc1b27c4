"""
Pytest fixtures for the test database, storage, client, and authentication.

Each test gets a fresh schema. SQLite (aiosqlite) on a temp file is the
default; set TEST_DATABASE_URL to run against PostgreSQL instead.
"""

import itertools
import os
from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator, Callable

# Settings are read once and cached, so these must be in place before app imports
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine

from app.main import app
from app.core.actor import Actor
from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import create_engine, create_session_factory
from app.models.event import Event
from app.models.organizer import Organizer
from app.models.user import User
from app.schemas.user import UserUpsert
from app.storage import Storage

DEFAULT_PASSWORD = "testpassword123"


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create tables, yield the engine, then drop tables for isolation."""
    url = os.environ.get("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    test_engine = create_engine(url)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def storage(engine: AsyncEngine) -> Storage:
    return Storage(create_session_factory(engine))


@pytest_asyncio.fixture(scope="function")
async def client(storage: Storage) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the test storage."""
    app.state.storage = storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.state.storage = None


@pytest_asyncio.fixture
async def make_user(storage: Storage) -> Callable:
    """Factory for password accounts with unique email/username."""
    counter = itertools.count(1)

    async def _make(role: str = "attendee", **fields) -> User:
        n = next(counter)
        data = {
            "email": f"user{n}@example.com",
            "username": f"user{n}",
            "password": DEFAULT_PASSWORD,
            "first_name": "Test",
            "last_name": f"User{n}",
            "role": role,
            **fields,
        }
        return await storage.upsert_user(UserUpsert(**data))

    return _make


@pytest_asyncio.fixture
async def attendee(make_user) -> User:
    return await make_user(role="attendee")


@pytest_asyncio.fixture
async def admin(make_user) -> User:
    return await make_user(role="admin")


@pytest_asyncio.fixture
async def organizer_user(make_user) -> User:
    return await make_user(role="organizer")


@pytest_asyncio.fixture
async def organizer(storage: Storage, organizer_user: User) -> Organizer:
    """Organizer profile claimed by organizer_user."""
    return await storage.create_organizer(
        actor_for(organizer_user),
        {
            "user_id": organizer_user.id,
            "email": organizer_user.email,
            "business_name": "Riyadh Events Co",
            "city": "Riyadh",
        },
    )


@pytest_asyncio.fixture
async def make_event(storage: Storage, organizer: Organizer, organizer_user: User) -> Callable:
    """Factory for events owned by ``organizer``; published by default."""

    async def _make(**overrides) -> Event:
        start = datetime.now(timezone.utc) + timedelta(days=30)
        values = {
            "organizer_id": organizer.id,
            "title": "Tech Summit",
            "description": "Annual technology summit",
            "category": "technology",
            "start_date": start,
            "end_date": start + timedelta(hours=8),
            "location": "King Fahd Road",
            "city": "Riyadh",
            "status": "published",
            **overrides,
        }
        return await storage.create_event(actor_for(organizer_user), values)

    return _make


def actor_for(user: User) -> Actor:
    return Actor(user_id=user.id, role=user.role)


def auth_headers_for(user: User) -> dict:
    """Authorization headers with a Bearer session token."""
    token = create_access_token(user.id, user.role, user.token_version)
    return {"Authorization": f"Bearer {token}"}
