"""Pytest fixtures for API tests.

Every test gets its own in-memory SQLite store, wired into the app by
overriding the ``get_db`` dependency, and an httpx client that talks to
the ASGI app directly (no server process).
"""

from typing import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from game_api.db.base import Base
from game_api.db.session import build_engine, get_db
from game_api.main import app


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def player(client: AsyncClient) -> dict:
    """A registered user: the register response plus the plaintext password."""
    response = await client.post(
        "/register",
        json={"username": "alice", "password": "s3cret-pass", "email": "alice@example.com"},
    )
    assert response.status_code == 200
    return {**response.json(), "password": "s3cret-pass"}
