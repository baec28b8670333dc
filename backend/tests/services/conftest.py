"""Service test fixtures — async DB, repository and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager initialized for the readiness probe, which bypasses get_db
    - Tokens are signed with the test AUTH_JWT_SECRET, so the real auth path runs

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (row locks are a no-op there; atomicity is still exercised)
    - Two users (alice, bob) as header fixtures: isolation tests need a stranger
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from imagix.db.base import Base
from imagix.infrastructure.database import get_db, DatabaseSessionManager
from imagix.infrastructure.item_store import SqlItemStore
from imagix.infrastructure.repository import SingleTableRepository
import imagix.infrastructure.database as db_module
import imagix.models  # noqa: F401
from imagix.main import app
from tests.services.api_helpers import ALICE, BOB, auth_headers


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlItemStore(test_db)


@pytest.fixture
def repo(store):
    return SingleTableRepository(store)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def alice():
    return auth_headers(ALICE)


@pytest.fixture
def bob():
    return auth_headers(BOB)
