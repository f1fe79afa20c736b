"""Service test fixtures — async DB + repository + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file
    - get_db dependency overridden to use the test session factory
    - db_manager patched so readiness checks see the test engine

Design Decisions:
    - SQLite file per test (tmp_path): every session gets its own connection,
      so rollback and commit behave as they do in production
"""

import logging

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from hexvault.db.base import Base
from hexvault.infrastructure.database import get_db, DatabaseSessionManager
import hexvault.infrastructure.database as db_module
from hexvault.main import app
import hexvault.models  # noqa: F401
from hexvault.services.user_repository import SqlUserRepository


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'vault.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
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
def vault_logger():
    return logging.getLogger("hexvault.vault.test")


@pytest.fixture
def repo(test_db, vault_logger):
    return SqlUserRepository(test_db, vault_logger)


@pytest.fixture
async def fresh_repo(test_session_factory, vault_logger):
    """Build a repository over a brand-new session (observes only committed state)."""
    sessions = []

    def _make() -> SqlUserRepository:
        session = test_session_factory()
        sessions.append(session)
        return SqlUserRepository(session, vault_logger)

    yield _make
    for session in sessions:
        await session.close()


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
