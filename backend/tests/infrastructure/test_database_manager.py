"""Database Session Manager — rollback on failure and table creation."""

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import OperationalError

from hexvault.core.errors import DatabaseWriteError, UserNoExistsError
from hexvault.infrastructure.database import DatabaseSessionManager
from hexvault.models.user import User


@pytest.fixture
async def manager(tmp_path):
    mgr = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'm.db'}")
    await mgr.create_tables()
    yield mgr
    await mgr.dispose()


async def test_create_tables_makes_users_table_readable(manager):
    assert await manager.users_table_readable() is True
    async with manager.session() as db:
        result = await db.execute(select(User))
        assert result.scalars().all() == []


async def test_vault_errors_pass_through_and_roll_back(manager):
    with pytest.raises(UserNoExistsError):
        async with manager.session() as db:
            db.add(User(email="u@ex.com", key="a1" * 32, vault="aa"))
            await db.flush()
            raise UserNoExistsError()

    async with manager.session() as db:
        assert (await db.execute(select(User))).scalars().all() == []


async def test_stray_sqlalchemy_errors_become_database_write(manager):
    with pytest.raises(DatabaseWriteError):
        async with manager.session() as db:
            await db.execute(text("SELECT 1"))
            raise OperationalError("SELECT", {}, Exception("boom"))


async def test_users_table_missing_is_not_ready(tmp_path):
    mgr = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    try:
        assert await mgr.users_table_readable() is False
        await mgr.create_tables()
        assert await mgr.users_table_readable() is True
    finally:
        await mgr.dispose()
