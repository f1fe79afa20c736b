"""User Repository — SQLAlchemy implementation of core.repository_protocols.UserRepository.

Invariants:
    - At most one row per key and per email; a second match raises InternalError, never "pick one"
    - Reads that fail raise DatabaseReadError; writes that fail raise DatabaseWriteError
    - A unique-constraint violation on insert or key rotation raises UserExistsError
    - Every failure rolls the session back before raising (no half-applied writes)
    - update_key_and_vault changes key and vault in ONE statement and ONE commit
    - Writes filter on the id AND the key that was checked; 0 rows updated means a concurrent
      rotation won the race → UserNoExistsError, nothing written

Design Decisions:
    - Lookups select LIMIT 2: enough to tell 0, 1 and "more than one" apart
    - Lookups that precede a write lock the row (FOR UPDATE) on servers that honour it;
      SQLite ignores the lock, so the checked key is re-asserted in the UPDATE itself
    - Logger injected by the caller: repository emits events, never configures logging
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from hexvault.core.domain_types import AuthKey, NewAuthKey, Email, Vault
from hexvault.core.errors import (
    ErrorKind, DatabaseReadError, DatabaseWriteError, InternalError,
    UserExistsError, UserNoExistsError,
)
from hexvault.models.user import User

MAX_MATCHES_CHECKED = 2


class SqlUserRepository:
    """User persistence over an AsyncSession owned by the current request."""

    def __init__(self, db: AsyncSession, logger: logging.Logger | None = None):
        self.db = db
        self.logger = logger or logging.getLogger(__name__)

    # ─── Lookups ─────────────────────────────────────────────────

    async def find_by_key(
        self, key: AuthKey | NewAuthKey, *, for_update: bool = False,
    ) -> User | None:
        """Single user holding `key`, or None."""
        return await self._load_unique(User.key, key.hex(), for_update)

    async def find_by_email(self, email: Email) -> User | None:
        """Single user registered with `email`, or None."""
        return await self._load_unique(User.email, email, False)

    async def key_exists(self, key: AuthKey) -> bool:
        return await self.find_by_key(key) is not None

    async def email_exists(self, email: Email) -> bool:
        return await self.find_by_email(email) is not None

    async def authenticate(self, key: AuthKey) -> bool:
        """True when `key` belongs to a registered user. Exposes nothing else."""
        self.logger.debug("Checking if user exists in database")
        return await self.key_exists(key)

    async def get_vault(self, key: AuthKey) -> str:
        """Vault of the user holding `key`."""
        self.logger.debug("Reading vault from database")
        user = await self.find_by_key(key)
        if user is None:
            self.logger.warning(
                "Vault requested for authentication key not in database",
                extra={"error_code": ErrorKind.USER_NO_EXISTS.value},
            )
            raise UserNoExistsError()
        return user.vault

    # ─── Mutations ───────────────────────────────────────────────

    async def register(self, email: Email, key: AuthKey, vault: Vault) -> None:
        """Insert a new user. Fails with UserExistsError if email or key is taken."""
        if await self.email_exists(email):
            self.logger.warning(
                "User already exists in database",
                extra={"error_code": ErrorKind.USER_EXISTS.value, "column": "email"},
            )
            raise UserExistsError()
        self.db.add(User(email=email, key=key.hex(), vault=vault))
        await self._commit("insert")
        self.logger.info(
            "Successfully registered new user in database",
            extra={"operation": "insert"},
        )

    async def update_key_and_vault(
        self, old_key: AuthKey, new_key: NewAuthKey, new_vault: Vault,
    ) -> None:
        """Replace key and vault of the user holding `old_key`, both or neither."""
        user = await self._require_user(old_key, "update_key")
        await self._write(
            update(User)
            .where(User.id == user.id, User.key == old_key.hex())
            .values(key=new_key.hex(), vault=new_vault),
            "update_key",
        )
        self.logger.info(
            "Updated authentication key in database",
            extra={"operation": "update_key"},
        )

    async def update_vault(self, key: AuthKey, new_vault: Vault) -> None:
        """Replace only the vault of the user holding `key`."""
        user = await self._require_user(key, "update_vault")
        await self._write(
            update(User)
            .where(User.id == user.id, User.key == key.hex())
            .values(vault=new_vault),
            "update_vault",
        )
        self.logger.info(
            "Updated vault in database", extra={"operation": "update_vault"},
        )

    # ─── Internals ───────────────────────────────────────────────

    async def _load_unique(
        self, column: InstrumentedAttribute, value: str, for_update: bool,
    ) -> User | None:
        query = select(User).where(column == value).limit(MAX_MATCHES_CHECKED)
        if for_update:
            query = query.with_for_update()
        try:
            result = await self.db.execute(query)
            users = list(result.scalars().all())
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.error(
                f"Failed to read database: {e}",
                extra={"error_code": ErrorKind.DATABASE_READ.value, "operation": "select"},
            )
            raise DatabaseReadError("select")

        if len(users) > 1:
            self.logger.critical(
                f"INTEGRITY VIOLATION: multiple users share the same {column.key}",
                extra={
                    "error_code": ErrorKind.INTERNAL_ERROR.value,
                    "column": column.key,
                    "match_count": len(users),
                },
            )
            raise InternalError(column.key, len(users))
        return users[0] if users else None

    async def _require_user(self, key: AuthKey, operation: str) -> User:
        user = await self.find_by_key(key, for_update=True)
        if user is None:
            self.logger.warning(
                "Attempted to update user with authentication key not in database",
                extra={"error_code": ErrorKind.USER_NO_EXISTS.value, "operation": operation},
            )
            raise UserNoExistsError()
        return user

    async def _write(self, statement, operation: str) -> None:
        try:
            result = await self.db.execute(statement)
        except IntegrityError:
            await self._reject_conflict(operation)
        except SQLAlchemyError as e:
            await self._reject_write(operation, e)
        if result.rowcount == 0:
            await self._reject_vanished(operation)
        await self._commit(operation)

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self._reject_conflict(operation)
        except SQLAlchemyError as e:
            await self._reject_write(operation, e)

    async def _reject_conflict(self, operation: str) -> None:
        await self.db.rollback()
        self.logger.warning(
            "Unique constraint rejected write: user already exists",
            extra={"error_code": ErrorKind.USER_EXISTS.value, "operation": operation},
        )
        raise UserExistsError()

    async def _reject_vanished(self, operation: str) -> None:
        await self.db.rollback()
        self.logger.warning(
            "Authentication key changed between lookup and write",
            extra={"error_code": ErrorKind.USER_NO_EXISTS.value, "operation": operation},
        )
        raise UserNoExistsError()

    async def _reject_write(self, operation: str, exc: SQLAlchemyError) -> None:
        await self.db.rollback()
        self.logger.error(
            f"Failed to write to database: {exc}",
            extra={"error_code": ErrorKind.DATABASE_WRITE.value, "operation": operation},
        )
        raise DatabaseWriteError(operation)
