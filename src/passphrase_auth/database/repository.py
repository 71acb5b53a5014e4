"""OTP repository — SQL-backed implementation of the OTP store."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Insert, select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from passphrase_auth.database.engine import async_session_factory
from passphrase_auth.exceptions import StoreError
from passphrase_auth.models.user import User
from passphrase_auth.stores.base import OTPRecord, OTPStore


class OTPRepository(OTPStore):
    """Encapsulates all database queries related to issued passphrases.

    Every call runs in its own committed transaction, so a stored hash
    survives whatever the caller does next (e.g. a failed email send).
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        self._session_factory = session_factory or async_session_factory

    async def upsert(self, identity: str, hashed_secret: bytes, expires_at: int) -> None:
        """Insert the row for *identity*, or overwrite its hash and expiry.

        Runs as a single ``INSERT … ON CONFLICT`` statement keyed on
        ``email``, so concurrent first issuances for one address resolve
        last-write-wins instead of tripping the unique constraint.
        """
        values = {
            "email": identity,
            "passphrase": hashed_secret,
            "expiry": str(expires_at),
            "updated_at": datetime.now(UTC),
        }
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    stmt = _upsert_statement(session.get_bind().dialect.name, values)
                    await session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not store passphrase: {exc}") from exc

    async def fetch(self, identity: str) -> OTPRecord | None:
        """Look up the current passphrase hash and expiry for *identity*."""
        try:
            async with self._session_factory() as session:
                user = await self._find_by_email(session, identity)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not load passphrase: {exc}") from exc

        if user is None:
            return None

        try:
            expires_at = int(user.expiry)
        except ValueError as exc:
            raise StoreError(f"Corrupt expiry for {identity}: {user.expiry!r}") from exc

        return OTPRecord(
            identity=user.email, hashed_secret=bytes(user.passphrase), expires_at=expires_at
        )

    @staticmethod
    async def _find_by_email(session: AsyncSession, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


def _upsert_statement(dialect_name: str, values: dict) -> Insert:
    """Build the dialect's insert-or-update statement for one ``users`` row."""
    overwrite = {key: values[key] for key in ("passphrase", "expiry", "updated_at")}

    if dialect_name == "sqlite":
        stmt = sqlite_insert(User).values(**values)
        return stmt.on_conflict_do_update(index_elements=[User.email], set_=overwrite)
    if dialect_name == "postgresql":
        stmt = pg_insert(User).values(**values)
        return stmt.on_conflict_do_update(index_elements=[User.email], set_=overwrite)
    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql_insert(User).values(**values)
        return stmt.on_duplicate_key_update(**overwrite)

    raise StoreError(f"Upsert is not supported for the {dialect_name!r} database dialect")
