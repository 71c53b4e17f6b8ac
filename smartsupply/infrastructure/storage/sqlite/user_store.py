"""SQLite implementation of user account storage."""

import aiosqlite

from smartsupply.config import get_logger
from smartsupply.core.entities.user import Role, User
from smartsupply.core.exceptions import DuplicateUserEmailError
from smartsupply.core.interfaces.user_store import IUserStore
from smartsupply.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from smartsupply.infrastructure.storage.sqlite.rows import parse_datetime, to_db_datetime

logger = get_logger(__name__)


class SQLiteUserStore(IUserStore):
    """SQLite implementation of user storage."""

    async def create_user(self, user: User) -> User:
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO users (
                        id, email, password_hash, first_name, last_name, role, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user.id,
                        user.email,
                        user.password_hash,
                        user.first_name,
                        user.last_name,
                        user.role.value,
                        to_db_datetime(user.created_at),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateUserEmailError(user.email) from e

        logger.info("user_created", user_id=user.id, role=user.role.value)
        return user

    async def get_user(self, user_id: str) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE email = ?", (email,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            role=Role(row["role"]),
            created_at=parse_datetime(row["created_at"]),
        )
