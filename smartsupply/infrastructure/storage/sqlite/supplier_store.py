"""SQLite implementation of supplier storage."""

import aiosqlite

from smartsupply.config import get_logger
from smartsupply.core.entities.catalog import Supplier
from smartsupply.core.exceptions import DuplicateSupplierEmailError, EntityInUseError
from smartsupply.core.interfaces.catalog_store import ISupplierStore
from smartsupply.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from smartsupply.infrastructure.storage.sqlite.rows import (
    like_pattern,
    parse_datetime,
    to_db_datetime,
)

logger = get_logger(__name__)

_SEARCH_CLAUSE = (
    "WHERE LOWER(name) LIKE ? ESCAPE '\\' OR LOWER(COALESCE(email, '')) LIKE ? ESCAPE '\\'"
)


class SQLiteSupplierStore(ISupplierStore):
    """SQLite implementation of supplier storage."""

    async def create_supplier(self, supplier: Supplier) -> Supplier:
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO suppliers (
                        id, name, email, phone, address, contact_person, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        supplier.id,
                        supplier.name,
                        supplier.email,
                        supplier.phone,
                        supplier.address,
                        supplier.contact_person,
                        to_db_datetime(supplier.created_at),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateSupplierEmailError(supplier.email or "") from e

        logger.info("supplier_created", supplier_id=supplier.id, name=supplier.name)
        return supplier

    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM suppliers WHERE id = ?", (supplier_id,))
            row = await cursor.fetchone()
            return self._row_to_supplier(row) if row else None

    async def get_supplier_by_email(self, email: str) -> Supplier | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM suppliers WHERE email = ?", (email,))
            row = await cursor.fetchone()
            return self._row_to_supplier(row) if row else None

    async def update_supplier(self, supplier: Supplier) -> Supplier:
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE suppliers SET
                        name = ?, email = ?, phone = ?, address = ?, contact_person = ?
                    WHERE id = ?
                    """,
                    (
                        supplier.name,
                        supplier.email,
                        supplier.phone,
                        supplier.address,
                        supplier.contact_person,
                        supplier.id,
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateSupplierEmailError(supplier.email or "") from e

        logger.info("supplier_updated", supplier_id=supplier.id)
        return supplier

    async def delete_supplier(self, supplier_id: str) -> bool:
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute("DELETE FROM suppliers WHERE id = ?", (supplier_id,))
                deleted = cursor.rowcount > 0
        except aiosqlite.IntegrityError as e:
            raise EntityInUseError("Supplier", supplier_id) from e

        if deleted:
            logger.info("supplier_deleted", supplier_id=supplier_id)
        return deleted

    async def list_suppliers(
        self, search: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Supplier]:
        async with get_connection() as conn:
            if search:
                pattern = like_pattern(search)
                cursor = await conn.execute(
                    f"SELECT * FROM suppliers {_SEARCH_CLAUSE} ORDER BY name LIMIT ? OFFSET ?",
                    (pattern, pattern, limit, offset),
                )
            else:
                cursor = await conn.execute(
                    "SELECT * FROM suppliers ORDER BY name LIMIT ? OFFSET ?",
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_supplier(row) for row in rows]

    async def count_suppliers(self, search: str | None = None) -> int:
        async with get_connection() as conn:
            if search:
                pattern = like_pattern(search)
                cursor = await conn.execute(
                    f"SELECT COUNT(*) FROM suppliers {_SEARCH_CLAUSE}", (pattern, pattern)
                )
            else:
                cursor = await conn.execute("SELECT COUNT(*) FROM suppliers")
            row = await cursor.fetchone()
            return row[0]

    @staticmethod
    def _row_to_supplier(row: aiosqlite.Row) -> Supplier:
        return Supplier(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            address=row["address"],
            contact_person=row["contact_person"],
            created_at=parse_datetime(row["created_at"]),
        )
