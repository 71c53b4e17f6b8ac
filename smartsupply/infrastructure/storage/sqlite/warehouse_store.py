"""SQLite implementation of warehouse storage."""

import aiosqlite

from smartsupply.config import get_logger
from smartsupply.core.entities.catalog import Warehouse, WarehouseType
from smartsupply.core.exceptions import DuplicateWarehouseNameError, EntityInUseError
from smartsupply.core.interfaces.catalog_store import IWarehouseStore
from smartsupply.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from smartsupply.infrastructure.storage.sqlite.rows import like_pattern

logger = get_logger(__name__)

_SEARCH_CLAUSE = (
    "WHERE LOWER(name) LIKE ? ESCAPE '\\' OR LOWER(COALESCE(location, '')) LIKE ? ESCAPE '\\'"
)


class SQLiteWarehouseStore(IWarehouseStore):
    """SQLite implementation of warehouse storage."""

    async def create_warehouse(self, warehouse: Warehouse) -> Warehouse:
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO warehouses (id, name, location, type, capacity)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        warehouse.id,
                        warehouse.name,
                        warehouse.location,
                        warehouse.type.value,
                        warehouse.capacity,
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateWarehouseNameError(warehouse.name) from e

        logger.info("warehouse_created", warehouse_id=warehouse.id, name=warehouse.name)
        return warehouse

    async def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM warehouses WHERE id = ?", (warehouse_id,))
            row = await cursor.fetchone()
            return self._row_to_warehouse(row) if row else None

    async def get_warehouse_by_name(self, name: str) -> Warehouse | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM warehouses WHERE name = ?", (name,))
            row = await cursor.fetchone()
            return self._row_to_warehouse(row) if row else None

    async def update_warehouse(self, warehouse: Warehouse) -> Warehouse:
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE warehouses SET name = ?, location = ?, type = ?, capacity = ?
                    WHERE id = ?
                    """,
                    (
                        warehouse.name,
                        warehouse.location,
                        warehouse.type.value,
                        warehouse.capacity,
                        warehouse.id,
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateWarehouseNameError(warehouse.name) from e

        logger.info("warehouse_updated", warehouse_id=warehouse.id)
        return warehouse

    async def delete_warehouse(self, warehouse_id: str) -> bool:
        """
        Delete a warehouse; its inventory items cascade.

        Blocked while any of those items has movement history.
        """
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM warehouses WHERE id = ?", (warehouse_id,)
                )
                deleted = cursor.rowcount > 0
        except aiosqlite.IntegrityError as e:
            raise EntityInUseError("Warehouse", warehouse_id) from e

        if deleted:
            logger.info("warehouse_deleted", warehouse_id=warehouse_id)
        return deleted

    async def list_warehouses(
        self, search: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Warehouse]:
        async with get_connection() as conn:
            if search:
                pattern = like_pattern(search)
                cursor = await conn.execute(
                    f"SELECT * FROM warehouses {_SEARCH_CLAUSE} ORDER BY name LIMIT ? OFFSET ?",
                    (pattern, pattern, limit, offset),
                )
            else:
                cursor = await conn.execute(
                    "SELECT * FROM warehouses ORDER BY name LIMIT ? OFFSET ?",
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_warehouse(row) for row in rows]

    async def count_warehouses(self, search: str | None = None) -> int:
        async with get_connection() as conn:
            if search:
                pattern = like_pattern(search)
                cursor = await conn.execute(
                    f"SELECT COUNT(*) FROM warehouses {_SEARCH_CLAUSE}", (pattern, pattern)
                )
            else:
                cursor = await conn.execute("SELECT COUNT(*) FROM warehouses")
            row = await cursor.fetchone()
            return row[0]

    @staticmethod
    def _row_to_warehouse(row: aiosqlite.Row) -> Warehouse:
        return Warehouse(
            id=row["id"],
            name=row["name"],
            location=row["location"],
            type=WarehouseType(row["type"]),
            capacity=row["capacity"],
        )
