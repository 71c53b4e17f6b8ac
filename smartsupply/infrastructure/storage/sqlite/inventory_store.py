"""SQLite implementation of inventory storage."""

from datetime import datetime

import aiosqlite

from smartsupply.config import get_logger
from smartsupply.core.entities.common import new_id, utc_now
from smartsupply.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
)
from smartsupply.core.exceptions import EntityInUseError
from smartsupply.core.interfaces.inventory_store import IInventoryStore
from smartsupply.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from smartsupply.infrastructure.storage.sqlite.rows import (
    like_pattern,
    parse_datetime,
    to_db_datetime,
)

logger = get_logger(__name__)

_ITEM_SELECT = """
    SELECT i.*, p.sku AS product_sku, p.name AS product_name,
           p.safety_stock AS safety_stock, w.name AS warehouse_name
    FROM inventory_items i
    JOIN products p ON p.id = i.product_id
    JOIN warehouses w ON w.id = i.warehouse_id
"""

_ITEM_SEARCH_CLAUSE = """
    WHERE LOWER(p.name) LIKE ? ESCAPE '\\'
       OR LOWER(p.sku) LIKE ? ESCAPE '\\'
       OR LOWER(w.name) LIKE ? ESCAPE '\\'
"""

_MOVEMENT_SELECT = """
    SELECT m.*, p.sku AS product_sku, p.name AS product_name,
           w.name AS warehouse_name, u.email AS performed_by_email
    FROM inventory_movements m
    JOIN inventory_items i ON i.id = m.inventory_item_id
    JOIN products p ON p.id = i.product_id
    JOIN warehouses w ON w.id = i.warehouse_id
    LEFT JOIN users u ON u.id = m.performed_by
"""

_NEWEST_FIRST = "ORDER BY m.created_at DESC, m.rowid DESC"


async def insert_movement(conn: aiosqlite.Connection, movement: InventoryMovement) -> None:
    """Append a movement row on a connection already inside a transaction."""
    await conn.execute(
        """
        INSERT INTO inventory_movements (
            id, inventory_item_id, movement_type, quantity,
            quantity_before, quantity_after, reason,
            reference_type, reference_id, performed_by, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            movement.id,
            movement.inventory_item_id,
            movement.movement_type.value,
            movement.quantity,
            movement.quantity_before,
            movement.quantity_after,
            movement.reason,
            movement.reference_type,
            movement.reference_id,
            movement.performed_by,
            to_db_datetime(movement.created_at),
        ),
    )


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory item and movement storage."""

    async def get_item(self, item_id: str) -> InventoryItem | None:
        """Get inventory item by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_ITEM_SELECT} WHERE i.id = ?", (item_id,))
            row = await cursor.fetchone()
            return self._row_to_inventory_item(row) if row else None

    async def get_item_for(self, product_id: str, warehouse_id: str) -> InventoryItem | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_ITEM_SELECT} WHERE i.product_id = ? AND i.warehouse_id = ?",
                (product_id, warehouse_id),
            )
            row = await cursor.fetchone()
            return self._row_to_inventory_item(row) if row else None

    async def ensure_item(self, product_id: str, warehouse_id: str) -> InventoryItem:
        """Get or lazily create the item for a (product, warehouse) pair."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO inventory_items (
                    id, product_id, warehouse_id, quantity, reserved, last_updated
                ) VALUES (?, ?, ?, 0, 0, ?)
                ON CONFLICT (product_id, warehouse_id) DO NOTHING
                """,
                (new_id(), product_id, warehouse_id, to_db_datetime(utc_now())),
            )
            if cursor.rowcount > 0:
                logger.info(
                    "inventory_item_created",
                    product_id=product_id,
                    warehouse_id=warehouse_id,
                )

        item = await self.get_item_for(product_id, warehouse_id)
        if item is None:
            raise RuntimeError(f"inventory item for {product_id}/{warehouse_id} vanished")
        return item

    async def set_reserved(self, item_id: str, reserved: int) -> None:
        async with get_transaction() as conn:
            await conn.execute(
                "UPDATE inventory_items SET reserved = ?, last_updated = ? WHERE id = ?",
                (reserved, to_db_datetime(utc_now()), item_id),
            )

    async def delete_item(self, item_id: str) -> bool:
        """Delete an item that has no movement history."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM inventory_items WHERE id = ?", (item_id,)
                )
                deleted = cursor.rowcount > 0
        except aiosqlite.IntegrityError as e:
            raise EntityInUseError("Inventory item", item_id) from e

        if deleted:
            logger.info("inventory_item_deleted", item_id=item_id)
        return deleted

    async def list_items(
        self, search: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[InventoryItem]:
        """List items by product then warehouse name, optionally filtered."""
        async with get_connection() as conn:
            if search:
                pattern = like_pattern(search)
                cursor = await conn.execute(
                    f"""{_ITEM_SELECT} {_ITEM_SEARCH_CLAUSE}
                    ORDER BY p.name, w.name LIMIT ? OFFSET ?""",
                    (pattern, pattern, pattern, limit, offset),
                )
            else:
                cursor = await conn.execute(
                    f"{_ITEM_SELECT} ORDER BY p.name, w.name LIMIT ? OFFSET ?",
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_inventory_item(row) for row in rows]

    async def count_items(self, search: str | None = None) -> int:
        async with get_connection() as conn:
            if search:
                pattern = like_pattern(search)
                cursor = await conn.execute(
                    f"""
                    SELECT COUNT(*) FROM inventory_items i
                    JOIN products p ON p.id = i.product_id
                    JOIN warehouses w ON w.id = i.warehouse_id
                    {_ITEM_SEARCH_CLAUSE}
                    """,
                    (pattern, pattern, pattern),
                )
            else:
                cursor = await conn.execute("SELECT COUNT(*) FROM inventory_items")
            row = await cursor.fetchone()
            return row[0]

    async def list_by_product(self, product_id: str) -> list[InventoryItem]:
        return await self._list_where("i.product_id = ?", (product_id,))

    async def list_by_warehouse(self, warehouse_id: str) -> list[InventoryItem]:
        return await self._list_where("i.warehouse_id = ?", (warehouse_id,))

    async def list_low_stock(self) -> list[InventoryItem]:
        return await self._list_where("i.quantity <= p.safety_stock", ())

    async def list_out_of_stock(self) -> list[InventoryItem]:
        return await self._list_where("i.quantity - i.reserved <= 0", ())

    async def apply_movement(self, movement: InventoryMovement) -> bool:
        """Compare-and-set the item's quantity and append the movement."""
        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_items SET quantity = ?, last_updated = ?
                WHERE id = ? AND quantity = ?
                """,
                (
                    movement.quantity_after,
                    to_db_datetime(movement.created_at),
                    movement.inventory_item_id,
                    movement.quantity_before,
                ),
            )
            if cursor.rowcount == 0:
                return False

            await insert_movement(conn, movement)

        logger.info(
            "inventory_movement_recorded",
            movement_id=movement.id,
            item_id=movement.inventory_item_id,
            type=movement.movement_type.value,
            qty=movement.quantity,
            quantity_after=movement.quantity_after,
        )
        return True

    async def get_movement(self, movement_id: str) -> InventoryMovement | None:
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_MOVEMENT_SELECT} WHERE m.id = ?", (movement_id,))
            row = await cursor.fetchone()
            return self._row_to_movement(row) if row else None

    async def list_movements(self, limit: int = 100, offset: int = 0) -> list[InventoryMovement]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_MOVEMENT_SELECT} {_NEWEST_FIRST} LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def count_movements(self) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM inventory_movements")
            row = await cursor.fetchone()
            return row[0]

    async def list_movements_for_item(self, item_id: str) -> list[InventoryMovement]:
        return await self._movements_where("m.inventory_item_id = ?", (item_id,))

    async def list_movements_by_type(
        self, movement_type: MovementType
    ) -> list[InventoryMovement]:
        return await self._movements_where("m.movement_type = ?", (movement_type.value,))

    async def list_movements_for_product(self, product_id: str) -> list[InventoryMovement]:
        return await self._movements_where("i.product_id = ?", (product_id,))

    async def list_movements_for_warehouse(self, warehouse_id: str) -> list[InventoryMovement]:
        return await self._movements_where("i.warehouse_id = ?", (warehouse_id,))

    async def list_movements_between(
        self, start: datetime, end: datetime
    ) -> list[InventoryMovement]:
        return await self._movements_where(
            "m.created_at BETWEEN ? AND ?",
            (to_db_datetime(start), to_db_datetime(end)),
        )

    async def _list_where(self, clause: str, params: tuple) -> list[InventoryItem]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_ITEM_SELECT} WHERE {clause} ORDER BY p.name, w.name", params
            )
            rows = await cursor.fetchall()
            return [self._row_to_inventory_item(row) for row in rows]

    async def _movements_where(self, clause: str, params: tuple) -> list[InventoryMovement]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_MOVEMENT_SELECT} WHERE {clause} {_NEWEST_FIRST}", params
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    @staticmethod
    def _row_to_inventory_item(row: aiosqlite.Row) -> InventoryItem:
        """Convert a joined database row to an InventoryItem entity."""
        return InventoryItem(
            id=row["id"],
            product_id=row["product_id"],
            warehouse_id=row["warehouse_id"],
            quantity=row["quantity"],
            reserved=row["reserved"],
            last_updated=parse_datetime(row["last_updated"]),
            product_sku=row["product_sku"],
            product_name=row["product_name"],
            warehouse_name=row["warehouse_name"],
            safety_stock=row["safety_stock"],
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> InventoryMovement:
        """Convert a joined database row to an InventoryMovement entity."""
        return InventoryMovement(
            id=row["id"],
            inventory_item_id=row["inventory_item_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity=row["quantity"],
            quantity_before=row["quantity_before"],
            quantity_after=row["quantity_after"],
            reason=row["reason"],
            reference_type=row["reference_type"],
            reference_id=row["reference_id"],
            performed_by=row["performed_by"],
            created_at=parse_datetime(row["created_at"]),
            product_sku=row["product_sku"],
            product_name=row["product_name"],
            warehouse_name=row["warehouse_name"],
            performed_by_email=row["performed_by_email"],
        )
