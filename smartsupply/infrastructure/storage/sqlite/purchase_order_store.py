"""
SQLite implementation of purchase order storage.

Handles order headers, their ordered item lines and stock receipts.
"""

import aiosqlite

from smartsupply.config import get_logger
from smartsupply.core.entities.common import new_id, utc_now
from smartsupply.core.entities.inventory import InventoryItem, InventoryMovement
from smartsupply.core.entities.purchase_order import (
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderItem,
    ReceiptLine,
)
from smartsupply.core.exceptions import ConcurrentUpdateError, ConflictError
from smartsupply.core.interfaces.purchase_order_store import IPurchaseOrderStore
from smartsupply.core.services.stock_ledger import StockLedgerService
from smartsupply.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from smartsupply.infrastructure.storage.sqlite.inventory_store import insert_movement
from smartsupply.infrastructure.storage.sqlite.rows import (
    parse_date,
    parse_datetime,
    parse_money,
    to_db_datetime,
    to_db_money,
)

logger = get_logger(__name__)

_ORDER_SELECT = """
    SELECT o.*, s.name AS supplier_name, u.email AS created_by_email
    FROM purchase_orders o
    JOIN suppliers s ON s.id = o.supplier_id
    LEFT JOIN users u ON u.id = o.created_by
"""


class SQLitePurchaseOrderStore(IPurchaseOrderStore):
    """SQLite implementation of purchase order storage."""

    def __init__(self, ledger: StockLedgerService | None = None):
        self._ledger = ledger or StockLedgerService()

    async def create_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Create an order with its items."""
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO purchase_orders (
                        id, order_number, supplier_id, status, expected_date,
                        total_amount, created_by, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        order.id,
                        order.order_number,
                        order.supplier_id,
                        order.status.value,
                        order.expected_date.isoformat() if order.expected_date else None,
                        to_db_money(order.total_amount),
                        order.created_by,
                        to_db_datetime(order.created_at),
                    ),
                )
                await self._insert_items(conn, order)
        except aiosqlite.IntegrityError as e:
            raise ConflictError(
                f"Purchase order {order.order_number} could not be stored: {e}",
                code="PURCHASE_ORDER_CONFLICT",
                details={"order_number": order.order_number},
            ) from e

        logger.info(
            "purchase_order_stored",
            order_id=order.id,
            order_number=order.order_number,
            items=len(order.items),
        )
        return order

    async def get_order(self, order_id: str) -> PurchaseOrder | None:
        """Get order by ID with items."""
        async with get_connection() as conn:
            cursor = await conn.execute(f"{_ORDER_SELECT} WHERE o.id = ?", (order_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            orders = await self._with_items(conn, [self._row_to_order(row)])
            return orders[0]

    async def order_number_exists(self, order_number: str) -> bool:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM purchase_orders WHERE order_number = ?", (order_number,)
            )
            return await cursor.fetchone() is not None

    async def update_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Rewrite the header and replace items while the status is unchanged."""
        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                """
                UPDATE purchase_orders SET
                    supplier_id = ?, expected_date = ?, total_amount = ?
                WHERE id = ? AND status = ?
                """,
                (
                    order.supplier_id,
                    order.expected_date.isoformat() if order.expected_date else None,
                    to_db_money(order.total_amount),
                    order.id,
                    order.status.value,
                ),
            )
            if cursor.rowcount == 0:
                raise ConcurrentUpdateError("Purchase order", order.id)

            await conn.execute(
                "DELETE FROM purchase_order_items WHERE purchase_order_id = ?", (order.id,)
            )
            await self._insert_items(conn, order)

        logger.info("purchase_order_rewritten", order_id=order.id, items=len(order.items))
        return order

    async def update_status(self, order_id: str, status: OrderStatus) -> None:
        async with get_transaction() as conn:
            await conn.execute(
                "UPDATE purchase_orders SET status = ? WHERE id = ?",
                (status.value, order_id),
            )

    async def delete_order(
        self, order_id: str, expected_status: OrderStatus | None = None
    ) -> bool:
        async with get_transaction() as conn:
            if expected_status is None:
                cursor = await conn.execute(
                    "DELETE FROM purchase_orders WHERE id = ?", (order_id,)
                )
            else:
                cursor = await conn.execute(
                    "DELETE FROM purchase_orders WHERE id = ? AND status = ?",
                    (order_id, expected_status.value),
                )
            return cursor.rowcount > 0

    async def list_orders(self, limit: int = 100, offset: int = 0) -> list[PurchaseOrder]:
        """List orders, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_ORDER_SELECT} ORDER BY o.created_at DESC, o.rowid DESC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return await self._with_items(conn, [self._row_to_order(r) for r in rows])

    async def count_orders(self) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM purchase_orders")
            row = await cursor.fetchone()
            return row[0]

    async def list_by_status(self, status: OrderStatus) -> list[PurchaseOrder]:
        return await self._list_where("o.status = ?", (status.value,))

    async def list_by_supplier(self, supplier_id: str) -> list[PurchaseOrder]:
        return await self._list_where("o.supplier_id = ?", (supplier_id,))

    async def apply_receipt(
        self,
        order: PurchaseOrder,
        warehouse_id: str,
        lines: list[ReceiptLine],
        reason: str,
        performed_by: str | None = None,
    ) -> tuple[OrderStatus, list[InventoryMovement]]:
        """Book a receipt atomically; any failure rolls back every line."""
        movements: list[InventoryMovement] = []

        async with get_transaction(immediate=True) as conn:
            cursor = await conn.execute(
                "SELECT status FROM purchase_orders WHERE id = ?", (order.id,)
            )
            row = await cursor.fetchone()
            if row is None or row["status"] != OrderStatus.SENT.value:
                raise ConcurrentUpdateError("Purchase order", order.id)

            for line in lines:
                cursor = await conn.execute(
                    """
                    UPDATE purchase_order_items
                    SET quantity_received = quantity_received + ?
                    WHERE id = ? AND purchase_order_id = ?
                      AND quantity_received + ? <= quantity_ordered
                    """,
                    (line.quantity, line.purchase_order_item_id, order.id, line.quantity),
                )
                if cursor.rowcount == 0:
                    raise ConcurrentUpdateError(
                        "Purchase order item", line.purchase_order_item_id
                    )

                item = await self._ensure_inventory_row(conn, line.product_id, warehouse_id)
                movement = self._ledger.plan_receipt(
                    item,
                    line.quantity,
                    order_id=order.id,
                    reason=reason,
                    performed_by=performed_by,
                )
                await conn.execute(
                    "UPDATE inventory_items SET quantity = ?, last_updated = ? WHERE id = ?",
                    (movement.quantity_after, to_db_datetime(movement.created_at), item.id),
                )
                await insert_movement(conn, movement)
                movements.append(movement)

            cursor = await conn.execute(
                """
                SELECT COUNT(*) FROM purchase_order_items
                WHERE purchase_order_id = ? AND quantity_received < quantity_ordered
                """,
                (order.id,),
            )
            outstanding = (await cursor.fetchone())[0]
            status = OrderStatus.RECEIVED if outstanding == 0 else OrderStatus.SENT
            if status is OrderStatus.RECEIVED:
                await conn.execute(
                    "UPDATE purchase_orders SET status = ? WHERE id = ?",
                    (status.value, order.id),
                )

        logger.info(
            "purchase_order_receipt_stored",
            order_id=order.id,
            warehouse_id=warehouse_id,
            lines=len(lines),
            status=status.value,
        )
        return status, movements

    @staticmethod
    async def _ensure_inventory_row(
        conn: aiosqlite.Connection, product_id: str, warehouse_id: str
    ) -> InventoryItem:
        """Get or create the (product, warehouse) item inside the open transaction."""
        await conn.execute(
            """
            INSERT INTO inventory_items (
                id, product_id, warehouse_id, quantity, reserved, last_updated
            ) VALUES (?, ?, ?, 0, 0, ?)
            ON CONFLICT (product_id, warehouse_id) DO NOTHING
            """,
            (new_id(), product_id, warehouse_id, to_db_datetime(utc_now())),
        )
        cursor = await conn.execute(
            """
            SELECT id, quantity, reserved FROM inventory_items
            WHERE product_id = ? AND warehouse_id = ?
            """,
            (product_id, warehouse_id),
        )
        row = await cursor.fetchone()
        return InventoryItem(
            id=row["id"],
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=row["quantity"],
            reserved=row["reserved"],
        )

    @staticmethod
    async def _insert_items(conn: aiosqlite.Connection, order: PurchaseOrder) -> None:
        for position, item in enumerate(order.items):
            item.purchase_order_id = order.id
            await conn.execute(
                """
                INSERT INTO purchase_order_items (
                    id, purchase_order_id, product_id, position,
                    quantity_ordered, quantity_received, unit_price
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.id,
                    order.id,
                    item.product_id,
                    position,
                    item.quantity_ordered,
                    item.quantity_received,
                    to_db_money(item.unit_price),
                ),
            )

    async def _list_where(self, clause: str, params: tuple) -> list[PurchaseOrder]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_ORDER_SELECT} WHERE {clause} ORDER BY o.created_at DESC, o.rowid DESC",
                params,
            )
            rows = await cursor.fetchall()
            return await self._with_items(conn, [self._row_to_order(r) for r in rows])

    async def _with_items(
        self, conn: aiosqlite.Connection, orders: list[PurchaseOrder]
    ) -> list[PurchaseOrder]:
        """Attach item lines to the given orders with a single query."""
        if not orders:
            return orders

        by_id = {order.id: order for order in orders}
        placeholders = ", ".join("?" for _ in by_id)
        cursor = await conn.execute(
            f"""
            SELECT poi.*, p.sku AS product_sku, p.name AS product_name
            FROM purchase_order_items poi
            JOIN products p ON p.id = poi.product_id
            WHERE poi.purchase_order_id IN ({placeholders})
            ORDER BY poi.purchase_order_id, poi.position
            """,
            tuple(by_id),
        )
        for row in await cursor.fetchall():
            by_id[row["purchase_order_id"]].items.append(self._row_to_item(row))
        return orders

    @staticmethod
    def _row_to_order(row: aiosqlite.Row) -> PurchaseOrder:
        """Convert a joined header row to a PurchaseOrder without items."""
        return PurchaseOrder(
            id=row["id"],
            order_number=row["order_number"],
            supplier_id=row["supplier_id"],
            status=OrderStatus(row["status"]),
            expected_date=parse_date(row["expected_date"]),
            total_amount=parse_money(row["total_amount"]),
            created_by=row["created_by"],
            created_at=parse_datetime(row["created_at"]),
            supplier_name=row["supplier_name"],
            created_by_email=row["created_by_email"],
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> PurchaseOrderItem:
        return PurchaseOrderItem(
            id=row["id"],
            purchase_order_id=row["purchase_order_id"],
            product_id=row["product_id"],
            quantity_ordered=row["quantity_ordered"],
            quantity_received=row["quantity_received"],
            unit_price=parse_money(row["unit_price"]),
            product_sku=row["product_sku"],
            product_name=row["product_name"],
        )
