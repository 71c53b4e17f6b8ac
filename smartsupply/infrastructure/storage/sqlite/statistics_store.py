"""SQLite aggregate queries backing the dashboard."""

from decimal import Decimal

from smartsupply.core.interfaces.statistics_store import (
    EntityCounts,
    IStatisticsStore,
    ProductStock,
    SupplierSpend,
)
from smartsupply.infrastructure.storage.sqlite.connection import get_connection
from smartsupply.infrastructure.storage.sqlite.rows import parse_money

_PRODUCT_STOCK = """
    SELECT p.name AS name, SUM(i.quantity) AS quantity
    FROM inventory_items i
    JOIN products p ON p.id = i.product_id
    GROUP BY p.id
"""


class SQLiteStatisticsStore(IStatisticsStore):
    """Read-only aggregates over the catalog, inventory and orders."""

    async def count_entities(self) -> EntityCounts:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    (SELECT COUNT(*) FROM suppliers) AS suppliers,
                    (SELECT COUNT(*) FROM products) AS products,
                    (SELECT COUNT(*) FROM warehouses) AS warehouses,
                    (SELECT COUNT(*) FROM purchase_orders) AS orders
                """
            )
            row = await cursor.fetchone()
            return EntityCounts(
                suppliers=row["suppliers"],
                products=row["products"],
                warehouses=row["warehouses"],
                orders=row["orders"],
            )

    async def top_suppliers_by_spend(self, limit: int = 1) -> list[SupplierSpend]:
        """
        Rank suppliers by summed order totals.

        Totals are stored as decimal text, so they are summed in Python to
        keep exact cents rather than through SQLite's float SUM.
        """
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT s.id AS supplier_id, s.name AS name, o.total_amount AS total_amount
                FROM purchase_orders o
                JOIN suppliers s ON s.id = o.supplier_id
                """
            )
            rows = await cursor.fetchall()

        totals: dict[str, SupplierSpend] = {}
        for row in rows:
            spend = totals.setdefault(
                row["supplier_id"], SupplierSpend(name=row["name"], total=Decimal("0.00"))
            )
            spend.total += parse_money(row["total_amount"])

        ranked = sorted(totals.values(), key=lambda s: (-s.total, s.name))
        return ranked[:limit]

    async def most_stocked_products(self, limit: int = 1) -> list[ProductStock]:
        return await self._product_stock("quantity DESC, name ASC", limit)

    async def least_stocked_products(self, limit: int = 1) -> list[ProductStock]:
        return await self._product_stock("quantity ASC, name ASC", limit)

    async def _product_stock(self, order_by: str, limit: int) -> list[ProductStock]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{_PRODUCT_STOCK} ORDER BY {order_by} LIMIT ?", (limit,)
            )
            rows = await cursor.fetchall()
            return [ProductStock(name=r["name"], quantity=r["quantity"]) for r in rows]
