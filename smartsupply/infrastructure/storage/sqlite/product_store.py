"""SQLite implementation of product storage."""

import aiosqlite

from smartsupply.config import get_logger
from smartsupply.core.entities.catalog import Product
from smartsupply.core.entities.common import utc_now
from smartsupply.core.exceptions import DuplicateSkuError, EntityInUseError
from smartsupply.core.interfaces.catalog_store import IProductStore
from smartsupply.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from smartsupply.infrastructure.storage.sqlite.rows import (
    like_pattern,
    parse_datetime,
    parse_money,
    to_db_datetime,
    to_db_money,
)

logger = get_logger(__name__)

_SEARCH_CLAUSE = "WHERE LOWER(sku) LIKE ? ESCAPE '\\' OR LOWER(name) LIKE ? ESCAPE '\\'"


class SQLiteProductStore(IProductStore):
    """SQLite implementation of product storage."""

    async def create_product(self, product: Product) -> Product:
        """Create a new product record."""
        now = utc_now()
        product.created_at = now
        product.updated_at = now
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO products (
                        id, sku, name, category, price, safety_stock,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.id,
                        product.sku,
                        product.name,
                        product.category,
                        to_db_money(product.price),
                        product.safety_stock,
                        to_db_datetime(product.created_at),
                        to_db_datetime(product.updated_at),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateSkuError(product.sku) from e

        logger.info("product_created", product_id=product.id, sku=product.sku)
        return product

    async def get_product(self, product_id: str) -> Product | None:
        """Get product by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM products WHERE id = ?", (product_id,))
            row = await cursor.fetchone()
            return self._row_to_product(row) if row else None

    async def get_product_by_sku(self, sku: str) -> Product | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM products WHERE sku = ?", (sku,))
            row = await cursor.fetchone()
            return self._row_to_product(row) if row else None

    async def update_product(self, product: Product) -> Product:
        product.updated_at = utc_now()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE products SET
                        sku = ?, name = ?, category = ?, price = ?,
                        safety_stock = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        product.sku,
                        product.name,
                        product.category,
                        to_db_money(product.price),
                        product.safety_stock,
                        to_db_datetime(product.updated_at),
                        product.id,
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateSkuError(product.sku) from e

        logger.info("product_updated", product_id=product.id)
        return product

    async def delete_product(self, product_id: str) -> bool:
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
                deleted = cursor.rowcount > 0
        except aiosqlite.IntegrityError as e:
            raise EntityInUseError("Product", product_id) from e

        if deleted:
            logger.info("product_deleted", product_id=product_id)
        return deleted

    async def list_products(
        self, search: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        """List products ordered by name, optionally filtered by SKU or name."""
        async with get_connection() as conn:
            if search:
                pattern = like_pattern(search)
                cursor = await conn.execute(
                    f"SELECT * FROM products {_SEARCH_CLAUSE} ORDER BY name LIMIT ? OFFSET ?",
                    (pattern, pattern, limit, offset),
                )
            else:
                cursor = await conn.execute(
                    "SELECT * FROM products ORDER BY name LIMIT ? OFFSET ?",
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def count_products(self, search: str | None = None) -> int:
        async with get_connection() as conn:
            if search:
                pattern = like_pattern(search)
                cursor = await conn.execute(
                    f"SELECT COUNT(*) FROM products {_SEARCH_CLAUSE}", (pattern, pattern)
                )
            else:
                cursor = await conn.execute("SELECT COUNT(*) FROM products")
            row = await cursor.fetchone()
            return row[0]

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            sku=row["sku"],
            name=row["name"],
            category=row["category"],
            price=parse_money(row["price"]),
            safety_stock=row["safety_stock"],
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
