"""SQLite storage implementations."""

from smartsupply.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from smartsupply.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from smartsupply.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from smartsupply.infrastructure.storage.sqlite.purchase_order_store import (
    SQLitePurchaseOrderStore,
)
from smartsupply.infrastructure.storage.sqlite.statistics_store import SQLiteStatisticsStore
from smartsupply.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore
from smartsupply.infrastructure.storage.sqlite.user_store import SQLiteUserStore
from smartsupply.infrastructure.storage.sqlite.warehouse_store import SQLiteWarehouseStore

# Singleton instances
_product_store: SQLiteProductStore | None = None
_supplier_store: SQLiteSupplierStore | None = None
_warehouse_store: SQLiteWarehouseStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_purchase_order_store: SQLitePurchaseOrderStore | None = None
_statistics_store: SQLiteStatisticsStore | None = None
_user_store: SQLiteUserStore | None = None


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_supplier_store() -> SQLiteSupplierStore:
    """Get singleton supplier store instance."""
    global _supplier_store
    if _supplier_store is None:
        _supplier_store = SQLiteSupplierStore()
    return _supplier_store


async def get_warehouse_store() -> SQLiteWarehouseStore:
    """Get singleton warehouse store instance."""
    global _warehouse_store
    if _warehouse_store is None:
        _warehouse_store = SQLiteWarehouseStore()
    return _warehouse_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_purchase_order_store() -> SQLitePurchaseOrderStore:
    """Get singleton purchase order store instance."""
    global _purchase_order_store
    if _purchase_order_store is None:
        _purchase_order_store = SQLitePurchaseOrderStore()
    return _purchase_order_store


async def get_statistics_store() -> SQLiteStatisticsStore:
    """Get singleton statistics store instance."""
    global _statistics_store
    if _statistics_store is None:
        _statistics_store = SQLiteStatisticsStore()
    return _statistics_store


async def get_user_store() -> SQLiteUserStore:
    """Get singleton user store instance."""
    global _user_store
    if _user_store is None:
        _user_store = SQLiteUserStore()
    return _user_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteProductStore",
    "SQLiteSupplierStore",
    "SQLiteWarehouseStore",
    "SQLiteInventoryStore",
    "SQLitePurchaseOrderStore",
    "SQLiteStatisticsStore",
    "SQLiteUserStore",
    # Factory functions
    "get_product_store",
    "get_supplier_store",
    "get_warehouse_store",
    "get_inventory_store",
    "get_purchase_order_store",
    "get_statistics_store",
    "get_user_store",
]
