"""Domain entities."""

from smartsupply.core.entities.catalog import (
    DEFAULT_WAREHOUSE_CAPACITY,
    Product,
    Supplier,
    Warehouse,
    WarehouseType,
)
from smartsupply.core.entities.common import new_id, to_money, utc_now
from smartsupply.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
    ReferenceType,
)
from smartsupply.core.entities.purchase_order import (
    ALLOWED_STATUSES,
    ORDER_TRANSITIONS,
    OrderOperation,
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderItem,
    ReceiptLine,
    ensure_allowed,
    format_order_number,
    is_lifecycle_transition,
)
from smartsupply.core.entities.user import CurrentUser, Role, User

__all__ = [
    "ALLOWED_STATUSES",
    "DEFAULT_WAREHOUSE_CAPACITY",
    "ORDER_TRANSITIONS",
    "CurrentUser",
    "InventoryItem",
    "InventoryMovement",
    "MovementType",
    "OrderOperation",
    "OrderStatus",
    "Product",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "ReceiptLine",
    "ReferenceType",
    "Role",
    "Supplier",
    "User",
    "Warehouse",
    "WarehouseType",
    "ensure_allowed",
    "format_order_number",
    "is_lifecycle_transition",
    "new_id",
    "to_money",
    "utc_now",
]
