"""Application use cases."""

from smartsupply.application.use_cases.adjust_stock import AdjustStockResult, AdjustStockUseCase
from smartsupply.application.use_cases.authenticate_user import AuthenticateUserUseCase
from smartsupply.application.use_cases.change_purchase_order_status import (
    ChangePurchaseOrderStatusUseCase,
)
from smartsupply.application.use_cases.chat_with_inventory import (
    APOLOGY_MESSAGE,
    ChatWithInventoryUseCase,
)
from smartsupply.application.use_cases.create_purchase_order import (
    CreatePurchaseOrderUseCase,
    build_order_items,
)
from smartsupply.application.use_cases.delete_purchase_order import DeletePurchaseOrderUseCase
from smartsupply.application.use_cases.get_dashboard_stats import GetDashboardStatsUseCase
from smartsupply.application.use_cases.manage_catalog import (
    ManageProductsUseCase,
    ManageSuppliersUseCase,
    ManageWarehousesUseCase,
)
from smartsupply.application.use_cases.receive_purchase_order import (
    ReceiveItemsResult,
    ReceivePurchaseOrderUseCase,
)
from smartsupply.application.use_cases.record_movement import RecordMovementUseCase
from smartsupply.application.use_cases.register_user import AuthResult, RegisterUserUseCase
from smartsupply.application.use_cases.stock_writes import write_movement
from smartsupply.application.use_cases.update_purchase_order import UpdatePurchaseOrderUseCase
from smartsupply.application.use_cases.upsert_inventory_item import UpsertInventoryItemUseCase

__all__ = [
    # Auth
    "RegisterUserUseCase",
    "AuthenticateUserUseCase",
    "AuthResult",
    # Catalog
    "ManageProductsUseCase",
    "ManageSuppliersUseCase",
    "ManageWarehousesUseCase",
    # Inventory
    "AdjustStockUseCase",
    "AdjustStockResult",
    "RecordMovementUseCase",
    "UpsertInventoryItemUseCase",
    "write_movement",
    # Purchase orders
    "CreatePurchaseOrderUseCase",
    "UpdatePurchaseOrderUseCase",
    "ReceivePurchaseOrderUseCase",
    "ReceiveItemsResult",
    "ChangePurchaseOrderStatusUseCase",
    "DeletePurchaseOrderUseCase",
    "build_order_items",
    # Dashboard and assistant
    "GetDashboardStatsUseCase",
    "ChatWithInventoryUseCase",
    "APOLOGY_MESSAGE",
]
