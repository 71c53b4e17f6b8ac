"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate stores and core services

Use cases are the only entry point for API handlers that write.
"""

from smartsupply.application.dto import (
    AdjustStockRequest,
    AuthResponse,
    ChatRequest,
    ChatResponse,
    CreateProductRequest,
    CreatePurchaseOrderRequest,
    CreateSupplierRequest,
    CreateWarehouseRequest,
    DashboardStatsResponse,
    ErrorResponse,
    HealthResponse,
    InventoryItemResponse,
    InventoryMovementResponse,
    LoginRequest,
    PageResponse,
    ProductResponse,
    PurchaseOrderResponse,
    ReceiveItemsRequest,
    RecordMovementRequest,
    RegisterRequest,
    SupplierResponse,
    UpdatePurchaseOrderRequest,
    UpsertInventoryItemRequest,
    WarehouseResponse,
)
from smartsupply.application.use_cases import (
    AdjustStockUseCase,
    AuthenticateUserUseCase,
    ChangePurchaseOrderStatusUseCase,
    ChatWithInventoryUseCase,
    CreatePurchaseOrderUseCase,
    DeletePurchaseOrderUseCase,
    GetDashboardStatsUseCase,
    ManageProductsUseCase,
    ManageSuppliersUseCase,
    ManageWarehousesUseCase,
    ReceivePurchaseOrderUseCase,
    RecordMovementUseCase,
    RegisterUserUseCase,
    UpdatePurchaseOrderUseCase,
    UpsertInventoryItemUseCase,
)

__all__ = [
    # Request DTOs
    "RegisterRequest",
    "LoginRequest",
    "CreateProductRequest",
    "CreateSupplierRequest",
    "CreateWarehouseRequest",
    "UpsertInventoryItemRequest",
    "AdjustStockRequest",
    "RecordMovementRequest",
    "CreatePurchaseOrderRequest",
    "UpdatePurchaseOrderRequest",
    "ReceiveItemsRequest",
    "ChatRequest",
    # Response DTOs
    "PageResponse",
    "AuthResponse",
    "ProductResponse",
    "SupplierResponse",
    "WarehouseResponse",
    "InventoryItemResponse",
    "InventoryMovementResponse",
    "PurchaseOrderResponse",
    "DashboardStatsResponse",
    "ChatResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use cases
    "RegisterUserUseCase",
    "AuthenticateUserUseCase",
    "ManageProductsUseCase",
    "ManageSuppliersUseCase",
    "ManageWarehousesUseCase",
    "AdjustStockUseCase",
    "RecordMovementUseCase",
    "UpsertInventoryItemUseCase",
    "CreatePurchaseOrderUseCase",
    "UpdatePurchaseOrderUseCase",
    "ReceivePurchaseOrderUseCase",
    "ChangePurchaseOrderStatusUseCase",
    "DeletePurchaseOrderUseCase",
    "GetDashboardStatsUseCase",
    "ChatWithInventoryUseCase",
]
