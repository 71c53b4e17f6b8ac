"""Data Transfer Objects for API contracts."""

from smartsupply.application.dto.requests import (
    AdjustStockRequest,
    ChatRequest,
    CreateProductRequest,
    CreatePurchaseOrderRequest,
    CreateSupplierRequest,
    CreateWarehouseRequest,
    LoginRequest,
    PurchaseOrderItemRequest,
    ReceiveItemRequest,
    ReceiveItemsRequest,
    RecordMovementRequest,
    RegisterRequest,
    UpdatePurchaseOrderRequest,
    UpsertInventoryItemRequest,
)
from smartsupply.application.dto.responses import (
    AuthResponse,
    ChatResponse,
    DashboardStatsResponse,
    ErrorResponse,
    HealthResponse,
    InventoryItemResponse,
    InventoryMovementResponse,
    PageResponse,
    ProductResponse,
    ProviderHealthResponse,
    PurchaseOrderItemResponse,
    PurchaseOrderResponse,
    SupplierResponse,
    UserResponse,
    WarehouseResponse,
)

__all__ = [
    # Requests
    "RegisterRequest",
    "LoginRequest",
    "CreateProductRequest",
    "CreateSupplierRequest",
    "CreateWarehouseRequest",
    "UpsertInventoryItemRequest",
    "AdjustStockRequest",
    "RecordMovementRequest",
    "PurchaseOrderItemRequest",
    "CreatePurchaseOrderRequest",
    "UpdatePurchaseOrderRequest",
    "ReceiveItemRequest",
    "ReceiveItemsRequest",
    "ChatRequest",
    # Responses
    "PageResponse",
    "UserResponse",
    "AuthResponse",
    "ProductResponse",
    "SupplierResponse",
    "WarehouseResponse",
    "InventoryItemResponse",
    "InventoryMovementResponse",
    "PurchaseOrderItemResponse",
    "PurchaseOrderResponse",
    "DashboardStatsResponse",
    "ChatResponse",
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
