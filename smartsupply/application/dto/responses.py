"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
Payloads serialize with camelCase keys; ErrorResponse keeps its snake_case envelope.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from smartsupply.application.dto.base import ApiModel
from smartsupply.core.entities.catalog import WarehouseType
from smartsupply.core.entities.inventory import MovementType
from smartsupply.core.entities.purchase_order import OrderStatus
from smartsupply.core.entities.user import Role

T = TypeVar("T")


class PageResponse(ApiModel, Generic[T]):
    """One page of a listing. Pages are 0-based."""

    items: list[T]
    total: int = Field(..., description="Total matching records")
    page: int = Field(..., description="Page index, 0-based")
    size: int = Field(..., description="Page size requested")


# --- Auth ---


class UserResponse(ApiModel):
    """User profile; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: Role
    created_at: datetime


class AuthResponse(ApiModel):
    """Issued bearer token plus the authenticated user."""

    access_token: str = Field(..., description="Signed JWT")
    token_type: str = Field(default="bearer")
    expires_at: datetime | None = Field(default=None, description="Token expiry (UTC)")
    user: UserResponse


# --- Catalog ---


class ProductResponse(ApiModel):
    """Product response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    sku: str
    name: str
    category: str | None = None
    price: Decimal
    safety_stock: int
    created_at: datetime
    updated_at: datetime


class SupplierResponse(ApiModel):
    """Supplier response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    contact_person: str | None = None
    created_at: datetime


class WarehouseResponse(ApiModel):
    """Warehouse response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    location: str | None = None
    type: WarehouseType
    capacity: int


# --- Inventory ---


class InventoryItemResponse(ApiModel):
    """Stock level of a product in a warehouse."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    product_sku: str | None = None
    product_name: str | None = None
    warehouse_id: str
    warehouse_name: str | None = None
    quantity: int = Field(..., description="On-hand units")
    reserved: int = Field(..., description="Units earmarked for outgoing work")
    available: int = Field(..., description="quantity - reserved")
    last_updated: datetime


class InventoryMovementResponse(ApiModel):
    """Audit-trail entry for a stock change."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    inventory_item_id: str
    product_sku: str | None = None
    product_name: str | None = None
    warehouse_name: str | None = None
    movement_type: MovementType
    quantity: int
    quantity_before: int
    quantity_after: int
    reason: str | None = None
    reference_type: str | None = None
    reference_id: str | None = None
    performed_by: str | None = Field(default=None, description="User ID")
    performed_by_email: str | None = None
    created_at: datetime


# --- Purchase orders ---


class PurchaseOrderItemResponse(ApiModel):
    """Line item in purchase order response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    product_sku: str | None = None
    product_name: str | None = None
    quantity_ordered: int
    quantity_received: int
    remaining: int = Field(..., description="Units still to be received")
    unit_price: Decimal
    line_total: Decimal = Field(..., description="unit_price * quantity_ordered")
    fully_received: bool


class PurchaseOrderResponse(ApiModel):
    """Purchase order response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    supplier_id: str
    supplier_name: str | None = None
    status: OrderStatus
    expected_date: date | None = None
    total_amount: Decimal
    created_by: str | None = None
    created_by_email: str | None = None
    created_at: datetime
    items: list[PurchaseOrderItemResponse] = Field(default_factory=list)


# --- Statistics ---


class DashboardStatsResponse(ApiModel):
    """Headline numbers for the dashboard."""

    total_suppliers: int = 0
    total_products: int = 0
    total_warehouses: int = 0
    total_orders: int = 0
    best_supplier_name: str = "-"
    best_supplier_total_amount: Decimal = Decimal("0.00")
    most_stocked_product: str = "-"
    most_stocked_quantity: int = 0
    least_stocked_product: str = "-"
    least_stocked_quantity: int = 0
    low_stock_products: list[str] = Field(
        default_factory=list, description="Five least stocked, as 'name (qty)'"
    )


# --- Assistant ---


class ChatResponse(ApiModel):
    """Assistant answer, returned verbatim."""

    response: str


# --- Health ---


class ProviderHealthResponse(ApiModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    model: str | None = None
    error: str | None = None


class HealthResponse(ApiModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None
    llm: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PURCHASE_ORDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
