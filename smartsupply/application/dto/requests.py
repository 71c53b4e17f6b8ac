"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date
from decimal import Decimal

from pydantic import EmailStr, Field, field_validator

from smartsupply.application.dto.base import ApiModel
from smartsupply.core.entities.catalog import DEFAULT_WAREHOUSE_CAPACITY, WarehouseType
from smartsupply.core.entities.inventory import MovementType
from smartsupply.core.entities.purchase_order import OrderStatus
from smartsupply.core.entities.user import Role


def _lower_email(value: str | None) -> str | None:
    return value.lower() if value is not None else None


# --- Auth ---


class RegisterRequest(ApiModel):
    """Request to create a user account."""

    email: EmailStr = Field(..., description="Login email", examples=["ops@example.com"])
    password: str = Field(..., min_length=6, max_length=72, description="Plain password")
    first_name: str | None = Field(default=None, description="Given name")
    last_name: str | None = Field(default=None, description="Family name")
    role: Role = Field(default=Role.WAREHOUSE_OP, description="Access role")

    _email = field_validator("email", mode="after")(_lower_email)


class LoginRequest(ApiModel):
    """Request for an access token."""

    email: str = Field(..., description="Login email")
    password: str = Field(..., description="Plain password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


# --- Catalog ---


class CreateProductRequest(ApiModel):
    """Request to create or fully update a product."""

    sku: str = Field(..., min_length=1, description="Unique stock-keeping unit")
    name: str = Field(..., min_length=1, description="Display name")
    category: str | None = Field(default=None, description="Free-form category")
    price: Decimal = Field(default=Decimal("0.00"), ge=0, description="Catalog unit price")
    safety_stock: int = Field(default=0, ge=0, description="Reorder threshold")


class CreateSupplierRequest(ApiModel):
    """Request to create or fully update a supplier."""

    name: str = Field(..., min_length=1, description="Supplier name")
    email: EmailStr | None = Field(default=None, description="Contact email, unique when present")
    phone: str | None = Field(default=None)
    address: str | None = Field(default=None)
    contact_person: str | None = Field(default=None)

    _email = field_validator("email", mode="after")(_lower_email)


class CreateWarehouseRequest(ApiModel):
    """Request to create or fully update a warehouse."""

    name: str = Field(..., min_length=1, description="Unique warehouse name")
    location: str | None = Field(default=None)
    type: WarehouseType = Field(default=WarehouseType.PHYSICAL)
    capacity: int = Field(default=DEFAULT_WAREHOUSE_CAPACITY, ge=0)


# --- Inventory ---


class UpsertInventoryItemRequest(ApiModel):
    """Set stock figures for a (product, warehouse) pair, creating it if absent."""

    product_id: str = Field(..., description="Product ID")
    warehouse_id: str = Field(..., description="Warehouse ID")
    quantity: int | None = Field(default=None, ge=0, description="New on-hand quantity")
    reserved: int | None = Field(default=None, ge=0, description="New reserved quantity")
    reason: str | None = Field(default=None, description="Reason recorded if quantity changes")


class AdjustStockRequest(ApiModel):
    """Set an item's quantity to an absolute value."""

    new_quantity: int = Field(..., description="Target on-hand quantity")
    reason: str | None = Field(default=None, description="Defaults to 'Manual adjustment'")


class RecordMovementRequest(ApiModel):
    """Record a typed stock movement against an inventory item."""

    inventory_item_id: str = Field(..., description="Inventory item ID")
    movement_type: MovementType = Field(..., description="IN, OUT, ADJUSTMENT or TRANSFER")
    quantity: int = Field(..., gt=0, description="Movement magnitude")
    reason: str | None = Field(default=None)
    reference_type: str | None = Field(default=None, examples=["PURCHASE_ORDER"])
    reference_id: str | None = Field(default=None)


# --- Purchase orders ---


class PurchaseOrderItemRequest(ApiModel):
    """A single product line of a purchase order."""

    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(default=1, gt=0, description="Quantity ordered")
    unit_price: Decimal | None = Field(
        default=None,
        ge=0,
        description="Unit price; defaults to the product's catalog price",
    )


class CreatePurchaseOrderRequest(ApiModel):
    """Request to create or update a purchase order."""

    supplier_id: str = Field(..., description="Supplier ID")
    expected_date: date | None = Field(default=None, description="Expected delivery date")
    status: OrderStatus | None = Field(default=None, description="Initial status (DRAFT)")
    items: list[PurchaseOrderItemRequest] = Field(..., description="Ordered lines")


class UpdatePurchaseOrderRequest(ApiModel):
    """Partial update of a DRAFT order; items replace the full list when given."""

    supplier_id: str | None = Field(default=None)
    expected_date: date | None = Field(default=None)
    items: list[PurchaseOrderItemRequest] | None = Field(default=None)


class ReceiveItemRequest(ApiModel):
    """Quantity received for one order line."""

    purchase_order_item_id: str = Field(..., description="Purchase order item ID")
    quantity_received: int = Field(..., ge=1, description="Units received now")


class ReceiveItemsRequest(ApiModel):
    """Request to book received goods into a warehouse."""

    warehouse_id: str = Field(..., description="Destination warehouse ID")
    items: list[ReceiveItemRequest] = Field(..., min_length=1, description="Received lines")
    notes: str | None = Field(default=None, description="Appended to the movement reason")


# --- Assistant ---


class ChatRequest(ApiModel):
    """Question for the supply-chain assistant."""

    message: str = Field(..., min_length=1, description="User question")
