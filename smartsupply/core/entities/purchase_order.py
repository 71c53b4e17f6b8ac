"""
Purchase order domain entities.

The status lifecycle is DRAFT -> SENT -> RECEIVED, with DRAFT -> CANCELLED as
the only exit before sending. Which operations an order accepts in each
status is read from the tables below.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from smartsupply.core.entities.common import new_id, to_money, utc_now
from smartsupply.core.exceptions import OrderStateError


class OrderStatus(str, Enum):
    """Purchase order lifecycle states."""

    DRAFT = "DRAFT"
    SENT = "SENT"
    RECEIVED = "RECEIVED"
    CANCELLED = "CANCELLED"


# Legal lifecycle transitions
ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.DRAFT: frozenset({OrderStatus.SENT, OrderStatus.CANCELLED}),
    OrderStatus.SENT: frozenset({OrderStatus.RECEIVED}),
    OrderStatus.RECEIVED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class OrderOperation(str, Enum):
    """Mutating operations guarded by order status."""

    EDIT = "edit"
    RECEIVE = "receive"
    DELETE = "delete"


ALLOWED_STATUSES: dict[OrderOperation, frozenset[OrderStatus]] = {
    OrderOperation.EDIT: frozenset({OrderStatus.DRAFT}),
    OrderOperation.RECEIVE: frozenset({OrderStatus.SENT}),
    OrderOperation.DELETE: frozenset({OrderStatus.DRAFT}),
}


def is_lifecycle_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS[current]


def ensure_allowed(order: "PurchaseOrder", operation: OrderOperation) -> None:
    """Raise OrderStateError unless the order's status permits the operation."""
    if not order.allows(operation):
        raise OrderStateError(
            order_id=order.id,
            operation=operation.value,
            status=order.status.value,
            allowed=sorted(s.value for s in ALLOWED_STATUSES[operation]),
        )


def format_order_number(created_at: datetime, sequence: int) -> str:
    """Build an order number like PO-2024-05-007."""
    return f"PO-{created_at:%Y-%m}-{sequence:03d}"


class PurchaseOrderItem(BaseModel):
    """A single product line on a purchase order."""

    id: str = Field(default_factory=new_id)
    purchase_order_id: str | None = None
    product_id: str
    quantity_ordered: int = Field(gt=0)
    quantity_received: int = Field(default=0, ge=0)
    unit_price: Decimal = Field(ge=0)  # snapshot at order time

    # Denormalized for display, filled by the store
    product_sku: str | None = None
    product_name: str | None = None

    @field_validator("unit_price")
    @classmethod
    def quantize_price(cls, v: Decimal) -> Decimal:
        return to_money(v)

    @property
    def line_total(self) -> Decimal:
        return to_money(self.unit_price * self.quantity_ordered)

    @property
    def remaining(self) -> int:
        return self.quantity_ordered - self.quantity_received

    @property
    def fully_received(self) -> bool:
        return self.quantity_received >= self.quantity_ordered


class ReceiptLine(BaseModel):
    """Validated quantity to book against one order line."""

    purchase_order_item_id: str
    product_id: str
    quantity: int = Field(gt=0)


class PurchaseOrder(BaseModel):
    """A purchase order placed with a supplier."""

    id: str = Field(default_factory=new_id)
    order_number: str
    supplier_id: str
    status: OrderStatus = OrderStatus.DRAFT
    expected_date: date | None = None
    total_amount: Decimal = Decimal("0.00")
    created_by: str | None = None  # user id
    created_at: datetime = Field(default_factory=utc_now)
    items: list[PurchaseOrderItem] = Field(default_factory=list)

    # Denormalized for display, filled by the store
    supplier_name: str | None = None
    created_by_email: str | None = None

    def allows(self, operation: OrderOperation) -> bool:
        return self.status in ALLOWED_STATUSES[operation]

    @property
    def fully_received(self) -> bool:
        return bool(self.items) and all(item.fully_received for item in self.items)

    def recalculate_total(self) -> Decimal:
        self.total_amount = to_money(sum((item.line_total for item in self.items), Decimal("0")))
        return self.total_amount

    def replace_items(self, items: list[PurchaseOrderItem]) -> None:
        """Swap the full item list and recompute the total."""
        for item in items:
            item.purchase_order_id = self.id
        self.items = items
        self.recalculate_total()

    def get_item(self, item_id: str) -> PurchaseOrderItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None
