"""Inventory domain entities: stock levels and the movement audit trail."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from smartsupply.core.entities.common import new_id, utc_now


class MovementType(str, Enum):
    """Types of stock movements."""

    IN = "IN"
    OUT = "OUT"
    ADJUSTMENT = "ADJUSTMENT"
    TRANSFER = "TRANSFER"

    @property
    def sign(self) -> int:
        """Direction a movement of this type moves the stock count."""
        return -1 if self is MovementType.OUT else 1

    def apply(self, quantity_before: int, quantity: int) -> int:
        """Stock count after a movement of this type and magnitude."""
        return quantity_before + self.sign * quantity


class ReferenceType(str, Enum):
    """Origin of a movement, stored next to the originating id."""

    PURCHASE_ORDER = "PURCHASE_ORDER"
    MANUAL_ADJUSTMENT = "MANUAL_ADJUSTMENT"


class InventoryItem(BaseModel):
    """Stock level of one product in one warehouse."""

    id: str = Field(default_factory=new_id)
    product_id: str
    warehouse_id: str
    quantity: int = Field(default=0, ge=0)
    reserved: int = Field(default=0, ge=0)
    last_updated: datetime = Field(default_factory=utc_now)

    # Denormalized for display, filled by the store
    product_sku: str | None = None
    product_name: str | None = None
    warehouse_name: str | None = None
    safety_stock: int | None = None

    @property
    def available(self) -> int:
        """On-hand quantity not earmarked by reservations."""
        return self.quantity - self.reserved

    @property
    def is_low_stock(self) -> bool:
        return self.safety_stock is not None and self.quantity <= self.safety_stock


class InventoryMovement(BaseModel):
    """Immutable record of a single change to an inventory item's quantity."""

    id: str = Field(default_factory=new_id)
    inventory_item_id: str
    movement_type: MovementType
    quantity: int = Field(ge=0)  # magnitude
    quantity_before: int
    quantity_after: int
    reason: str | None = None
    reference_type: str | None = None
    reference_id: str | None = None
    performed_by: str | None = None  # user id
    created_at: datetime = Field(default_factory=utc_now)

    # Denormalized for display, filled by the store
    product_sku: str | None = None
    product_name: str | None = None
    warehouse_name: str | None = None
    performed_by_email: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_balance(self) -> "InventoryMovement":
        expected = self.movement_type.apply(self.quantity_before, self.quantity)
        if self.quantity_after != expected:
            raise ValueError(
                f"{self.movement_type.value} movement of {self.quantity} from "
                f"{self.quantity_before} must end at {expected}, not {self.quantity_after}"
            )
        return self
