"""Catalog domain entities: products, suppliers and warehouses."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from smartsupply.core.entities.common import new_id, to_money, utc_now


class WarehouseType(str, Enum):
    """Kind of storage location."""

    PHYSICAL = "PHYSICAL"
    VIRTUAL = "VIRTUAL"


DEFAULT_WAREHOUSE_CAPACITY = 10000


class Product(BaseModel):
    """A stock-keeping unit in the catalog."""

    id: str = Field(default_factory=new_id)
    sku: str
    name: str
    category: str | None = None
    price: Decimal = Field(default=Decimal("0.00"), ge=0)
    safety_stock: int = Field(default=0, ge=0)  # reorder threshold
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("price")
    @classmethod
    def quantize_price(cls, v: Decimal) -> Decimal:
        return to_money(v)


class Supplier(BaseModel):
    """A vendor purchase orders are placed with."""

    id: str = Field(default_factory=new_id)
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    contact_person: str | None = None
    created_at: datetime = Field(default_factory=utc_now)


class Warehouse(BaseModel):
    """A physical or virtual storage location."""

    id: str = Field(default_factory=new_id)
    name: str
    location: str | None = None
    type: WarehouseType = WarehouseType.PHYSICAL
    capacity: int = Field(default=DEFAULT_WAREHOUSE_CAPACITY, ge=0)
