"""Abstract interface for dashboard aggregate queries."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass
class EntityCounts:
    suppliers: int = 0
    products: int = 0
    warehouses: int = 0
    orders: int = 0


@dataclass
class SupplierSpend:
    """Summed purchase order total for one supplier."""

    name: str
    total: Decimal


@dataclass
class ProductStock:
    """Quantity of one product summed over all warehouses."""

    name: str
    quantity: int


class IStatisticsStore(ABC):
    """Read-only aggregate queries for the dashboard."""

    @abstractmethod
    async def count_entities(self) -> EntityCounts:
        pass

    @abstractmethod
    async def top_suppliers_by_spend(self, limit: int = 1) -> list[SupplierSpend]:
        """Suppliers ordered by summed order total, highest first."""
        pass

    @abstractmethod
    async def most_stocked_products(self, limit: int = 1) -> list[ProductStock]:
        pass

    @abstractmethod
    async def least_stocked_products(self, limit: int = 1) -> list[ProductStock]:
        pass
