"""Core interfaces (ports) for dependency injection."""

from smartsupply.core.interfaces.catalog_store import (
    IProductStore,
    ISupplierStore,
    IWarehouseStore,
)
from smartsupply.core.interfaces.inventory_store import IInventoryStore
from smartsupply.core.interfaces.llm import (
    HealthStatus,
    ILLMProvider,
    LLMProvider,
    LLMResponse,
)
from smartsupply.core.interfaces.purchase_order_store import IPurchaseOrderStore
from smartsupply.core.interfaces.statistics_store import (
    EntityCounts,
    IStatisticsStore,
    ProductStock,
    SupplierSpend,
)
from smartsupply.core.interfaces.user_store import IUserStore

__all__ = [
    # LLM interfaces
    "ILLMProvider",
    "LLMProvider",
    "LLMResponse",
    "HealthStatus",
    # Storage interfaces
    "IProductStore",
    "ISupplierStore",
    "IWarehouseStore",
    "IInventoryStore",
    "IPurchaseOrderStore",
    "IStatisticsStore",
    "IUserStore",
    # Aggregates
    "EntityCounts",
    "ProductStock",
    "SupplierSpend",
]
