"""
Dependency injection container for FastAPI.

Provides stores, use cases, the authenticated caller and paging parameters
to route handlers. Tests swap any of these through app.dependency_overrides.
"""

from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

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
from smartsupply.config import Settings, get_settings
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import UnauthorizedError
from smartsupply.core.interfaces import (
    IInventoryStore,
    IProductStore,
    IPurchaseOrderStore,
    ISupplierStore,
    IUserStore,
    IWarehouseStore,
)
from smartsupply.infrastructure.security import TokenService, get_token_service
from smartsupply.infrastructure.storage.sqlite import (
    get_inventory_store,
    get_product_store,
    get_purchase_order_store,
    get_supplier_store,
    get_user_store,
    get_warehouse_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Paging
@dataclass
class PageParams:
    """Resolved 0-based page index and page size."""

    page: int
    size: int

    @property
    def offset(self) -> int:
        return self.page * self.size


def get_page_params(
    page: int = Query(default=0, ge=0, description="Page index, 0-based"),
    size: int | None = Query(default=None, ge=1, description="Page size"),
) -> PageParams:
    """Read page/size query parameters, clamping size to the configured maximum."""
    api = get_settings().api
    resolved = size or api.default_page_size
    return PageParams(page=page, size=min(resolved, api.max_page_size))


# Auth
bearer_scheme = HTTPBearer(auto_error=False)


def get_tokens() -> TokenService:
    """Get token service."""
    return get_token_service()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_tokens),
) -> CurrentUser:
    """
    Resolve the caller from the bearer token.

    Raises:
        UnauthorizedError: header missing or not a bearer token
        InvalidTokenError: token fails verification
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError()
    return tokens.verify(credentials.credentials)


# Store dependencies
async def get_prod_store() -> IProductStore:
    """Get product store."""
    return await get_product_store()


async def get_supp_store() -> ISupplierStore:
    """Get supplier store."""
    return await get_supplier_store()


async def get_wh_store() -> IWarehouseStore:
    """Get warehouse store."""
    return await get_warehouse_store()


async def get_inv_store() -> IInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


async def get_po_store() -> IPurchaseOrderStore:
    """Get purchase order store."""
    return await get_purchase_order_store()


async def get_usr_store() -> IUserStore:
    """Get user store."""
    return await get_user_store()


# Auth use case dependencies
def get_register_user_use_case() -> RegisterUserUseCase:
    """Get register user use case."""
    return RegisterUserUseCase()


def get_authenticate_user_use_case() -> AuthenticateUserUseCase:
    """Get authenticate user use case."""
    return AuthenticateUserUseCase()


# Catalog use case dependencies
def get_manage_products_use_case() -> ManageProductsUseCase:
    """Get product catalog use case."""
    return ManageProductsUseCase()


def get_manage_suppliers_use_case() -> ManageSuppliersUseCase:
    """Get supplier use case."""
    return ManageSuppliersUseCase()


def get_manage_warehouses_use_case() -> ManageWarehousesUseCase:
    """Get warehouse use case."""
    return ManageWarehousesUseCase()


# Inventory use case dependencies
def get_adjust_stock_use_case() -> AdjustStockUseCase:
    """Get adjust stock use case."""
    return AdjustStockUseCase()


def get_record_movement_use_case() -> RecordMovementUseCase:
    """Get record movement use case."""
    return RecordMovementUseCase()


def get_upsert_inventory_use_case() -> UpsertInventoryItemUseCase:
    """Get inventory upsert use case."""
    return UpsertInventoryItemUseCase()


# Purchase order use case dependencies
def get_create_purchase_order_use_case() -> CreatePurchaseOrderUseCase:
    """Get create purchase order use case."""
    return CreatePurchaseOrderUseCase()


def get_update_purchase_order_use_case() -> UpdatePurchaseOrderUseCase:
    """Get update purchase order use case."""
    return UpdatePurchaseOrderUseCase()


def get_receive_purchase_order_use_case() -> ReceivePurchaseOrderUseCase:
    """Get receive purchase order use case."""
    return ReceivePurchaseOrderUseCase()


def get_change_status_use_case() -> ChangePurchaseOrderStatusUseCase:
    """Get status override use case."""
    return ChangePurchaseOrderStatusUseCase()


def get_delete_purchase_order_use_case() -> DeletePurchaseOrderUseCase:
    """Get delete purchase order use case."""
    return DeletePurchaseOrderUseCase()


# Dashboard and assistant
def get_dashboard_stats_use_case() -> GetDashboardStatsUseCase:
    """Get dashboard statistics use case."""
    return GetDashboardStatsUseCase()


def get_chat_use_case() -> ChatWithInventoryUseCase:
    """Get assistant chat use case."""
    return ChatWithInventoryUseCase()
