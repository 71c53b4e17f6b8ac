"""
Manage Catalog Use Cases.

Create, update and delete for products, suppliers and warehouses. Uniqueness
(SKU, supplier email, warehouse name) is enforced by the stores, which raise
the matching Conflict error.
"""

from smartsupply.application.dto.requests import (
    CreateProductRequest,
    CreateSupplierRequest,
    CreateWarehouseRequest,
)
from smartsupply.core.entities.catalog import Product, Supplier, Warehouse
from smartsupply.core.entities.common import utc_now
from smartsupply.core.exceptions import (
    ProductNotFoundError,
    SupplierNotFoundError,
    WarehouseNotFoundError,
)
from smartsupply.core.interfaces.catalog_store import (
    IProductStore,
    ISupplierStore,
    IWarehouseStore,
)


class ManageProductsUseCase:
    """Product catalog writes."""

    def __init__(self, product_store: IProductStore | None = None):
        self._product_store = product_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def create(self, request: CreateProductRequest) -> Product:
        store = await self._get_product_store()
        return await store.create_product(Product(**request.model_dump()))

    async def update(self, product_id: str, request: CreateProductRequest) -> Product:
        store = await self._get_product_store()
        product = await store.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        updated = Product(
            **{**product.model_dump(), **request.model_dump(), "updated_at": utc_now()}
        )
        await store.update_product(updated)
        return updated

    async def delete(self, product_id: str) -> None:
        """Raises EntityInUseError while orders or stock reference the product."""
        store = await self._get_product_store()
        if not await store.delete_product(product_id):
            raise ProductNotFoundError(product_id)


class ManageSuppliersUseCase:
    """Supplier writes."""

    def __init__(self, supplier_store: ISupplierStore | None = None):
        self._supplier_store = supplier_store

    async def _get_supplier_store(self) -> ISupplierStore:
        if self._supplier_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_supplier_store

            self._supplier_store = await get_supplier_store()
        return self._supplier_store

    async def create(self, request: CreateSupplierRequest) -> Supplier:
        store = await self._get_supplier_store()
        return await store.create_supplier(Supplier(**request.model_dump()))

    async def update(self, supplier_id: str, request: CreateSupplierRequest) -> Supplier:
        store = await self._get_supplier_store()
        supplier = await store.get_supplier(supplier_id)
        if supplier is None:
            raise SupplierNotFoundError(supplier_id)

        updated = supplier.model_copy(update=request.model_dump())
        await store.update_supplier(updated)
        return updated

    async def delete(self, supplier_id: str) -> None:
        """Raises EntityInUseError while purchase orders reference the supplier."""
        store = await self._get_supplier_store()
        if not await store.delete_supplier(supplier_id):
            raise SupplierNotFoundError(supplier_id)


class ManageWarehousesUseCase:
    """Warehouse writes. Deleting a warehouse drops its inventory items."""

    def __init__(self, warehouse_store: IWarehouseStore | None = None):
        self._warehouse_store = warehouse_store

    async def _get_warehouse_store(self) -> IWarehouseStore:
        if self._warehouse_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_warehouse_store

            self._warehouse_store = await get_warehouse_store()
        return self._warehouse_store

    async def create(self, request: CreateWarehouseRequest) -> Warehouse:
        store = await self._get_warehouse_store()
        return await store.create_warehouse(Warehouse(**request.model_dump()))

    async def update(self, warehouse_id: str, request: CreateWarehouseRequest) -> Warehouse:
        store = await self._get_warehouse_store()
        warehouse = await store.get_warehouse(warehouse_id)
        if warehouse is None:
            raise WarehouseNotFoundError(warehouse_id)

        updated = warehouse.model_copy(update=request.model_dump())
        await store.update_warehouse(updated)
        return updated

    async def delete(self, warehouse_id: str) -> None:
        store = await self._get_warehouse_store()
        if not await store.delete_warehouse(warehouse_id):
            raise WarehouseNotFoundError(warehouse_id)
