"""Abstract interfaces for catalog storage."""

from abc import ABC, abstractmethod

from smartsupply.core.entities.catalog import Product, Supplier, Warehouse


class IProductStore(ABC):
    """Interface for product persistence."""

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Create a product. Raises DuplicateSkuError on a taken SKU."""
        pass

    @abstractmethod
    async def get_product(self, product_id: str) -> Product | None:
        pass

    @abstractmethod
    async def get_product_by_sku(self, sku: str) -> Product | None:
        pass

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        pass

    @abstractmethod
    async def delete_product(self, product_id: str) -> bool:
        """Delete a product. Returns False when it did not exist."""
        pass

    @abstractmethod
    async def list_products(
        self, search: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Product]:
        """List products, optionally filtered by SKU or name substring."""
        pass

    @abstractmethod
    async def count_products(self, search: str | None = None) -> int:
        pass


class ISupplierStore(ABC):
    """Interface for supplier persistence."""

    @abstractmethod
    async def create_supplier(self, supplier: Supplier) -> Supplier:
        pass

    @abstractmethod
    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        pass

    @abstractmethod
    async def get_supplier_by_email(self, email: str) -> Supplier | None:
        pass

    @abstractmethod
    async def update_supplier(self, supplier: Supplier) -> Supplier:
        pass

    @abstractmethod
    async def delete_supplier(self, supplier_id: str) -> bool:
        pass

    @abstractmethod
    async def list_suppliers(
        self, search: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Supplier]:
        """List suppliers, optionally filtered by name or email substring."""
        pass

    @abstractmethod
    async def count_suppliers(self, search: str | None = None) -> int:
        pass


class IWarehouseStore(ABC):
    """Interface for warehouse persistence."""

    @abstractmethod
    async def create_warehouse(self, warehouse: Warehouse) -> Warehouse:
        pass

    @abstractmethod
    async def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        pass

    @abstractmethod
    async def get_warehouse_by_name(self, name: str) -> Warehouse | None:
        pass

    @abstractmethod
    async def update_warehouse(self, warehouse: Warehouse) -> Warehouse:
        pass

    @abstractmethod
    async def delete_warehouse(self, warehouse_id: str) -> bool:
        """Delete a warehouse and its inventory items. Blocked by movement history."""
        pass

    @abstractmethod
    async def list_warehouses(
        self, search: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Warehouse]:
        pass

    @abstractmethod
    async def count_warehouses(self, search: str | None = None) -> int:
        pass
