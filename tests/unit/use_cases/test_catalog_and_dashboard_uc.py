"""Tests for the catalog write use cases and GetDashboardStatsUseCase."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from smartsupply.application.dto.requests import (
    CreateProductRequest,
    CreateSupplierRequest,
    CreateWarehouseRequest,
)
from smartsupply.application.use_cases.get_dashboard_stats import GetDashboardStatsUseCase
from smartsupply.application.use_cases.manage_catalog import (
    ManageProductsUseCase,
    ManageSuppliersUseCase,
    ManageWarehousesUseCase,
)
from smartsupply.core.entities.catalog import Product, Supplier
from smartsupply.core.exceptions import (
    ProductNotFoundError,
    SupplierNotFoundError,
    WarehouseNotFoundError,
)
from smartsupply.core.interfaces.statistics_store import EntityCounts, ProductStock, SupplierSpend


class TestManageProductsUseCase:
    async def test_create_passes_entity(self):
        store = AsyncMock()
        store.create_product.side_effect = lambda product: product
        product = await ManageProductsUseCase(product_store=store).create(
            CreateProductRequest(sku="A-1", name="Alpha", price=Decimal("3.5"))
        )
        assert product.price == Decimal("3.50")
        assert product.id

    async def test_update_keeps_identity(self):
        existing = Product(id="prod-1", sku="A-1", name="Alpha")
        store = AsyncMock()
        store.get_product.return_value = existing

        updated = await ManageProductsUseCase(product_store=store).update(
            "prod-1", CreateProductRequest(sku="A-2", name="Alpha v2", safety_stock=3)
        )
        assert updated.id == "prod-1"
        assert updated.created_at == existing.created_at
        assert updated.sku == "A-2"
        assert updated.updated_at >= existing.updated_at
        store.update_product.assert_called_once_with(updated)

    async def test_update_missing(self):
        store = AsyncMock()
        store.get_product.return_value = None
        with pytest.raises(ProductNotFoundError):
            await ManageProductsUseCase(product_store=store).update(
                "nope", CreateProductRequest(sku="A", name="A")
            )

    async def test_delete_missing(self):
        store = AsyncMock()
        store.delete_product.return_value = False
        with pytest.raises(ProductNotFoundError):
            await ManageProductsUseCase(product_store=store).delete("nope")


class TestManageSuppliersUseCase:
    async def test_update(self):
        store = AsyncMock()
        store.get_supplier.return_value = Supplier(id="sup-1", name="Old")
        updated = await ManageSuppliersUseCase(supplier_store=store).update(
            "sup-1", CreateSupplierRequest(name="New", email="Sales@New.example")
        )
        assert updated.id == "sup-1"
        assert updated.email == "sales@new.example"

    async def test_update_missing(self):
        store = AsyncMock()
        store.get_supplier.return_value = None
        with pytest.raises(SupplierNotFoundError):
            await ManageSuppliersUseCase(supplier_store=store).update(
                "nope", CreateSupplierRequest(name="X")
            )


class TestManageWarehousesUseCase:
    async def test_create_defaults(self):
        store = AsyncMock()
        store.create_warehouse.side_effect = lambda warehouse: warehouse
        warehouse = await ManageWarehousesUseCase(warehouse_store=store).create(
            CreateWarehouseRequest(name="Main")
        )
        assert warehouse.capacity == 10000

    async def test_delete_missing(self):
        store = AsyncMock()
        store.delete_warehouse.return_value = False
        with pytest.raises(WarehouseNotFoundError):
            await ManageWarehousesUseCase(warehouse_store=store).delete("nope")


class TestGetDashboardStatsUseCase:
    async def test_populated(self):
        store = AsyncMock()
        store.count_entities.return_value = EntityCounts(
            suppliers=2, products=3, warehouses=1, orders=4
        )
        store.top_suppliers_by_spend.return_value = [SupplierSpend("Northwind", Decimal("120.5"))]
        store.most_stocked_products.return_value = [ProductStock("Cable", 500)]
        store.least_stocked_products.return_value = [
            ProductStock("Router", 0),
            ProductStock("Switch", 2),
        ]

        stats = await GetDashboardStatsUseCase(statistics_store=store).execute()
        assert stats.total_orders == 4
        assert stats.best_supplier_name == "Northwind"
        assert stats.best_supplier_total_amount == Decimal("120.50")
        assert stats.most_stocked_product == "Cable"
        assert stats.least_stocked_quantity == 0
        assert stats.low_stock_products == ["Router (0)", "Switch (2)"]

    async def test_empty_database_defaults(self):
        store = AsyncMock()
        store.count_entities.return_value = EntityCounts()
        store.top_suppliers_by_spend.return_value = []
        store.most_stocked_products.return_value = []
        store.least_stocked_products.return_value = []

        stats = await GetDashboardStatsUseCase(statistics_store=store).execute()
        assert stats.best_supplier_name == "-"
        assert stats.best_supplier_total_amount == Decimal("0.00")
        assert stats.most_stocked_product == "-"
        assert stats.low_stock_products == []
