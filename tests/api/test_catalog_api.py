"""API tests for product, supplier and warehouse endpoints."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from smartsupply.api.dependencies import (
    get_manage_products_use_case,
    get_manage_suppliers_use_case,
    get_manage_warehouses_use_case,
    get_prod_store,
    get_supp_store,
    get_wh_store,
)
from smartsupply.api.main import app
from smartsupply.application.use_cases import (
    ManageProductsUseCase,
    ManageSuppliersUseCase,
    ManageWarehousesUseCase,
)
from smartsupply.core.entities.catalog import Product, Supplier, Warehouse
from smartsupply.core.exceptions import DuplicateSkuError, EntityInUseError


@pytest.fixture
def mock_product_store():
    store = AsyncMock()
    store.list_products.return_value = [
        Product(id="prod-1", sku="CAB-001", name="Cable", price=Decimal("5"))
    ]
    store.count_products.return_value = 41
    store.get_product.return_value = None
    store.create_product.side_effect = lambda product: product
    return store


@pytest.fixture
def mock_supplier_store():
    store = AsyncMock()
    store.list_suppliers.return_value = [Supplier(id="sup-1", name="Northwind")]
    store.count_suppliers.return_value = 1
    store.get_supplier.return_value = Supplier(id="sup-1", name="Northwind")
    store.delete_supplier.side_effect = EntityInUseError("Supplier", "sup-1")
    return store


@pytest.fixture
def mock_warehouse_store():
    store = AsyncMock()
    store.create_warehouse.side_effect = lambda warehouse: warehouse
    store.delete_warehouse.return_value = True
    return store


@pytest.fixture
async def catalog_client(
    async_client: AsyncClient, mock_product_store, mock_supplier_store, mock_warehouse_store
):
    app.dependency_overrides[get_prod_store] = lambda: mock_product_store
    app.dependency_overrides[get_supp_store] = lambda: mock_supplier_store
    app.dependency_overrides[get_wh_store] = lambda: mock_warehouse_store
    app.dependency_overrides[get_manage_products_use_case] = lambda: ManageProductsUseCase(
        product_store=mock_product_store
    )
    app.dependency_overrides[get_manage_suppliers_use_case] = lambda: ManageSuppliersUseCase(
        supplier_store=mock_supplier_store
    )
    app.dependency_overrides[get_manage_warehouses_use_case] = lambda: ManageWarehousesUseCase(
        warehouse_store=mock_warehouse_store
    )
    yield async_client


class TestProductsAPI:
    async def test_list_pages(self, catalog_client: AsyncClient, mock_product_store):
        response = await catalog_client.get("/products", params={"page": 2, "size": 20})
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 41
        assert body["page"] == 2
        assert body["size"] == 20
        assert body["items"][0]["price"] == "5.00"

        kwargs = mock_product_store.list_products.call_args.kwargs
        assert kwargs["offset"] == 40
        assert kwargs["limit"] == 20

    async def test_page_size_is_clamped(self, catalog_client: AsyncClient, mock_product_store):
        await catalog_client.get("/products", params={"size": 5000})
        assert mock_product_store.list_products.call_args.kwargs["limit"] == 200

    async def test_get_missing(self, catalog_client: AsyncClient):
        response = await catalog_client.get("/products/nope")
        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "PRODUCT_NOT_FOUND"
        assert body["path"] == "/products/nope"
        assert body["hint"]

    async def test_create(self, catalog_client: AsyncClient):
        response = await catalog_client.post(
            "/products",
            json={"sku": "RTR-001", "name": "Router", "price": "49.9", "safetyStock": 5},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["price"] == "49.90"
        assert body["safetyStock"] == 5

    async def test_create_duplicate_sku(self, catalog_client: AsyncClient, mock_product_store):
        mock_product_store.create_product.side_effect = DuplicateSkuError("CAB-001")
        response = await catalog_client.post("/products", json={"sku": "CAB-001", "name": "X"})
        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_SKU"

    async def test_create_negative_price(self, catalog_client: AsyncClient):
        response = await catalog_client.post(
            "/products", json={"sku": "X-1", "name": "X", "price": "-1"}
        )
        assert response.status_code == 422
        assert "price" in response.json()["detail"]


class TestSuppliersAPI:
    async def test_list(self, catalog_client: AsyncClient):
        response = await catalog_client.get("/suppliers")
        assert response.status_code == 200
        assert response.json()["items"][0]["name"] == "Northwind"

    async def test_invalid_email(self, catalog_client: AsyncClient):
        response = await catalog_client.post(
            "/suppliers", json={"name": "Harbor", "email": "not-an-email"}
        )
        assert response.status_code == 422

    @pytest.mark.parametrize("email", ["a@b..c", "a@.example.com", "a@example.com."])
    async def test_malformed_domain_rejected(
        self, catalog_client: AsyncClient, mock_supplier_store, email
    ):
        response = await catalog_client.post("/suppliers", json={"name": "Harbor", "email": email})
        assert response.status_code == 422
        mock_supplier_store.create_supplier.assert_not_called()

    async def test_delete_in_use(self, catalog_client: AsyncClient):
        response = await catalog_client.delete("/suppliers/sup-1")
        assert response.status_code == 409
        assert response.json()["error_code"] == "ENTITY_IN_USE"


class TestWarehousesAPI:
    async def test_create_defaults(self, catalog_client: AsyncClient):
        response = await catalog_client.post("/warehouses", json={"name": "Central"})
        assert response.status_code == 201
        body = response.json()
        assert body["type"] == "PHYSICAL"
        assert body["capacity"] == 10000

    async def test_delete(self, catalog_client: AsyncClient, mock_warehouse_store):
        response = await catalog_client.delete("/warehouses/wh-1")
        assert response.status_code == 204
        mock_warehouse_store.delete_warehouse.assert_called_once_with("wh-1")

    async def test_delete_with_stock_history(self, catalog_client, mock_warehouse_store):
        mock_warehouse_store.delete_warehouse.side_effect = EntityInUseError("Warehouse", "wh-1")
        response = await catalog_client.delete("/warehouses/wh-1")
        assert response.status_code == 409
        assert response.json()["error_code"] == "ENTITY_IN_USE"

    async def test_get(self, catalog_client: AsyncClient, mock_warehouse_store):
        mock_warehouse_store.get_warehouse.return_value = Warehouse(id="wh-1", name="Central")
        response = await catalog_client.get("/warehouses/wh-1")
        assert response.status_code == 200
        assert response.json()["name"] == "Central"
