"""API tests for purchase order endpoints."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from smartsupply.api.dependencies import (
    get_change_status_use_case,
    get_create_purchase_order_use_case,
    get_delete_purchase_order_use_case,
    get_po_store,
    get_receive_purchase_order_use_case,
)
from smartsupply.api.main import app
from smartsupply.application.use_cases import (
    ChangePurchaseOrderStatusUseCase,
    CreatePurchaseOrderUseCase,
    DeletePurchaseOrderUseCase,
    ReceivePurchaseOrderUseCase,
)
from smartsupply.core.entities.catalog import Product, Supplier, Warehouse
from smartsupply.core.entities.inventory import InventoryMovement, MovementType
from smartsupply.core.entities.purchase_order import (
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderItem,
)

PRODUCTS = {
    "prod-a": Product(id="prod-a", sku="A-1", name="Alpha", price=Decimal("5.00")),
    "prod-b": Product(id="prod-b", sku="B-1", name="Beta", price=Decimal("2.50")),
}


def make_order(status: OrderStatus = OrderStatus.SENT) -> PurchaseOrder:
    order = PurchaseOrder(
        id="po-1", order_number="PO-2024-05-001", supplier_id="sup-1", status=status
    )
    order.replace_items(
        [
            PurchaseOrderItem(
                id="line-a", product_id="prod-a", quantity_ordered=10, unit_price=Decimal("5")
            ),
            PurchaseOrderItem(
                id="line-b", product_id="prod-b", quantity_ordered=4, unit_price=Decimal("2.5")
            ),
        ]
    )
    return order


@pytest.fixture
def mock_order_store():
    store = AsyncMock()
    store.get_order.return_value = make_order()
    store.count_orders.return_value = 0
    store.order_number_exists.return_value = False
    store.list_orders.return_value = [make_order()]
    store.list_by_status.return_value = []
    store.delete_order.return_value = True
    return store


@pytest.fixture
def mock_supplier_store():
    store = AsyncMock()
    store.get_supplier.return_value = Supplier(id="sup-1", name="Northwind")
    return store


@pytest.fixture
def mock_product_store():
    store = AsyncMock()
    store.get_product.side_effect = lambda product_id: PRODUCTS.get(product_id)
    return store


@pytest.fixture
def mock_warehouse_store():
    store = AsyncMock()
    store.get_warehouse.return_value = Warehouse(id="wh-1", name="Central")
    return store


@pytest.fixture
async def po_client(
    async_client: AsyncClient,
    mock_order_store,
    mock_supplier_store,
    mock_product_store,
    mock_warehouse_store,
):
    app.dependency_overrides[get_po_store] = lambda: mock_order_store
    app.dependency_overrides[get_create_purchase_order_use_case] = (
        lambda: CreatePurchaseOrderUseCase(
            order_store=mock_order_store,
            supplier_store=mock_supplier_store,
            product_store=mock_product_store,
        )
    )
    app.dependency_overrides[get_receive_purchase_order_use_case] = (
        lambda: ReceivePurchaseOrderUseCase(
            order_store=mock_order_store, warehouse_store=mock_warehouse_store
        )
    )
    app.dependency_overrides[get_change_status_use_case] = (
        lambda: ChangePurchaseOrderStatusUseCase(order_store=mock_order_store)
    )
    app.dependency_overrides[get_delete_purchase_order_use_case] = (
        lambda: DeletePurchaseOrderUseCase(order_store=mock_order_store)
    )
    yield async_client


class TestCreatePurchaseOrderAPI:
    async def test_create_prices_from_catalog(self, po_client: AsyncClient, mock_order_store):
        mock_order_store.get_order.return_value = None
        response = await po_client.post(
            "/purchase-orders",
            json={
                "supplierId": "sup-1",
                "items": [
                    {"productId": "prod-a", "quantity": 10},
                    {"productId": "prod-b", "quantity": 4},
                ],
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "DRAFT"
        assert body["totalAmount"] == "60.00"
        assert body["orderNumber"].startswith("PO-")
        assert body["orderNumber"].endswith("-001")
        assert body["createdBy"] == "user-1"

    async def test_snake_case_body_is_accepted(self, po_client: AsyncClient, mock_order_store):
        mock_order_store.get_order.return_value = None
        response = await po_client.post(
            "/purchase-orders",
            json={
                "supplier_id": "sup-1",
                "items": [{"product_id": "prod-b", "quantity": 2, "unit_price": "3.00"}],
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["supplierId"] == "sup-1"
        assert body["items"][0]["unitPrice"] == "3.00"
        assert "supplier_id" not in body

    async def test_unknown_supplier(self, po_client: AsyncClient, mock_supplier_store):
        mock_supplier_store.get_supplier.return_value = None
        response = await po_client.post(
            "/purchase-orders",
            json={"supplierId": "nope", "items": [{"productId": "prod-a", "quantity": 1}]},
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "SUPPLIER_NOT_FOUND"

    async def test_empty_items(self, po_client: AsyncClient, mock_order_store):
        response = await po_client.post(
            "/purchase-orders", json={"supplierId": "sup-1", "items": []}
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "EMPTY_ORDER"
        mock_order_store.create_order.assert_not_called()


class TestReceiveAPI:
    async def test_partial_receipt(self, po_client: AsyncClient, mock_order_store):
        movement = InventoryMovement(
            inventory_item_id="inv-1",
            movement_type=MovementType.IN,
            quantity=6,
            quantity_before=0,
            quantity_after=6,
            reference_type="PURCHASE_ORDER",
            reference_id="po-1",
        )
        mock_order_store.apply_receipt.return_value = (OrderStatus.SENT, [movement])

        response = await po_client.post(
            "/purchase-orders/po-1/receive",
            json={
                "warehouseId": "wh-1",
                "items": [{"purchaseOrderItemId": "line-a", "quantityReceived": 6}],
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "po-1"
        assert body["status"] == "SENT"
        assert body["orderNumber"] == "PO-2024-05-001"
        assert "movements" not in body

        kwargs = mock_order_store.apply_receipt.call_args.kwargs
        assert kwargs["reason"] == "Received from PO: PO-2024-05-001"
        assert kwargs["performed_by"] == "user-1"

    async def test_over_receipt(self, po_client: AsyncClient, mock_order_store):
        response = await po_client.post(
            "/purchase-orders/po-1/receive",
            json={
                "warehouseId": "wh-1",
                "items": [{"purchaseOrderItemId": "line-b", "quantityReceived": 5}],
            },
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "OVER_RECEIPT"
        mock_order_store.apply_receipt.assert_not_called()

    async def test_draft_cannot_receive(self, po_client: AsyncClient, mock_order_store):
        mock_order_store.get_order.return_value = make_order(OrderStatus.DRAFT)
        response = await po_client.post(
            "/purchase-orders/po-1/receive",
            json={
                "warehouseId": "wh-1",
                "items": [{"purchaseOrderItemId": "line-a", "quantityReceived": 1}],
            },
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "ORDER_STATE_INVALID"


class TestOrderLifecycleAPI:
    async def test_list(self, po_client: AsyncClient):
        response = await po_client.get("/purchase-orders")
        assert response.status_code == 200
        order = response.json()["items"][0]
        assert order["items"][0]["lineTotal"] == "50.00"
        assert order["items"][1]["remaining"] == 4

    async def test_list_by_status(self, po_client: AsyncClient, mock_order_store):
        response = await po_client.get("/purchase-orders/status/CANCELLED")
        assert response.status_code == 200
        mock_order_store.list_by_status.assert_called_once_with(OrderStatus.CANCELLED)

    async def test_unknown_status(self, po_client: AsyncClient):
        response = await po_client.get("/purchase-orders/status/SHIPPED")
        assert response.status_code == 422

    async def test_status_override(self, po_client: AsyncClient, mock_order_store):
        response = await po_client.post(
            "/purchase-orders/po-1/status", params={"status": "CANCELLED"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "CANCELLED"
        mock_order_store.apply_receipt.assert_not_called()

    async def test_delete_sent_rejected(self, po_client: AsyncClient, mock_order_store):
        response = await po_client.delete("/purchase-orders/po-1")
        assert response.status_code == 409
        mock_order_store.delete_order.assert_not_called()

    async def test_delete_draft(self, po_client: AsyncClient, mock_order_store):
        mock_order_store.get_order.return_value = make_order(OrderStatus.DRAFT)
        response = await po_client.delete("/purchase-orders/po-1")
        assert response.status_code == 204

    async def test_get_missing(self, po_client: AsyncClient, mock_order_store):
        mock_order_store.get_order.return_value = None
        response = await po_client.get("/purchase-orders/nope")
        assert response.status_code == 404
        assert response.json()["error_code"] == "PURCHASE_ORDER_NOT_FOUND"
