"""API tests for inventory and movement endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from smartsupply.api.dependencies import (
    get_adjust_stock_use_case,
    get_inv_store,
    get_record_movement_use_case,
)
from smartsupply.api.main import app
from smartsupply.application.use_cases import AdjustStockUseCase, RecordMovementUseCase
from smartsupply.core.entities.inventory import InventoryItem, InventoryMovement, MovementType
from smartsupply.core.exceptions import EntityInUseError


def stock(quantity: int, reserved: int = 0) -> InventoryItem:
    return InventoryItem(
        id="inv-1",
        product_id="prod-1",
        warehouse_id="wh-1",
        quantity=quantity,
        reserved=reserved,
        product_sku="CAB-001",
        product_name="Cable",
        warehouse_name="Central",
        safety_stock=10,
    )


@pytest.fixture
def mock_inventory_store():
    store = AsyncMock()
    store.get_item.return_value = stock(5)
    store.list_items.return_value = [stock(5)]
    store.count_items.return_value = 1
    store.list_low_stock.return_value = [stock(5)]
    store.apply_movement.return_value = True
    store.get_movement.return_value = None
    store.delete_item.return_value = False
    store.list_movements_between.return_value = []
    return store


@pytest.fixture
async def inv_client(async_client: AsyncClient, mock_inventory_store):
    app.dependency_overrides[get_inv_store] = lambda: mock_inventory_store
    app.dependency_overrides[get_adjust_stock_use_case] = lambda: AdjustStockUseCase(
        inventory_store=mock_inventory_store
    )
    app.dependency_overrides[get_record_movement_use_case] = lambda: RecordMovementUseCase(
        inventory_store=mock_inventory_store
    )
    yield async_client


class TestInventoryAPI:
    async def test_list(self, inv_client: AsyncClient):
        response = await inv_client.get("/inventory", params={"search": "cab"})
        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["available"] == 5
        assert item["warehouseName"] == "Central"

    async def test_low_stock(self, inv_client: AsyncClient):
        response = await inv_client.get("/inventory/low-stock")
        assert response.status_code == 200
        assert [i["productSku"] for i in response.json()] == ["CAB-001"]

    async def test_adjust(self, inv_client: AsyncClient, mock_inventory_store, current_user):
        mock_inventory_store.get_item.side_effect = [stock(5), stock(2)]
        response = await inv_client.post(
            "/inventory/inv-1/adjust", json={"newQuantity": 2, "reason": "Cycle count"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "inv-1"
        assert body["quantity"] == 2
        assert body["productSku"] == "CAB-001"
        assert "movement" not in body

        movement = mock_inventory_store.apply_movement.call_args[0][0]
        assert movement.movement_type == MovementType.OUT
        assert movement.quantity == 3
        assert movement.reason == "Cycle count"
        assert movement.performed_by == current_user.id

    async def test_adjust_negative(self, inv_client: AsyncClient, mock_inventory_store):
        response = await inv_client.post("/inventory/inv-1/adjust", json={"newQuantity": -1})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_INPUT"
        mock_inventory_store.apply_movement.assert_not_called()

    async def test_adjust_lost_every_race(self, inv_client: AsyncClient, mock_inventory_store):
        mock_inventory_store.apply_movement.return_value = False
        response = await inv_client.post("/inventory/inv-1/adjust", json={"newQuantity": 9})
        assert response.status_code == 409
        assert response.json()["error_code"] == "CONCURRENT_UPDATE"

    async def test_get_missing(self, inv_client: AsyncClient, mock_inventory_store):
        mock_inventory_store.get_item.return_value = None
        response = await inv_client.get("/inventory/nope")
        assert response.status_code == 404
        assert response.json()["error_code"] == "INVENTORY_ITEM_NOT_FOUND"

    async def test_delete_missing(self, inv_client: AsyncClient):
        response = await inv_client.delete("/inventory/nope")
        assert response.status_code == 404

    async def test_delete_with_movements(self, inv_client: AsyncClient, mock_inventory_store):
        mock_inventory_store.delete_item.side_effect = EntityInUseError("Inventory item", "inv-1")
        response = await inv_client.delete("/inventory/inv-1")
        assert response.status_code == 409
        assert response.json()["error_code"] == "ENTITY_IN_USE"


class TestInventoryMovementsAPI:
    async def test_out_over_stock(self, inv_client: AsyncClient, mock_inventory_store):
        response = await inv_client.post(
            "/inventory-movements",
            json={"inventoryItemId": "inv-1", "movementType": "OUT", "quantity": 6},
        )
        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert body["message"] == "Insufficient stock. Available: 5"
        mock_inventory_store.apply_movement.assert_not_called()

    async def test_record_in(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/inventory-movements",
            json={"inventoryItemId": "inv-1", "movementType": "IN", "quantity": 4},
        )
        assert response.status_code == 201
        assert response.json()["quantityAfter"] == 9

    async def test_zero_quantity_rejected(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/inventory-movements",
            json={"inventoryItemId": "inv-1", "movementType": "IN", "quantity": 0},
        )
        assert response.status_code == 422

    async def test_date_range(self, inv_client: AsyncClient, mock_inventory_store):
        movement = InventoryMovement(
            inventory_item_id="inv-1",
            movement_type=MovementType.IN,
            quantity=1,
            quantity_before=0,
            quantity_after=1,
        )
        mock_inventory_store.list_movements_between.return_value = [movement]
        response = await inv_client.get(
            "/inventory-movements/date-range",
            params={"from": "2024-05-01T00:00:00", "to": "2024-05-31T23:59:59"},
        )
        assert response.status_code == 200
        assert len(response.json()) == 1

        start, end = mock_inventory_store.list_movements_between.call_args[0]
        assert start.tzinfo is not None
        assert end > start

    async def test_date_range_reversed(self, inv_client: AsyncClient):
        response = await inv_client.get(
            "/inventory-movements/date-range",
            params={"from": "2024-06-01T00:00:00", "to": "2024-05-01T00:00:00"},
        )
        assert response.status_code == 400
