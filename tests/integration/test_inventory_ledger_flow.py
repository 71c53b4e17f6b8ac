"""Integration test for the stock ledger.

Every quantity change goes through a movement whose before/after figures
chain together; failed writes leave quantity and history untouched.
"""

import pytest

from smartsupply.application.dto.requests import (
    AdjustStockRequest,
    CreateProductRequest,
    RecordMovementRequest,
    UpsertInventoryItemRequest,
)
from smartsupply.application.use_cases import (
    AdjustStockUseCase,
    GetDashboardStatsUseCase,
    ManageProductsUseCase,
    RecordMovementUseCase,
    UpsertInventoryItemUseCase,
)
from smartsupply.core.entities.inventory import MovementType
from smartsupply.core.entities.user import CurrentUser, Role
from smartsupply.core.exceptions import (
    DuplicateSkuError,
    EntityInUseError,
    InsufficientStockError,
)
from smartsupply.infrastructure.storage.sqlite import SQLiteInventoryStore


@pytest.fixture
def operator(seeded) -> CurrentUser:
    return CurrentUser(id=seeded.user.id, email=seeded.user.email, role=Role.WAREHOUSE_OP)


@pytest.fixture
async def cable_stock(seeded, operator):
    """20 cables in Central, booked through an upsert."""
    return await UpsertInventoryItemUseCase().execute(
        UpsertInventoryItemRequest(
            product_id=seeded.cable.id,
            warehouse_id=seeded.warehouse.id,
            quantity=20,
            reason="Opening balance",
        ),
        operator,
    )


class TestInventoryLedgerFlow:
    async def test_upsert_records_opening_movement(self, cable_stock):
        assert cable_stock.quantity == 20
        history = await SQLiteInventoryStore().list_movements_for_item(cable_stock.id)
        assert len(history) == 1
        assert history[0].quantity_before == 0
        assert history[0].quantity_after == 20
        assert history[0].reason == "Opening balance"

    async def test_upsert_existing_pair_updates_in_place(self, cable_stock, seeded, operator):
        again = await UpsertInventoryItemUseCase().execute(
            UpsertInventoryItemRequest(
                product_id=seeded.cable.id, warehouse_id=seeded.warehouse.id, reserved=3
            ),
            operator,
        )
        assert again.id == cable_stock.id
        assert again.quantity == 20
        assert again.available == 17

    async def test_adjust_then_move(self, cable_stock, operator):
        adjusted = await AdjustStockUseCase().execute(
            cable_stock.id, AdjustStockRequest(new_quantity=15, reason="Cycle count"), operator
        )
        assert adjusted.inventory_item.quantity == 15
        assert adjusted.movement.movement_type == MovementType.OUT
        assert adjusted.movement.quantity == 5

        movement = await RecordMovementUseCase().execute(
            RecordMovementRequest(
                inventory_item_id=cable_stock.id, movement_type=MovementType.IN, quantity=5
            ),
            operator,
        )
        assert movement.quantity_before == 15
        assert movement.quantity_after == 20
        assert movement.performed_by_email == "ops@example.com"

        history = await SQLiteInventoryStore().list_movements_for_item(cable_stock.id)
        chain = list(reversed(history))
        for earlier, later in zip(chain, chain[1:]):
            assert later.quantity_before == earlier.quantity_after

    async def test_overdraw_is_rejected(self, cable_stock, operator):
        with pytest.raises(InsufficientStockError, match="Available: 20"):
            await RecordMovementUseCase().execute(
                RecordMovementRequest(
                    inventory_item_id=cable_stock.id,
                    movement_type=MovementType.OUT,
                    quantity=21,
                ),
                operator,
            )

        store = SQLiteInventoryStore()
        assert (await store.get_item(cable_stock.id)).quantity == 20
        assert len(await store.list_movements_for_item(cable_stock.id)) == 1

    async def test_low_stock_follows_safety_stock(self, cable_stock, operator):
        await AdjustStockUseCase().execute(
            cable_stock.id, AdjustStockRequest(new_quantity=8), operator
        )
        low = await SQLiteInventoryStore().list_low_stock()
        assert [item.id for item in low] == [cable_stock.id]

    async def test_product_with_stock_cannot_be_deleted(self, cable_stock, seeded):
        with pytest.raises(EntityInUseError):
            await ManageProductsUseCase().delete(seeded.cable.id)

    async def test_item_with_history_cannot_be_deleted(self, cable_stock, operator):
        await AdjustStockUseCase().execute(
            cable_stock.id, AdjustStockRequest(new_quantity=12), operator
        )
        store = SQLiteInventoryStore()
        with pytest.raises(EntityInUseError):
            await store.delete_item(cable_stock.id)

        assert (await store.get_item(cable_stock.id)).quantity == 12
        history = await store.list_movements_for_item(cable_stock.id)
        assert sorted(m.quantity_after for m in history) == [12, 20]

    async def test_duplicate_sku(self, seeded):
        with pytest.raises(DuplicateSkuError):
            await ManageProductsUseCase().create(CreateProductRequest(sku="CAB-001", name="Dup"))

    async def test_dashboard_reflects_stock(self, cable_stock):
        stats = await GetDashboardStatsUseCase().execute()
        assert stats.total_products == 2
        assert stats.total_warehouses == 1
        assert stats.most_stocked_product == "Cable"
        assert stats.most_stocked_quantity == 20
        assert stats.best_supplier_name == "-"
