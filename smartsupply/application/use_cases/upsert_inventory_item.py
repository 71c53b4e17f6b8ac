"""Upsert Inventory Item Use Case."""

from smartsupply.application.dto.requests import UpsertInventoryItemRequest
from smartsupply.application.dto.responses import InventoryItemResponse
from smartsupply.application.use_cases.stock_writes import write_movement
from smartsupply.config import get_logger
from smartsupply.core.entities.inventory import InventoryItem
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import ProductNotFoundError, WarehouseNotFoundError
from smartsupply.core.interfaces.catalog_store import IProductStore, IWarehouseStore
from smartsupply.core.interfaces.inventory_store import IInventoryStore
from smartsupply.core.services.stock_ledger import StockLedgerService

logger = get_logger(__name__)


class UpsertInventoryItemUseCase:
    """
    Create the inventory item for a (product, warehouse) pair if needed and
    set its figures.

    A quantity change goes through the ledger as a manual adjustment so the
    audit trail stays complete; reserved is set directly.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        product_store: IProductStore | None = None,
        warehouse_store: IWarehouseStore | None = None,
        ledger: StockLedgerService | None = None,
    ):
        self._inventory_store = inventory_store
        self._product_store = product_store
        self._warehouse_store = warehouse_store
        self._ledger = ledger or StockLedgerService()

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_warehouse_store(self) -> IWarehouseStore:
        if self._warehouse_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_warehouse_store

            self._warehouse_store = await get_warehouse_store()
        return self._warehouse_store

    async def execute(
        self,
        request: UpsertInventoryItemRequest,
        current_user: CurrentUser | None = None,
    ) -> InventoryItem:
        """Execute upsert use case."""
        product_store = await self._get_product_store()
        if await product_store.get_product(request.product_id) is None:
            raise ProductNotFoundError(request.product_id)

        warehouse_store = await self._get_warehouse_store()
        if await warehouse_store.get_warehouse(request.warehouse_id) is None:
            raise WarehouseNotFoundError(request.warehouse_id)

        store = await self._get_inventory_store()
        item = await store.ensure_item(request.product_id, request.warehouse_id)

        # Reserved is written last so a lost stock race leaves the item as it was
        if request.quantity is not None and request.quantity != item.quantity:
            performed_by = current_user.id if current_user else None
            item, _ = await write_movement(
                store,
                item.id,
                lambda current: self._ledger.plan_adjustment(
                    current,
                    request.quantity,
                    reason=request.reason,
                    performed_by=performed_by,
                ),
            )

        if request.reserved is not None and request.reserved != item.reserved:
            await store.set_reserved(item.id, request.reserved)
            item = await store.get_item(item.id) or item

        logger.info(
            "inventory_item_upserted",
            item_id=item.id,
            product_id=item.product_id,
            warehouse_id=item.warehouse_id,
            quantity=item.quantity,
            reserved=item.reserved,
        )
        return item

    def to_response(self, item: InventoryItem) -> InventoryItemResponse:
        """Convert result to API response."""
        return InventoryItemResponse.model_validate(item)
