"""Adjust Stock Use Case: set an item's quantity to an absolute value."""

from dataclasses import dataclass

from smartsupply.application.dto.requests import AdjustStockRequest
from smartsupply.application.dto.responses import InventoryItemResponse
from smartsupply.application.use_cases.stock_writes import write_movement
from smartsupply.config import get_logger
from smartsupply.core.entities.inventory import InventoryItem, InventoryMovement
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import InvalidInputError
from smartsupply.core.interfaces.inventory_store import IInventoryStore
from smartsupply.core.services.stock_ledger import StockLedgerService

logger = get_logger(__name__)


@dataclass
class AdjustStockResult:
    """Result of an adjustment."""

    inventory_item: InventoryItem
    movement: InventoryMovement


class AdjustStockUseCase:
    """Adjust stock to an absolute quantity, recording the delta as a movement."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        ledger: StockLedgerService | None = None,
    ):
        self._inventory_store = inventory_store
        self._ledger = ledger or StockLedgerService()

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(
        self,
        item_id: str,
        request: AdjustStockRequest,
        current_user: CurrentUser | None = None,
    ) -> AdjustStockResult:
        """Execute adjust stock use case."""
        logger.info(
            "adjust_stock_started",
            item_id=item_id,
            new_quantity=request.new_quantity,
        )

        if request.new_quantity < 0:
            raise InvalidInputError(
                "new_quantity", "cannot have negative quantity", request.new_quantity
            )

        store = await self._get_inventory_store()
        performed_by = current_user.id if current_user else None

        item, movement = await write_movement(
            store,
            item_id,
            lambda current: self._ledger.plan_adjustment(
                current,
                request.new_quantity,
                reason=request.reason,
                performed_by=performed_by,
            ),
        )

        logger.info(
            "adjust_stock_complete",
            item_id=item.id,
            quantity_before=movement.quantity_before,
            quantity_after=movement.quantity_after,
            movement_type=movement.movement_type.value,
        )
        return AdjustStockResult(inventory_item=item, movement=movement)

    def to_response(self, result: AdjustStockResult) -> InventoryItemResponse:
        """Convert result to API response."""
        return InventoryItemResponse.model_validate(result.inventory_item)
