"""Record Movement Use Case: typed stock movement with balance check."""

from smartsupply.application.dto.requests import RecordMovementRequest
from smartsupply.application.dto.responses import InventoryMovementResponse
from smartsupply.application.use_cases.stock_writes import write_movement
from smartsupply.config import get_logger
from smartsupply.core.entities.inventory import InventoryMovement
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.interfaces.inventory_store import IInventoryStore
from smartsupply.core.services.stock_ledger import StockLedgerService

logger = get_logger(__name__)


class RecordMovementUseCase:
    """
    Record an IN, OUT, ADJUSTMENT or TRANSFER movement.

    OUT beyond the on-hand quantity raises InsufficientStockError; so does any
    movement that would leave the item negative.
    """

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
        request: RecordMovementRequest,
        current_user: CurrentUser | None = None,
    ) -> InventoryMovement:
        """Execute record movement use case."""
        logger.info(
            "record_movement_started",
            item_id=request.inventory_item_id,
            movement_type=request.movement_type.value,
            quantity=request.quantity,
        )

        store = await self._get_inventory_store()
        performed_by = current_user.id if current_user else None

        item, movement = await write_movement(
            store,
            request.inventory_item_id,
            lambda current: self._ledger.plan_movement(
                current,
                request.movement_type,
                request.quantity,
                reason=request.reason,
                reference_type=request.reference_type,
                reference_id=request.reference_id,
                performed_by=performed_by,
            ),
        )

        logger.info(
            "record_movement_complete",
            item_id=item.id,
            movement_id=movement.id,
            quantity_after=movement.quantity_after,
        )

        stored = await store.get_movement(movement.id)
        return stored or movement

    def to_response(self, movement: InventoryMovement) -> InventoryMovementResponse:
        """Convert result to API response."""
        return InventoryMovementResponse.model_validate(movement)
