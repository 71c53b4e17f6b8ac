"""Change Purchase Order Status Use Case: raw status override."""

from smartsupply.application.dto.responses import PurchaseOrderResponse
from smartsupply.config import get_logger
from smartsupply.core.entities.purchase_order import (
    OrderStatus,
    PurchaseOrder,
    is_lifecycle_transition,
)
from smartsupply.core.exceptions import PurchaseOrderNotFoundError
from smartsupply.core.interfaces.purchase_order_store import IPurchaseOrderStore

logger = get_logger(__name__)


class ChangePurchaseOrderStatusUseCase:
    """
    Set an order's status directly.

    No inventory side effects: marking an order RECEIVED here books no stock.
    Jumps outside the normal lifecycle are allowed but logged.
    """

    def __init__(self, order_store: IPurchaseOrderStore | None = None):
        self._order_store = order_store

    async def _get_order_store(self) -> IPurchaseOrderStore:
        if self._order_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_purchase_order_store

            self._order_store = await get_purchase_order_store()
        return self._order_store

    async def execute(self, order_id: str, status: OrderStatus) -> PurchaseOrder:
        """Execute status change use case."""
        order_store = await self._get_order_store()
        order = await order_store.get_order(order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(order_id)

        previous = order.status
        if previous is not status and not is_lifecycle_transition(previous, status):
            logger.warning(
                "order_status_overridden",
                order_id=order.id,
                from_status=previous.value,
                to_status=status.value,
            )

        await order_store.update_status(order.id, status)
        order.status = status

        logger.info(
            "purchase_order_status_changed",
            order_id=order.id,
            from_status=previous.value,
            to_status=status.value,
        )
        return order

    def to_response(self, order: PurchaseOrder) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.model_validate(order)
