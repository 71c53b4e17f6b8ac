"""Delete Purchase Order Use Case."""

from smartsupply.config import get_logger
from smartsupply.core.entities.purchase_order import (
    OrderOperation,
    OrderStatus,
    ensure_allowed,
)
from smartsupply.core.exceptions import ConcurrentUpdateError, PurchaseOrderNotFoundError
from smartsupply.core.interfaces.purchase_order_store import IPurchaseOrderStore

logger = get_logger(__name__)


class DeletePurchaseOrderUseCase:
    """Delete a DRAFT order together with its items."""

    def __init__(self, order_store: IPurchaseOrderStore | None = None):
        self._order_store = order_store

    async def _get_order_store(self) -> IPurchaseOrderStore:
        if self._order_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_purchase_order_store

            self._order_store = await get_purchase_order_store()
        return self._order_store

    async def execute(self, order_id: str) -> None:
        """
        Execute delete use case.

        Raises:
            PurchaseOrderNotFoundError: order does not exist
            OrderStateError: order is not DRAFT
            ConcurrentUpdateError: order left DRAFT between read and delete
        """
        order_store = await self._get_order_store()
        order = await order_store.get_order(order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(order_id)
        ensure_allowed(order, OrderOperation.DELETE)

        if not await order_store.delete_order(order.id, expected_status=OrderStatus.DRAFT):
            raise ConcurrentUpdateError("Purchase order", order.id)

        logger.info(
            "purchase_order_deleted",
            order_id=order.id,
            order_number=order.order_number,
            items=len(order.items),
        )
