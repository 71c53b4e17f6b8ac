"""Receive Purchase Order Use Case: book delivered goods into a warehouse."""

from collections import defaultdict
from dataclasses import dataclass, field

from smartsupply.application.dto.requests import ReceiveItemsRequest
from smartsupply.application.dto.responses import PurchaseOrderResponse
from smartsupply.config import get_logger
from smartsupply.core.entities.inventory import InventoryMovement
from smartsupply.core.entities.purchase_order import (
    OrderOperation,
    PurchaseOrder,
    ReceiptLine,
    ensure_allowed,
)
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import (
    OverReceiptError,
    PurchaseOrderNotFoundError,
    UnknownOrderItemError,
    WarehouseNotFoundError,
)
from smartsupply.core.interfaces.catalog_store import IWarehouseStore
from smartsupply.core.interfaces.purchase_order_store import IPurchaseOrderStore
from smartsupply.core.services.stock_ledger import receipt_reason

logger = get_logger(__name__)


@dataclass
class ReceiveItemsResult:
    """Order after the receipt and the movements it produced."""

    order: PurchaseOrder
    movements: list[InventoryMovement] = field(default_factory=list)


class ReceivePurchaseOrderUseCase:
    """
    Receive items against a SENT purchase order.

    Flow:
    1. Load the order and check it accepts receipts
    2. Validate every line against the outstanding quantities
    3. Persist increments, stock and IN movements in one transaction
    4. The store flips the order to RECEIVED once every line is complete
    """

    def __init__(
        self,
        order_store: IPurchaseOrderStore | None = None,
        warehouse_store: IWarehouseStore | None = None,
    ):
        self._order_store = order_store
        self._warehouse_store = warehouse_store

    async def _get_order_store(self) -> IPurchaseOrderStore:
        if self._order_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_purchase_order_store

            self._order_store = await get_purchase_order_store()
        return self._order_store

    async def _get_warehouse_store(self) -> IWarehouseStore:
        if self._warehouse_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_warehouse_store

            self._warehouse_store = await get_warehouse_store()
        return self._warehouse_store

    async def execute(
        self,
        order_id: str,
        request: ReceiveItemsRequest,
        current_user: CurrentUser | None = None,
    ) -> ReceiveItemsResult:
        """
        Execute receive use case.

        Raises:
            PurchaseOrderNotFoundError: order does not exist
            OrderStateError: order is not SENT
            WarehouseNotFoundError: destination warehouse does not exist
            UnknownOrderItemError: a line is not part of this order
            OverReceiptError: a line exceeds its outstanding quantity
            ConcurrentUpdateError: a concurrent receipt won the race
        """
        logger.info(
            "receive_purchase_order_started",
            order_id=order_id,
            warehouse_id=request.warehouse_id,
            lines=len(request.items),
        )

        order_store = await self._get_order_store()
        order = await order_store.get_order(order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(order_id)
        ensure_allowed(order, OrderOperation.RECEIVE)

        warehouse_store = await self._get_warehouse_store()
        if await warehouse_store.get_warehouse(request.warehouse_id) is None:
            raise WarehouseNotFoundError(request.warehouse_id)

        lines = self._validate_lines(order, request)

        status, movements = await order_store.apply_receipt(
            order,
            request.warehouse_id,
            lines,
            reason=receipt_reason(order.order_number, request.notes),
            performed_by=current_user.id if current_user else None,
        )

        logger.info(
            "stock_received",
            order_id=order.id,
            order_number=order.order_number,
            warehouse_id=request.warehouse_id,
            units=sum(line.quantity for line in lines),
            status=status.value,
        )

        stored = await order_store.get_order(order.id)
        return ReceiveItemsResult(order=stored or order, movements=movements)

    @staticmethod
    def _validate_lines(order: PurchaseOrder, request: ReceiveItemsRequest) -> list[ReceiptLine]:
        """Check all lines before any write; repeated lines are summed per item."""
        requested: dict[str, int] = defaultdict(int)
        lines: list[ReceiptLine] = []

        for line in request.items:
            item = order.get_item(line.purchase_order_item_id)
            if item is None:
                raise UnknownOrderItemError(order.id, line.purchase_order_item_id)

            requested[item.id] += line.quantity_received
            if requested[item.id] > item.remaining:
                raise OverReceiptError(item.id, requested[item.id], item.remaining)

            lines.append(
                ReceiptLine(
                    purchase_order_item_id=item.id,
                    product_id=item.product_id,
                    quantity=line.quantity_received,
                )
            )
        return lines

    def to_response(self, result: ReceiveItemsResult) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.model_validate(result.order)
