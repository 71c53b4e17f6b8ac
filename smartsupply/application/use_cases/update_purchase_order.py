"""Update Purchase Order Use Case: edit a DRAFT order."""

from smartsupply.application.dto.requests import UpdatePurchaseOrderRequest
from smartsupply.application.dto.responses import PurchaseOrderResponse
from smartsupply.application.use_cases.create_purchase_order import build_order_items
from smartsupply.config import get_logger
from smartsupply.core.entities.purchase_order import (
    OrderOperation,
    PurchaseOrder,
    ensure_allowed,
)
from smartsupply.core.exceptions import PurchaseOrderNotFoundError, SupplierNotFoundError
from smartsupply.core.interfaces.catalog_store import IProductStore, ISupplierStore
from smartsupply.core.interfaces.purchase_order_store import IPurchaseOrderStore

logger = get_logger(__name__)


class UpdatePurchaseOrderUseCase:
    """Apply supplier, expected date and item changes to a DRAFT order."""

    def __init__(
        self,
        order_store: IPurchaseOrderStore | None = None,
        supplier_store: ISupplierStore | None = None,
        product_store: IProductStore | None = None,
    ):
        self._order_store = order_store
        self._supplier_store = supplier_store
        self._product_store = product_store

    async def _get_order_store(self) -> IPurchaseOrderStore:
        if self._order_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_purchase_order_store

            self._order_store = await get_purchase_order_store()
        return self._order_store

    async def _get_supplier_store(self) -> ISupplierStore:
        if self._supplier_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_supplier_store

            self._supplier_store = await get_supplier_store()
        return self._supplier_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def execute(
        self, order_id: str, request: UpdatePurchaseOrderRequest
    ) -> PurchaseOrder:
        """
        Execute update use case.

        Items, when given, replace the full list and the total is recomputed.

        Raises:
            PurchaseOrderNotFoundError: order does not exist
            OrderStateError: order is not DRAFT
        """
        order_store = await self._get_order_store()
        order = await order_store.get_order(order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(order_id)
        ensure_allowed(order, OrderOperation.EDIT)

        if request.supplier_id is not None and request.supplier_id != order.supplier_id:
            supplier_store = await self._get_supplier_store()
            supplier = await supplier_store.get_supplier(request.supplier_id)
            if supplier is None:
                raise SupplierNotFoundError(request.supplier_id)
            order.supplier_id = supplier.id
            order.supplier_name = supplier.name

        if request.expected_date is not None:
            order.expected_date = request.expected_date

        if request.items is not None:
            product_store = await self._get_product_store()
            order.replace_items(await build_order_items(product_store, request.items))
        else:
            order.recalculate_total()

        await order_store.update_order(order)

        logger.info(
            "purchase_order_updated",
            order_id=order.id,
            items=len(order.items),
            total_amount=str(order.total_amount),
        )

        stored = await order_store.get_order(order.id)
        return stored or order

    def to_response(self, order: PurchaseOrder) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.model_validate(order)
