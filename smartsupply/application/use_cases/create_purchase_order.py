"""Create Purchase Order Use Case."""

from smartsupply.application.dto.requests import (
    CreatePurchaseOrderRequest,
    PurchaseOrderItemRequest,
)
from smartsupply.application.dto.responses import PurchaseOrderResponse
from smartsupply.config import get_logger
from smartsupply.core.entities.common import utc_now
from smartsupply.core.entities.purchase_order import (
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderItem,
    format_order_number,
)
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import (
    EmptyOrderError,
    ProductNotFoundError,
    SupplierNotFoundError,
)
from smartsupply.core.interfaces.catalog_store import IProductStore, ISupplierStore
from smartsupply.core.interfaces.purchase_order_store import IPurchaseOrderStore

logger = get_logger(__name__)


async def build_order_items(
    product_store: IProductStore,
    item_requests: list[PurchaseOrderItemRequest],
) -> list[PurchaseOrderItem]:
    """
    Resolve requested lines into order items.

    unit_price falls back to the product's catalog price at the time of the
    call; the snapshot is not touched by later catalog changes.

    Raises:
        EmptyOrderError: no lines given
        ProductNotFoundError: a line references an unknown product
    """
    if not item_requests:
        raise EmptyOrderError()

    items: list[PurchaseOrderItem] = []
    for line in item_requests:
        product = await product_store.get_product(line.product_id)
        if product is None:
            raise ProductNotFoundError(line.product_id)
        items.append(
            PurchaseOrderItem(
                product_id=product.id,
                quantity_ordered=line.quantity,
                unit_price=line.unit_price if line.unit_price is not None else product.price,
                product_sku=product.sku,
                product_name=product.name,
            )
        )
    return items


class CreatePurchaseOrderUseCase:
    """Create a purchase order with its lines and a generated order number."""

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
        self,
        request: CreatePurchaseOrderRequest,
        current_user: CurrentUser | None = None,
    ) -> PurchaseOrder:
        """
        Execute create purchase order use case.

        All lookups and validation happen before the order is written.

        Raises:
            SupplierNotFoundError: supplier_id is unknown
            ProductNotFoundError: a line references an unknown product
            EmptyOrderError: no lines given
        """
        logger.info(
            "create_purchase_order_started",
            supplier_id=request.supplier_id,
            items=len(request.items),
        )

        supplier_store = await self._get_supplier_store()
        supplier = await supplier_store.get_supplier(request.supplier_id)
        if supplier is None:
            raise SupplierNotFoundError(request.supplier_id)

        product_store = await self._get_product_store()
        items = await build_order_items(product_store, request.items)

        order_store = await self._get_order_store()
        created_at = utc_now()
        order_number = await self._next_order_number(order_store, created_at)

        order = PurchaseOrder(
            order_number=order_number,
            supplier_id=supplier.id,
            status=request.status or OrderStatus.DRAFT,
            expected_date=request.expected_date,
            created_by=current_user.id if current_user else None,
            created_at=created_at,
            supplier_name=supplier.name,
        )
        order.replace_items(items)
        await order_store.create_order(order)

        logger.info(
            "purchase_order_created",
            order_id=order.id,
            order_number=order.order_number,
            status=order.status.value,
            total_amount=str(order.total_amount),
        )

        stored = await order_store.get_order(order.id)
        return stored or order

    @staticmethod
    async def _next_order_number(store: IPurchaseOrderStore, created_at) -> str:
        """PO-<YYYY-MM>-<count + 1>, skipping numbers already taken."""
        sequence = await store.count_orders() + 1
        order_number = format_order_number(created_at, sequence)
        while await store.order_number_exists(order_number):
            sequence += 1
            order_number = format_order_number(created_at, sequence)
        return order_number

    def to_response(self, order: PurchaseOrder) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.model_validate(order)
