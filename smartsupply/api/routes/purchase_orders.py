"""Purchase order endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from smartsupply.api.dependencies import (
    PageParams,
    get_change_status_use_case,
    get_create_purchase_order_use_case,
    get_current_user,
    get_delete_purchase_order_use_case,
    get_page_params,
    get_po_store,
    get_receive_purchase_order_use_case,
    get_update_purchase_order_use_case,
)
from smartsupply.application.dto.requests import (
    CreatePurchaseOrderRequest,
    ReceiveItemsRequest,
    UpdatePurchaseOrderRequest,
)
from smartsupply.application.dto.responses import (
    ErrorResponse,
    PageResponse,
    PurchaseOrderResponse,
)
from smartsupply.application.use_cases import (
    ChangePurchaseOrderStatusUseCase,
    CreatePurchaseOrderUseCase,
    DeletePurchaseOrderUseCase,
    ReceivePurchaseOrderUseCase,
    UpdatePurchaseOrderUseCase,
)
from smartsupply.core.entities.purchase_order import OrderStatus
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import PurchaseOrderNotFoundError
from smartsupply.core.interfaces import IPurchaseOrderStore

router = APIRouter(prefix="/purchase-orders", tags=["purchase-orders"])


def _orders_to_response(orders) -> list[PurchaseOrderResponse]:
    return [PurchaseOrderResponse.model_validate(order) for order in orders]


@router.get("", response_model=PageResponse[PurchaseOrderResponse])
async def list_purchase_orders(
    paging: PageParams = Depends(get_page_params),
    store: IPurchaseOrderStore = Depends(get_po_store),
) -> PageResponse[PurchaseOrderResponse]:
    """List purchase orders with their items, newest first."""
    orders = await store.list_orders(limit=paging.size, offset=paging.offset)
    return PageResponse[PurchaseOrderResponse](
        items=_orders_to_response(orders),
        total=await store.count_orders(),
        page=paging.page,
        size=paging.size,
    )


@router.post(
    "",
    response_model=PurchaseOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_purchase_order(
    request: CreatePurchaseOrderRequest,
    current_user: CurrentUser = Depends(get_current_user),
    use_case: CreatePurchaseOrderUseCase = Depends(get_create_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Create a purchase order; unit prices default to catalog prices."""
    order = await use_case.execute(request, current_user)
    return use_case.to_response(order)


@router.get("/status/{order_status}", response_model=list[PurchaseOrderResponse])
async def list_by_status(
    order_status: OrderStatus,
    store: IPurchaseOrderStore = Depends(get_po_store),
) -> list[PurchaseOrderResponse]:
    """Orders in one status."""
    return _orders_to_response(await store.list_by_status(order_status))


@router.get("/supplier/{supplier_id}", response_model=list[PurchaseOrderResponse])
async def list_by_supplier(
    supplier_id: str,
    store: IPurchaseOrderStore = Depends(get_po_store),
) -> list[PurchaseOrderResponse]:
    """Orders placed with one supplier."""
    return _orders_to_response(await store.list_by_supplier(supplier_id))


@router.get(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_purchase_order(
    order_id: str,
    store: IPurchaseOrderStore = Depends(get_po_store),
) -> PurchaseOrderResponse:
    """Get purchase order by ID with its items."""
    order = await store.get_order(order_id)
    if order is None:
        raise PurchaseOrderNotFoundError(order_id)
    return PurchaseOrderResponse.model_validate(order)


@router.put(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_purchase_order(
    order_id: str,
    request: UpdatePurchaseOrderRequest,
    use_case: UpdatePurchaseOrderUseCase = Depends(get_update_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Edit a DRAFT order."""
    order = await use_case.execute(order_id, request)
    return use_case.to_response(order)


@router.post(
    "/{order_id}/receive",
    response_model=PurchaseOrderResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def receive_items(
    order_id: str,
    request: ReceiveItemsRequest,
    current_user: CurrentUser = Depends(get_current_user),
    use_case: ReceivePurchaseOrderUseCase = Depends(get_receive_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Book delivered quantities into a warehouse against a SENT order.

    Returns the updated order; the stock movements are listed under
    /inventory-movements.
    """
    result = await use_case.execute(order_id, request, current_user)
    return use_case.to_response(result)


@router.post(
    "/{order_id}/status",
    response_model=PurchaseOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def change_status(
    order_id: str,
    order_status: OrderStatus = Query(..., alias="status"),
    use_case: ChangePurchaseOrderStatusUseCase = Depends(get_change_status_use_case),
) -> PurchaseOrderResponse:
    """Override the order status. Books no stock."""
    order = await use_case.execute(order_id, order_status)
    return use_case.to_response(order)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_purchase_order(
    order_id: str,
    use_case: DeletePurchaseOrderUseCase = Depends(get_delete_purchase_order_use_case),
) -> Response:
    """Delete a DRAFT order and its items."""
    await use_case.execute(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
