"""Inventory management endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from smartsupply.api.dependencies import (
    PageParams,
    get_adjust_stock_use_case,
    get_current_user,
    get_inv_store,
    get_page_params,
    get_upsert_inventory_use_case,
)
from smartsupply.application.dto.requests import AdjustStockRequest, UpsertInventoryItemRequest
from smartsupply.application.dto.responses import (
    ErrorResponse,
    InventoryItemResponse,
    PageResponse,
)
from smartsupply.application.use_cases import AdjustStockUseCase, UpsertInventoryItemUseCase
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import InventoryItemNotFoundError
from smartsupply.core.interfaces import IInventoryStore

router = APIRouter(prefix="/inventory", tags=["inventory"])


def _items_to_response(items) -> list[InventoryItemResponse]:
    return [InventoryItemResponse.model_validate(item) for item in items]


@router.get("", response_model=PageResponse[InventoryItemResponse])
async def list_inventory(
    search: str | None = Query(default=None, description="Match on product, SKU or warehouse"),
    paging: PageParams = Depends(get_page_params),
    store: IInventoryStore = Depends(get_inv_store),
) -> PageResponse[InventoryItemResponse]:
    """List stock levels."""
    items = await store.list_items(search=search, limit=paging.size, offset=paging.offset)
    return PageResponse[InventoryItemResponse](
        items=_items_to_response(items),
        total=await store.count_items(search=search),
        page=paging.page,
        size=paging.size,
    )


@router.post(
    "",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def upsert_inventory_item(
    request: UpsertInventoryItemRequest,
    current_user: CurrentUser = Depends(get_current_user),
    use_case: UpsertInventoryItemUseCase = Depends(get_upsert_inventory_use_case),
) -> InventoryItemResponse:
    """Create or update the stock record for a (product, warehouse) pair."""
    item = await use_case.execute(request, current_user)
    return use_case.to_response(item)


@router.get("/low-stock", response_model=list[InventoryItemResponse])
async def list_low_stock(
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryItemResponse]:
    """Items at or below their product's safety stock."""
    return _items_to_response(await store.list_low_stock())


@router.get("/out-of-stock", response_model=list[InventoryItemResponse])
async def list_out_of_stock(
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryItemResponse]:
    """Items with nothing available."""
    return _items_to_response(await store.list_out_of_stock())


@router.get("/warehouse/{warehouse_id}", response_model=list[InventoryItemResponse])
async def list_by_warehouse(
    warehouse_id: str,
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryItemResponse]:
    """Stock held in one warehouse."""
    return _items_to_response(await store.list_by_warehouse(warehouse_id))


@router.get("/product/{product_id}", response_model=list[InventoryItemResponse])
async def list_by_product(
    product_id: str,
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryItemResponse]:
    """Stock of one product across warehouses."""
    return _items_to_response(await store.list_by_product(product_id))


@router.get(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_inventory_item(
    item_id: str,
    store: IInventoryStore = Depends(get_inv_store),
) -> InventoryItemResponse:
    """Get inventory item by ID."""
    item = await store.get_item(item_id)
    if item is None:
        raise InventoryItemNotFoundError(item_id)
    return InventoryItemResponse.model_validate(item)


@router.post(
    "/{item_id}/adjust",
    response_model=InventoryItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def adjust_stock(
    item_id: str,
    request: AdjustStockRequest,
    current_user: CurrentUser = Depends(get_current_user),
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> InventoryItemResponse:
    """Set the on-hand quantity; the delta is recorded as a movement."""
    result = await use_case.execute(item_id, request, current_user)
    return use_case.to_response(result)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_inventory_item(
    item_id: str,
    store: IInventoryStore = Depends(get_inv_store),
) -> Response:
    """Delete an inventory item that has no movement history."""
    if not await store.delete_item(item_id):
        raise InventoryItemNotFoundError(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
