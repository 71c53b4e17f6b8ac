"""Inventory movement (audit trail) endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query, status

from smartsupply.api.dependencies import (
    PageParams,
    get_current_user,
    get_inv_store,
    get_page_params,
    get_record_movement_use_case,
)
from smartsupply.application.dto.requests import RecordMovementRequest
from smartsupply.application.dto.responses import (
    ErrorResponse,
    InventoryMovementResponse,
    PageResponse,
)
from smartsupply.application.use_cases import RecordMovementUseCase
from smartsupply.core.entities.inventory import MovementType
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import InvalidInputError, MovementNotFoundError
from smartsupply.core.interfaces import IInventoryStore

router = APIRouter(prefix="/inventory-movements", tags=["inventory-movements"])


def _movements_to_response(movements) -> list[InventoryMovementResponse]:
    return [InventoryMovementResponse.model_validate(m) for m in movements]


@router.get("", response_model=PageResponse[InventoryMovementResponse])
async def list_movements(
    paging: PageParams = Depends(get_page_params),
    store: IInventoryStore = Depends(get_inv_store),
) -> PageResponse[InventoryMovementResponse]:
    """List movements, newest first."""
    movements = await store.list_movements(limit=paging.size, offset=paging.offset)
    return PageResponse[InventoryMovementResponse](
        items=_movements_to_response(movements),
        total=await store.count_movements(),
        page=paging.page,
        size=paging.size,
    )


@router.post(
    "",
    response_model=InventoryMovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_movement(
    request: RecordMovementRequest,
    current_user: CurrentUser = Depends(get_current_user),
    use_case: RecordMovementUseCase = Depends(get_record_movement_use_case),
) -> InventoryMovementResponse:
    """Record a stock movement and apply it to the item."""
    movement = await use_case.execute(request, current_user)
    return use_case.to_response(movement)


@router.get("/date-range", response_model=list[InventoryMovementResponse])
async def list_movements_between(
    start: datetime = Query(..., alias="from", description="Inclusive lower bound"),
    end: datetime = Query(..., alias="to", description="Inclusive upper bound"),
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryMovementResponse]:
    """Movements created within a time window. Naive bounds are read as UTC."""
    start, end = (d if d.tzinfo else d.replace(tzinfo=UTC) for d in (start, end))
    if end < start:
        raise InvalidInputError("to", "must not be before 'from'", end.isoformat())
    return _movements_to_response(await store.list_movements_between(start, end))


@router.get("/inventory-item/{item_id}", response_model=list[InventoryMovementResponse])
async def list_for_item(
    item_id: str,
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryMovementResponse]:
    """History of one inventory item."""
    return _movements_to_response(await store.list_movements_for_item(item_id))


@router.get("/type/{movement_type}", response_model=list[InventoryMovementResponse])
async def list_by_type(
    movement_type: MovementType,
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryMovementResponse]:
    """Movements of one type."""
    return _movements_to_response(await store.list_movements_by_type(movement_type))


@router.get("/product/{product_id}", response_model=list[InventoryMovementResponse])
async def list_for_product(
    product_id: str,
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryMovementResponse]:
    """Movements of one product across warehouses."""
    return _movements_to_response(await store.list_movements_for_product(product_id))


@router.get("/warehouse/{warehouse_id}", response_model=list[InventoryMovementResponse])
async def list_for_warehouse(
    warehouse_id: str,
    store: IInventoryStore = Depends(get_inv_store),
) -> list[InventoryMovementResponse]:
    """Movements in one warehouse."""
    return _movements_to_response(await store.list_movements_for_warehouse(warehouse_id))


@router.get(
    "/{movement_id}",
    response_model=InventoryMovementResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_movement(
    movement_id: str,
    store: IInventoryStore = Depends(get_inv_store),
) -> InventoryMovementResponse:
    """Get movement by ID."""
    movement = await store.get_movement(movement_id)
    if movement is None:
        raise MovementNotFoundError(movement_id)
    return InventoryMovementResponse.model_validate(movement)
