"""Warehouse endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from smartsupply.api.dependencies import (
    PageParams,
    get_manage_warehouses_use_case,
    get_page_params,
    get_wh_store,
)
from smartsupply.application.dto.requests import CreateWarehouseRequest
from smartsupply.application.dto.responses import (
    ErrorResponse,
    PageResponse,
    WarehouseResponse,
)
from smartsupply.application.use_cases import ManageWarehousesUseCase
from smartsupply.core.exceptions import WarehouseNotFoundError
from smartsupply.core.interfaces import IWarehouseStore

router = APIRouter(prefix="/warehouses", tags=["warehouses"])


@router.get("", response_model=PageResponse[WarehouseResponse])
async def list_warehouses(
    search: str | None = Query(default=None, description="Match on name or location"),
    paging: PageParams = Depends(get_page_params),
    store: IWarehouseStore = Depends(get_wh_store),
) -> PageResponse[WarehouseResponse]:
    """List warehouses ordered by name."""
    warehouses = await store.list_warehouses(
        search=search, limit=paging.size, offset=paging.offset
    )
    return PageResponse[WarehouseResponse](
        items=[WarehouseResponse.model_validate(w) for w in warehouses],
        total=await store.count_warehouses(search=search),
        page=paging.page,
        size=paging.size,
    )


@router.post(
    "",
    response_model=WarehouseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_warehouse(
    request: CreateWarehouseRequest,
    use_case: ManageWarehousesUseCase = Depends(get_manage_warehouses_use_case),
) -> WarehouseResponse:
    """Create a warehouse. Names are unique."""
    return WarehouseResponse.model_validate(await use_case.create(request))


@router.get(
    "/{warehouse_id}",
    response_model=WarehouseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_warehouse(
    warehouse_id: str,
    store: IWarehouseStore = Depends(get_wh_store),
) -> WarehouseResponse:
    """Get warehouse by ID."""
    warehouse = await store.get_warehouse(warehouse_id)
    if warehouse is None:
        raise WarehouseNotFoundError(warehouse_id)
    return WarehouseResponse.model_validate(warehouse)


@router.put(
    "/{warehouse_id}",
    response_model=WarehouseResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_warehouse(
    warehouse_id: str,
    request: CreateWarehouseRequest,
    use_case: ManageWarehousesUseCase = Depends(get_manage_warehouses_use_case),
) -> WarehouseResponse:
    """Replace a warehouse's fields."""
    return WarehouseResponse.model_validate(await use_case.update(warehouse_id, request))


@router.delete(
    "/{warehouse_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_warehouse(
    warehouse_id: str,
    use_case: ManageWarehousesUseCase = Depends(get_manage_warehouses_use_case),
) -> Response:
    """Delete a warehouse and its inventory items; blocked by movement history."""
    await use_case.delete(warehouse_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
