"""Supplier endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from smartsupply.api.dependencies import (
    PageParams,
    get_manage_suppliers_use_case,
    get_page_params,
    get_supp_store,
)
from smartsupply.application.dto.requests import CreateSupplierRequest
from smartsupply.application.dto.responses import (
    ErrorResponse,
    PageResponse,
    SupplierResponse,
)
from smartsupply.application.use_cases import ManageSuppliersUseCase
from smartsupply.core.exceptions import SupplierNotFoundError
from smartsupply.core.interfaces import ISupplierStore

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.get("", response_model=PageResponse[SupplierResponse])
async def list_suppliers(
    search: str | None = Query(default=None, description="Match on name or email"),
    paging: PageParams = Depends(get_page_params),
    store: ISupplierStore = Depends(get_supp_store),
) -> PageResponse[SupplierResponse]:
    """List suppliers ordered by name."""
    suppliers = await store.list_suppliers(
        search=search, limit=paging.size, offset=paging.offset
    )
    return PageResponse[SupplierResponse](
        items=[SupplierResponse.model_validate(s) for s in suppliers],
        total=await store.count_suppliers(search=search),
        page=paging.page,
        size=paging.size,
    )


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_supplier(
    request: CreateSupplierRequest,
    use_case: ManageSuppliersUseCase = Depends(get_manage_suppliers_use_case),
) -> SupplierResponse:
    """Create a supplier."""
    return SupplierResponse.model_validate(await use_case.create(request))


@router.get(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_supplier(
    supplier_id: str,
    store: ISupplierStore = Depends(get_supp_store),
) -> SupplierResponse:
    """Get supplier by ID."""
    supplier = await store.get_supplier(supplier_id)
    if supplier is None:
        raise SupplierNotFoundError(supplier_id)
    return SupplierResponse.model_validate(supplier)


@router.put(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_supplier(
    supplier_id: str,
    request: CreateSupplierRequest,
    use_case: ManageSuppliersUseCase = Depends(get_manage_suppliers_use_case),
) -> SupplierResponse:
    """Replace a supplier's fields."""
    return SupplierResponse.model_validate(await use_case.update(supplier_id, request))


@router.delete(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_supplier(
    supplier_id: str,
    use_case: ManageSuppliersUseCase = Depends(get_manage_suppliers_use_case),
) -> Response:
    """Delete a supplier with no purchase orders."""
    await use_case.delete(supplier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
