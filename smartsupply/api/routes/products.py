"""Product catalog endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from smartsupply.api.dependencies import (
    PageParams,
    get_manage_products_use_case,
    get_page_params,
    get_prod_store,
)
from smartsupply.application.dto.requests import CreateProductRequest
from smartsupply.application.dto.responses import (
    ErrorResponse,
    PageResponse,
    ProductResponse,
)
from smartsupply.application.use_cases import ManageProductsUseCase
from smartsupply.core.exceptions import ProductNotFoundError
from smartsupply.core.interfaces import IProductStore

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=PageResponse[ProductResponse])
async def list_products(
    search: str | None = Query(default=None, description="Match on SKU or name"),
    paging: PageParams = Depends(get_page_params),
    store: IProductStore = Depends(get_prod_store),
) -> PageResponse[ProductResponse]:
    """List products ordered by name."""
    products = await store.list_products(search=search, limit=paging.size, offset=paging.offset)
    return PageResponse[ProductResponse](
        items=[ProductResponse.model_validate(p) for p in products],
        total=await store.count_products(search=search),
        page=paging.page,
        size=paging.size,
    )


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductResponse:
    """Create a product. SKUs are unique."""
    return ProductResponse.model_validate(await use_case.create(request))


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: str,
    store: IProductStore = Depends(get_prod_store),
) -> ProductResponse:
    """Get product by ID."""
    product = await store.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return ProductResponse.model_validate(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_product(
    product_id: str,
    request: CreateProductRequest,
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductResponse:
    """Replace a product's fields."""
    return ProductResponse.model_validate(await use_case.update(product_id, request))


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: str,
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> Response:
    """Delete a product that no order line or stock record references."""
    await use_case.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
