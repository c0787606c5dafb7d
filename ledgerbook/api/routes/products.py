"""Inventory endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from ledgerbook.api.dependencies import (
    get_add_product_use_case,
    get_delete_product_use_case,
    get_product_store,
    get_update_product_use_case,
)
from ledgerbook.application.dto.requests import CreateProductRequest, UpdateProductRequest
from ledgerbook.application.dto.responses import (
    ErrorResponse,
    ProductListResponse,
    ProductResponse,
    product_response,
)
from ledgerbook.application.use_cases import (
    AddProductUseCase,
    DeleteProductUseCase,
    UpdateProductUseCase,
)
from ledgerbook.infrastructure.storage.sqlite import SQLiteInventoryStore

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    store: SQLiteInventoryStore = Depends(get_product_store),
) -> ProductListResponse:
    """List all products in the order they were added."""
    products = await store.list_products()
    return ProductListResponse(
        products=[product_response(p) for p in products],
        total=len(products),
    )


@router.get("/available", response_model=ProductListResponse)
async def list_available_products(
    store: SQLiteInventoryStore = Depends(get_product_store),
) -> ProductListResponse:
    """List products that can be added to a draft (stock above zero)."""
    products = await store.list_available()
    return ProductListResponse(
        products=[product_response(p) for p in products],
        total=len(products),
    )


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def add_product(
    request: CreateProductRequest,
    use_case: AddProductUseCase = Depends(get_add_product_use_case),
) -> ProductResponse:
    """Add a product; the server assigns its ID."""
    product = await use_case.execute(request)
    return use_case.to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_product(
    product_id: str,
    request: UpdateProductRequest,
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
) -> ProductResponse:
    """Replace a product's name, price and stock."""
    product = await use_case.execute(product_id, request)
    return use_case.to_response(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: str,
    use_case: DeleteProductUseCase = Depends(get_delete_product_use_case),
) -> Response:
    """Delete a product. Saved documents are not affected."""
    await use_case.execute(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
