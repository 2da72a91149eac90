"""
Product API endpoints.

Provides REST endpoints for product CRUD, listing and statistics.
All routes require a bearer token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_product_service
from api.middleware.auth import get_current_user
from api.models.common import MessageResponse
from shared.models import AuthenticatedUser

from .interfaces import IProductService
from .models import (
    Product,
    ProductInput,
    ProductListResponse,
    ProductMutationResponse,
    ProductStats,
)

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=ProductListResponse)
async def list_products(
    page: Optional[str] = Query(default=None, description="Page number (1-indexed)"),
    limit: Optional[str] = Query(default=None, description="Items per page"),
    category: Optional[str] = Query(default=None, description="Category, or 'all'"),
    search: Optional[str] = Query(default=None, description="Substring of name, description or SKU"),
    sort: Optional[str] = Query(default=None, description="Sort spec, e.g. '-createdAt'"),
    service: IProductService = Depends(get_product_service),
) -> ProductListResponse:
    """
    List products.

    Page and limit are taken as raw strings and coerced by the service,
    so junk values fall back to the defaults instead of failing.
    """
    return await service.list_products(
        category=category,
        search=search,
        page=page,
        limit=limit,
        sort=sort,
    )


# Registered before /{product_id} so "stats" is not taken for an id
@router.get("/stats/overview", response_model=ProductStats)
async def get_stats(
    service: IProductService = Depends(get_product_service),
) -> ProductStats:
    """Inventory totals, category breakdown and low-stock count."""
    return await service.get_stats()


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    service: IProductService = Depends(get_product_service),
) -> Product:
    """Get a single product with its creator."""
    return await service.get_product(product_id)


@router.post("", response_model=ProductMutationResponse, status_code=201)
async def create_product(
    request: ProductInput,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProductService = Depends(get_product_service),
) -> ProductMutationResponse:
    """Create a product owned by the caller."""
    product = await service.create_product(request, user.id)
    return ProductMutationResponse(message="Product created successfully", product=product)


@router.put("/{product_id}", response_model=ProductMutationResponse)
async def update_product(
    product_id: str,
    request: ProductInput,
    service: IProductService = Depends(get_product_service),
) -> ProductMutationResponse:
    """Update a product. Omitted fields keep their stored values."""
    product = await service.update_product(product_id, request)
    return ProductMutationResponse(message="Product updated successfully", product=product)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    service: IProductService = Depends(get_product_service),
) -> MessageResponse:
    """Permanently delete a product."""
    await service.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")
