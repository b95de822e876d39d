from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.database import get_async_session
from app.core.security import Identity, authorize
from app.entities.product_query import ProductQuery
from app.models.enums import UserRole
from app.schemas.common import APIResponse
from app.schemas.product_schemas import (
    ProductCreateRequest,
    ProductEnvelope,
    ProductListEnvelope,
    ProductUpdateRequest,
)
from app.services.product_service import product_service

router = APIRouter(prefix="/products", tags=["Products"])

seller_or_admin = authorize(UserRole.ADMIN, UserRole.SALE)


@router.get("", response_model=ProductListEnvelope)
async def get_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    min_price: Optional[str] = Query(default=None, alias="minPrice"),
    max_price: Optional[str] = Query(default=None, alias="maxPrice"),
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session)
):
    """List active products with filters, search, sort and pagination"""
    # Raw strings: malformed numbers fall back to defaults instead of failing the request
    query = ProductQuery.from_params(
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        page=page,
        limit=limit,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    return await product_service.list_products(db, query)


@router.get("/mine", response_model=ProductListEnvelope)
async def get_my_products(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    identity: Identity = Depends(seller_or_admin),
    db: AsyncSession = Depends(get_async_session)
):
    """List the caller's own products, including deleted ones"""
    paging = ProductQuery.from_params(
        page=page,
        limit=limit,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    return await product_service.list_seller_products(db, identity, paging.page, paging.page_size)


@router.get("/{product_id}", response_model=ProductEnvelope)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_async_session)
):
    product = await product_service.get_product(db, product_id)
    return ProductEnvelope(data=product)


@router.post("", response_model=ProductEnvelope, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreateRequest,
    identity: Identity = Depends(seller_or_admin),
    db: AsyncSession = Depends(get_async_session)
):
    """Create a product owned by the caller"""
    created = await product_service.create_product(db, product.model_dump(), identity)
    return ProductEnvelope(data=created)


@router.put("/{product_id}", response_model=ProductEnvelope)
async def update_product(
    product_id: str,
    product_update: ProductUpdateRequest,
    identity: Identity = Depends(seller_or_admin),
    db: AsyncSession = Depends(get_async_session)
):
    """Update a product; only its seller or an admin may do so"""
    update_data = product_update.model_dump(exclude_unset=True)
    updated = await product_service.update_product(db, product_id, update_data, identity)
    return ProductEnvelope(data=updated)


@router.delete("/{product_id}", response_model=APIResponse)
async def delete_product(
    product_id: str,
    identity: Identity = Depends(seller_or_admin),
    db: AsyncSession = Depends(get_async_session)
):
    """Soft delete a product; only its seller or an admin may do so"""
    await product_service.delete_product(db, product_id, identity)
    return APIResponse(message="Product deleted successfully")
