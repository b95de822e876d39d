from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_async_session
from app.core.security import Identity, authorize
from app.models.enums import UserRole
from app.schemas.category_schemas import CategoryCreateRequest, CategoryEnvelope, CategoryListEnvelope
from app.services.category_service import category_service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=CategoryListEnvelope)
async def get_categories(db: AsyncSession = Depends(get_async_session)):
    categories = await category_service.list_categories(db)
    return CategoryListEnvelope(count=len(categories), data=categories)


@router.post("", response_model=CategoryEnvelope, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: CategoryCreateRequest,
    identity: Identity = Depends(authorize(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_async_session)
):
    created = await category_service.create_category(db, category)
    return CategoryEnvelope(data=created)


@router.delete("/{category_id}", response_model=CategoryEnvelope)
async def deactivate_category(
    category_id: str,
    identity: Identity = Depends(authorize(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_async_session)
):
    """Deactivate a category; products can no longer reference it"""
    category = await category_service.deactivate_category(db, category_id)
    return CategoryEnvelope(data=category)
