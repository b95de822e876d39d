from typing import List
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import AppError, NotFoundError, StoreError, ValidationError
from app.dao.category_dao import CategoryDAO, category_dao
from app.models.slug import slugify
from app.schemas.category_schemas import CategoryCreateRequest, CategoryResponse
import structlog

logger = structlog.get_logger()


class CategoryService:
    def __init__(self, category_dao: CategoryDAO = category_dao):
        self.category_dao = category_dao

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        try:
            categories = await self.category_dao.get_active(db)
        except SQLAlchemyError as e:
            raise StoreError(str(e))
        return [CategoryResponse.model_validate(c) for c in categories]

    async def create_category(self, db: AsyncSession, request: CategoryCreateRequest) -> CategoryResponse:
        name = request.name.strip()
        if not name:
            raise ValidationError("Category name must not be blank")
        try:
            if await self.category_dao.get_by_name(db, name):
                raise ValidationError("Category already exists")
            category = await self.category_dao.create(
                db, obj_in={"name": name, "slug": slugify(name), "description": request.description}
            )
            logger.info("Category created", category_id=category.id, name=name)
            return CategoryResponse.model_validate(category)
        except AppError:
            raise
        except IntegrityError:
            raise ValidationError("Category already exists")
        except SQLAlchemyError as e:
            logger.error("Error creating category", name=name, error=str(e))
            raise StoreError(str(e))

    async def deactivate_category(self, db: AsyncSession, category_id: str) -> CategoryResponse:
        try:
            category = await self.category_dao.get_by_id(db, category_id)
            if not category:
                raise NotFoundError("Category not found")
            category.isActive = False
            category = await self.category_dao.save(db, category)
            logger.info("Category deactivated", category_id=category_id)
            return CategoryResponse.model_validate(category)
        except AppError:
            raise
        except SQLAlchemyError as e:
            logger.error("Error deactivating category", category_id=category_id, error=str(e))
            raise StoreError(str(e))


category_service = CategoryService()
