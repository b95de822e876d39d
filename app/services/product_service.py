from typing import List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import AppError, AuthorizationError, NotFoundError, StoreError, ValidationError
from app.core.security import Identity
from app.dao.category_dao import CategoryDAO, category_dao
from app.dao.product_dao import ProductDAO, product_dao
from app.entities.product_query import ProductQuery
from app.models.category import Category
from app.models.product import Product
from app.models.slug import slugify
from app.schemas.product_schemas import ProductListEnvelope, ProductResponse
import structlog

logger = structlog.get_logger()

# Ownership can never be reassigned through an update payload
_IMMUTABLE_FIELDS = ("seller", "sellerId", "id", "slug", "isActive")


class ProductService:
    """Catalog operations: listing, lookup, and owner-checked writes."""

    def __init__(self, product_dao: ProductDAO = product_dao, category_dao: CategoryDAO = category_dao):
        self.product_dao = product_dao
        self.category_dao = category_dao

    async def list_products(self, db: AsyncSession, query: ProductQuery) -> ProductListEnvelope:
        try:
            products, total = await self.product_dao.find_page(db, query)
        except SQLAlchemyError as e:
            logger.error("Error listing products", error=str(e))
            raise StoreError(str(e))

        logger.info("Listed products", count=len(products), total=total, page=query.page)
        return ProductListEnvelope(
            count=len(products),
            total=total,
            totalPages=query.total_pages(total),
            currentPage=query.page,
            data=[ProductResponse.model_validate(p) for p in products],
        )

    async def list_seller_products(
        self, db: AsyncSession, identity: Identity, page: int = 1, page_size: int = 10
    ) -> ProductListEnvelope:
        """Products owned by the caller, including soft-deleted ones."""
        query = ProductQuery(page=page, page_size=page_size)
        try:
            products, total = await self.product_dao.get_by_seller(
                db, identity.user_id, skip=query.offset, limit=query.page_size
            )
        except SQLAlchemyError as e:
            logger.error("Error getting seller products", user_id=identity.user_id, error=str(e))
            raise StoreError(str(e))

        return ProductListEnvelope(
            count=len(products),
            total=total,
            totalPages=query.total_pages(total),
            currentPage=query.page,
            data=[ProductResponse.model_validate(p) for p in products],
        )

    async def get_product(self, db: AsyncSession, product_id: str) -> ProductResponse:
        product = await self._load(db, product_id)
        return ProductResponse.model_validate(product)

    async def create_product(self, db: AsyncSession, data: dict, identity: Identity) -> ProductResponse:
        data = dict(data)
        for field in _IMMUTABLE_FIELDS:
            data.pop(field, None)

        try:
            categories = await self._resolve_categories(db, data.pop("categories", None) or [])
            data["slug"] = slugify(data["name"])
            data["sellerId"] = identity.user_id

            product = await self.product_dao.create_with_categories(db, obj_in=data, categories=categories)
            logger.info("Product created successfully", product_id=product.id, seller_id=identity.user_id)
            return ProductResponse.model_validate(product)

        except AppError:
            raise
        except IntegrityError:
            raise ValidationError("A product with this name already exists")
        except SQLAlchemyError as e:
            logger.error("Error creating product", seller_id=identity.user_id, error=str(e))
            raise StoreError(str(e))

    async def update_product(
        self, db: AsyncSession, product_id: str, data: dict, identity: Identity
    ) -> ProductResponse:
        product = await self._load(db, product_id)
        self._ensure_can_modify(product, identity, action="update")

        data = dict(data)
        for field in _IMMUTABLE_FIELDS:
            data.pop(field, None)

        try:
            categories: Optional[List[Category]] = None
            if data.get("categories") is not None:
                categories = await self._resolve_categories(db, data["categories"])
            data.pop("categories", None)

            if data.get("name") and data["name"] != product.name:
                data["slug"] = slugify(data["name"])

            product = await self.product_dao.update_with_categories(
                db, db_obj=product, obj_in=data, categories=categories
            )
            logger.info("Product updated successfully", product_id=product_id, user_id=identity.user_id)
            return ProductResponse.model_validate(product)

        except AppError:
            raise
        except IntegrityError:
            raise ValidationError("A product with this name already exists")
        except SQLAlchemyError as e:
            logger.error("Error updating product", product_id=product_id, user_id=identity.user_id, error=str(e))
            raise StoreError(str(e))

    async def delete_product(self, db: AsyncSession, product_id: str, identity: Identity) -> None:
        """Soft delete. Deleting an already inactive product succeeds again."""
        product = await self._load(db, product_id)
        self._ensure_can_modify(product, identity, action="delete")

        try:
            product.isActive = False
            await self.product_dao.save(db, product)
            logger.info("Product deleted successfully", product_id=product_id, user_id=identity.user_id)
        except SQLAlchemyError as e:
            logger.error("Error deleting product", product_id=product_id, user_id=identity.user_id, error=str(e))
            raise StoreError(str(e))

    async def _load(self, db: AsyncSession, product_id: str) -> Product:
        try:
            product = await self.product_dao.get_with_relations(db, product_id)
        except SQLAlchemyError as e:
            logger.error("Error getting product", product_id=product_id, error=str(e))
            raise StoreError(str(e))

        if not product:
            logger.warning("Product not found", product_id=product_id)
            raise NotFoundError("Product not found")
        return product

    async def _resolve_categories(self, db: AsyncSession, category_ids: List[str]) -> List[Category]:
        """Load the referenced categories; every one must exist and be active."""
        unique_ids = list(dict.fromkeys(category_ids))
        categories = await self.category_dao.get_active_by_ids(db, unique_ids)
        if len(categories) != len(unique_ids):
            missing = len(unique_ids) - len(categories)
            raise ValidationError(f"{missing} of {len(unique_ids)} categories are invalid or inactive")
        return categories

    @staticmethod
    def _ensure_can_modify(product: Product, identity: Identity, action: str) -> None:
        if identity.is_admin or product.sellerId == identity.user_id:
            return
        logger.warning(
            f"Unauthorized product {action} attempt",
            product_id=product.id,
            user_id=identity.user_id,
        )
        raise AuthorizationError(f"Not authorized to {action} this product")


product_service = ProductService()
