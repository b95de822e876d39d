from typing import List, Optional, Tuple
from sqlmodel import select
from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession
from app.dao.base_dao import BaseDAO
from app.entities.product_query import ProductQuery
from app.models.category import Category
from app.models.enums import ProductSort
from app.models.product import Product, ProductCategoryLink
import structlog

logger = structlog.get_logger()

_SORT_COLUMNS = {
    ProductSort.NEWEST: (Product.createdAt.desc(), Product.id.desc()),
    ProductSort.PRICE_ASC: (Product.price.asc(), Product.id.asc()),
    ProductSort.PRICE_DESC: (Product.price.desc(), Product.id.asc()),
    ProductSort.NAME_ASC: (Product.name.asc(), Product.id.asc()),
}


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _with_relations(statement):
    return statement.options(
        selectinload(Product.categories),
        selectinload(Product.seller),
    )


class ProductDAO(BaseDAO[Product]):
    def __init__(self):
        super().__init__(Product)

    def _filters(self, query: ProductQuery) -> list:
        conditions = [Product.isActive == True]
        if query.category_id:
            conditions.append(
                Product.id.in_(
                    select(ProductCategoryLink.productId)
                    .where(ProductCategoryLink.categoryId == query.category_id)
                )
            )
        if query.search:
            conditions.append(Product.name.ilike(_like_pattern(query.search), escape="\\"))
        if query.min_price is not None:
            conditions.append(Product.price >= query.min_price)
        if query.max_price is not None:
            conditions.append(Product.price <= query.max_price)
        return conditions

    async def find_page(self, db: AsyncSession, query: ProductQuery) -> Tuple[List[Product], int]:
        """Return one page of active products matching ``query`` and the total match count."""
        conditions = self._filters(query)
        try:
            total = await db.scalar(
                select(func.count()).select_from(Product).where(*conditions)
            )
            result = await db.execute(
                _with_relations(select(Product))
                .where(*conditions)
                .order_by(*_SORT_COLUMNS[query.sort])
                .offset(query.offset)
                .limit(query.page_size)
            )
            return list(result.scalars().all()), total or 0
        except Exception as e:
            logger.error("Error listing products", query=str(query), error=str(e))
            raise

    async def get_with_relations(self, db: AsyncSession, id: str) -> Optional[Product]:
        try:
            result = await db.execute(
                _with_relations(select(Product))
                .where(Product.id == id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error getting product", product_id=id, error=str(e))
            raise

    async def get_by_seller(
        self, db: AsyncSession, seller_id: str, skip: int = 0, limit: int = 100
    ) -> Tuple[List[Product], int]:
        try:
            total = await db.scalar(
                select(func.count()).select_from(Product).where(Product.sellerId == seller_id)
            )
            result = await db.execute(
                _with_relations(select(Product))
                .where(Product.sellerId == seller_id)
                .order_by(Product.createdAt.desc(), Product.id.desc())
                .offset(skip)
                .limit(limit)
            )
            return list(result.scalars().all()), total or 0
        except Exception as e:
            logger.error("Error getting products by seller", seller_id=seller_id, error=str(e))
            raise

    async def create_with_categories(
        self, db: AsyncSession, *, obj_in: dict, categories: List[Category]
    ) -> Product:
        try:
            product = Product(**obj_in)
            product.categories = categories
            db.add(product)
            await db.commit()
            logger.info("Created Product", id=product.id)
        except Exception as e:
            await db.rollback()
            logger.error("Error creating Product", error=str(e))
            raise
        return await self.get_with_relations(db, product.id)

    async def update_with_categories(
        self, db: AsyncSession, *, db_obj: Product, obj_in: dict,
        categories: Optional[List[Category]] = None
    ) -> Product:
        """Apply field changes and, when given, replace the category set."""
        if categories is not None:
            db_obj.categories = categories
        await self.update(db, db_obj=db_obj, obj_in=obj_in)
        return await self.get_with_relations(db, db_obj.id)


product_dao = ProductDAO()
