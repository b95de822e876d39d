from typing import List, Optional, Sequence
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.dao.base_dao import BaseDAO
from app.models.category import Category
import structlog

logger = structlog.get_logger()


class CategoryDAO(BaseDAO[Category]):
    def __init__(self):
        super().__init__(Category)

    async def get_active(self, db: AsyncSession) -> List[Category]:
        try:
            result = await db.execute(
                select(Category)
                .where(Category.isActive == True)
                .order_by(Category.name.asc())
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error getting active categories", error=str(e))
            raise

    async def get_active_by_ids(self, db: AsyncSession, ids: Sequence[str]) -> List[Category]:
        if not ids:
            return []
        try:
            result = await db.execute(
                select(Category)
                .where(Category.id.in_(list(ids)))
                .where(Category.isActive == True)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error getting categories by ids", count=len(ids), error=str(e))
            raise

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Category]:
        try:
            result = await db.execute(select(Category).where(Category.name == name))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error getting category by name", name=name, error=str(e))
            raise


category_dao = CategoryDAO()
