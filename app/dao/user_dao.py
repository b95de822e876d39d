from typing import Optional
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.dao.base_dao import BaseDAO
from app.models.user import User
from app.core.security import verify_password
import structlog

logger = structlog.get_logger()


class UserDAO(BaseDAO[User]):
    def __init__(self):
        super().__init__(User)

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error getting user by email", email=email, error=str(e))
            raise

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.username == username))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error getting user by username", username=username, error=str(e))
            raise

    async def get_by_employee_id(self, db: AsyncSession, employee_id: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.employeeId == employee_id))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error getting user by employee id", employee_id=employee_id, error=str(e))
            raise

    async def authenticate_user(self, db: AsyncSession, email: str, password: str) -> Optional[User]:
        user = await self.get_by_email(db, email)
        if not user:
            logger.warning("Authentication failed: user not found", email=email)
            return None
        if not verify_password(password, user.password):
            logger.warning("Authentication failed: wrong password", email=email)
            return None
        if not user.isActive:
            logger.warning("Authentication failed: user deactivated", email=email)
            return None
        return user


user_dao = UserDAO()
