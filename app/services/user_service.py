from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import AppError, NotFoundError, StoreError, ValidationError
from app.dao.user_dao import UserDAO, user_dao
from app.models.enums import UserRole
from app.schemas.auth_schemas import RoleUpdateRequest, UserProfile
import structlog

logger = structlog.get_logger()


class UserService:
    def __init__(self, user_dao: UserDAO = user_dao):
        self.user_dao = user_dao

    async def change_role(self, db: AsyncSession, user_id: str, request: RoleUpdateRequest) -> UserProfile:
        """Set a user's role. Employee id and commission rate only apply to sellers."""
        is_sale = request.role == UserRole.SALE
        if not is_sale and (request.employeeId is not None or request.commissionRate is not None):
            raise ValidationError("employeeId and commissionRate are only valid for role 'sale'")

        try:
            user = await self.user_dao.get_by_id(db, user_id)
            if not user:
                raise NotFoundError("User not found")

            if not is_sale:
                # Sale-only fields do not survive a move to another role
                user.employeeId = None
                user.commissionRate = 0
            if request.employeeId is not None:
                holder = await self.user_dao.get_by_employee_id(db, request.employeeId)
                if holder and holder.id != user.id:
                    raise ValidationError("Employee id already assigned")
                user.employeeId = request.employeeId
            if request.commissionRate is not None:
                user.commissionRate = request.commissionRate

            user.role = request.role
            user = await self.user_dao.save(db, user)
            logger.info("User role changed", user_id=user_id, role=request.role.value)
            return UserProfile.model_validate(user)

        except AppError:
            raise
        except IntegrityError:
            raise ValidationError("Employee id already assigned")
        except SQLAlchemyError as e:
            logger.error("Error changing user role", user_id=user_id, error=str(e))
            raise StoreError(str(e))


user_service = UserService()
