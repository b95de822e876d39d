from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_async_session
from app.core.security import Identity, authorize
from app.models.enums import UserRole
from app.schemas.auth_schemas import RoleUpdateRequest, UserProfileResponse
from app.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.patch("/{user_id}/role", response_model=UserProfileResponse)
async def change_user_role(
    user_id: str,
    request: RoleUpdateRequest,
    identity: Identity = Depends(authorize(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_async_session)
):
    """Promote or demote a user"""
    profile = await user_service.change_role(db, user_id, request)
    return UserProfileResponse(data=profile)
