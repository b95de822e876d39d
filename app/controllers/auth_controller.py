from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_async_session
from app.core.security import Identity, protect
from app.schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserProfileResponse,
)
from app.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """Create a user account"""
    user = await auth_service.register(db, request)
    return RegisterResponse(data=user)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """Exchange email and password for a bearer token"""
    token = await auth_service.login(db, request.email, request.password)
    return LoginResponse(token=token)


@router.get("/me", response_model=UserProfileResponse)
async def read_current_user(
    identity: Identity = Depends(protect),
    db: AsyncSession = Depends(get_async_session)
):
    profile = await auth_service.get_profile(db, identity)
    return UserProfileResponse(data=profile)
