from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from app.core.security import PASSWORD_MAX_BYTES
from app.models.enums import UserRole


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    ward: Optional[str] = None
    zipCode: Optional[str] = None


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    fullName: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    address: Optional[Address] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes when UTF-8 encoded")
        return value


class LoginRequest(BaseModel):
    # Malformed emails fail like any other bad credential
    email: str
    password: str


class LoginResponse(BaseModel):
    success: bool = True
    token: str


class UserPublic(BaseModel):
    id: str
    username: str
    email: str

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    success: bool = True
    data: UserPublic


class UserProfile(UserPublic):
    fullName: str
    phone: str
    address: Optional[Address] = None
    role: UserRole
    employeeId: Optional[str] = None
    commissionRate: float
    totalSales: float
    totalOrders: int
    isActive: bool
    isVerified: bool
    createdAt: datetime


class UserProfileResponse(BaseModel):
    success: bool = True
    data: UserProfile


class RoleUpdateRequest(BaseModel):
    role: UserRole
    employeeId: Optional[str] = None
    commissionRate: Optional[float] = Field(default=None, ge=0, le=100)
