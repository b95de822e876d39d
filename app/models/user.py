from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, JSON
from typing import Optional
from datetime import datetime
import uuid
from .timestamps import utc_now
from .enums import UserRole


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True, nullable=False)
    username: str = Field(nullable=False, unique=True, index=True)
    email: str = Field(nullable=False, unique=True, index=True)
    password: str = Field(nullable=False)
    fullName: str = Field(nullable=False)
    phone: str = Field(nullable=False)
    address: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    role: UserRole = Field(default=UserRole.USER, nullable=False)

    # Sale-only fields
    employeeId: Optional[str] = Field(default=None, unique=True)
    commissionRate: float = Field(default=0)
    totalSales: float = Field(default=0)
    totalOrders: int = Field(default=0)

    isActive: bool = Field(default=True, nullable=False)
    isVerified: bool = Field(default=False, nullable=False)
    createdAt: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)
    updatedAt: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)
