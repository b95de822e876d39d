from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from sqlalchemy import DateTime
import uuid
from .timestamps import utc_now


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True, nullable=False)
    name: str = Field(nullable=False, unique=True, index=True)
    slug: str = Field(nullable=False, index=True)
    description: Optional[str] = None
    isActive: bool = Field(default=True, nullable=False)
    createdAt: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)
    updatedAt: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)
