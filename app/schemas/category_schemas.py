from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class CategoryCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str]
    isActive: bool
    createdAt: datetime

    class Config:
        from_attributes = True


class CategoryEnvelope(BaseModel):
    success: bool = True
    data: CategoryResponse


class CategoryListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: List[CategoryResponse]
