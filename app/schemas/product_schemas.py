from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from decimal import Decimal
from datetime import datetime


def _strip_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("name must not be blank")
    return value


class ProductCreateRequest(BaseModel):
    name: str = Field(max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    costPrice: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    categories: List[str] = Field(default_factory=list)
    stock: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value):
        return _strip_name(value)


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    costPrice: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    categories: Optional[List[str]] = None
    stock: Optional[int] = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value):
        return _strip_name(value)


class CategorySummary(BaseModel):
    id: str
    name: str
    slug: str

    class Config:
        from_attributes = True


class SellerSummary(BaseModel):
    id: str
    username: str
    fullName: str

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str]
    price: float
    costPrice: Optional[float]
    stock: int
    categories: List[CategorySummary]
    seller: Optional[SellerSummary]
    soldCount: int
    viewCount: int
    avgRating: float
    reviewCount: int
    isActive: bool
    createdAt: datetime
    updatedAt: datetime

    class Config:
        from_attributes = True


class ProductEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    success: bool = True
    count: int
    total: int
    totalPages: int
    currentPage: int
    data: List[ProductResponse]
