from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from sqlalchemy import DateTime
from decimal import Decimal
import uuid
from .timestamps import utc_now

if TYPE_CHECKING:
    from .category import Category
    from .user import User


class ProductCategoryLink(SQLModel, table=True):
    __tablename__ = "product_categories"

    productId: str = Field(foreign_key="products.id", primary_key=True)
    categoryId: str = Field(foreign_key="categories.id", primary_key=True)


class Product(SQLModel, table=True):
    __tablename__ = "products"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True, nullable=False)
    name: str = Field(nullable=False, index=True)
    slug: str = Field(nullable=False, unique=True, index=True)
    description: Optional[str] = None
    price: Decimal = Field(max_digits=12, decimal_places=2, nullable=False)
    costPrice: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    stock: int = Field(default=0, nullable=False)

    # Owning seller, fixed at creation
    sellerId: str = Field(foreign_key="users.id", nullable=False, index=True)

    soldCount: int = Field(default=0)
    viewCount: int = Field(default=0)
    avgRating: float = Field(default=0)
    reviewCount: int = Field(default=0)

    isActive: bool = Field(default=True, nullable=False, index=True)
    createdAt: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False, index=True)
    updatedAt: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False)

    # Relationships
    categories: List["Category"] = Relationship(link_model=ProductCategoryLink)
    seller: Optional["User"] = Relationship()
