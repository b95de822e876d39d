# Import all models for easy access
from .enums import UserRole, ProductSort
from .user import User
from .category import Category
from .product import Product, ProductCategoryLink

__all__ = [
    "UserRole", "ProductSort",
    "User",
    "Category",
    "Product", "ProductCategoryLink",
]
