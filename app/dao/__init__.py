# Export all DAO classes
from .base_dao import BaseDAO
from .user_dao import user_dao, UserDAO
from .category_dao import category_dao, CategoryDAO
from .product_dao import product_dao, ProductDAO

__all__ = [
    "BaseDAO",
    "user_dao",
    "UserDAO",
    "category_dao",
    "CategoryDAO",
    "product_dao",
    "ProductDAO",
]
