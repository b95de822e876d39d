from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    SALE = "sale"
    ADMIN = "admin"


class ProductSort(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price"
    PRICE_DESC = "-price"
    NAME_ASC = "name"
