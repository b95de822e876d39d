"""
Entities package for the E-Commerce API.
Contains value objects that represent core domain concepts.
"""

from .product_query import ProductQuery

__all__ = ["ProductQuery"]
