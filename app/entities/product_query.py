"""
ProductQuery value object.

Holds the filters, sort order and page requested for a product listing. Raw
query-string values are coerced once in ``from_params``; the DAO translates a
validated instance into SQL.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional
from app.models.enums import ProductSort

# Largest OFFSET a 64-bit SQL integer can hold
MAX_OFFSET = 2 ** 63 - 1


def _parse_decimal(raw: Optional[str]) -> Optional[Decimal]:
    """Parse a price bound; anything non-numeric is treated as absent."""
    if raw is None:
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def _parse_positive_int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value >= 1 else default


def _parse_sort(raw: Optional[str]) -> ProductSort:
    if not raw:
        return ProductSort.NEWEST
    try:
        return ProductSort(raw.strip())
    except ValueError:
        return ProductSort.NEWEST


@dataclass(frozen=True)
class ProductQuery:
    category_id: Optional[str] = None
    search: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    sort: ProductSort = ProductSort.NEWEST
    page: int = 1
    page_size: int = 10

    @classmethod
    def from_params(
        cls,
        category: Optional[str] = None,
        search: Optional[str] = None,
        min_price: Optional[str] = None,
        max_price: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> "ProductQuery":
        """
        Build a query from raw request parameters.

        Args:
            category: Category id to filter on
            search: Case-insensitive substring of the product name
            min_price, max_price: Inclusive price bounds, ignored when not numeric
            sort: One of ``price``, ``-price``, ``name``; anything else sorts newest first
            page: 1-based page number, falls back to 1
            limit: Page size, falls back to ``default_page_size`` and is capped at ``max_page_size``
        """
        page_size = min(_parse_positive_int(limit, default_page_size), max_page_size)
        return cls(
            category_id=category.strip() if category and category.strip() else None,
            search=search.strip() if search and search.strip() else None,
            min_price=_parse_decimal(min_price),
            max_price=_parse_decimal(max_price),
            sort=_parse_sort(sort),
            page=_parse_positive_int(page, 1),
            page_size=page_size,
        )

    @property
    def offset(self) -> int:
        """Rows to skip. Pages beyond the store's integer range are simply past the end."""
        return min((self.page - 1) * self.page_size, MAX_OFFSET)

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.page_size)
