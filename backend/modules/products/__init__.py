"""
Products module.

Handles product CRUD, filtered listing and inventory statistics.

Public API:
- IProductService: Interface for product operations
- Product: A product with its creator resolved
- ProductInput: Create/update payload
- ProductListResponse, ProductStats: Listing and statistics envelopes
"""

from .interfaces import IProductService
from .models import (
    Product,
    ProductCreator,
    ProductInput,
    ProductCategory,
    ProductListResponse,
    ProductStats,
    CategoryStat,
    CATEGORY_VALUES,
    LOW_STOCK_THRESHOLD,
)
from .exceptions import (
    ProductNotFoundError,
    InvalidProductIdError,
    DuplicateSkuError,
    ProductValidationError,
)

__all__ = [
    # Interface
    "IProductService",
    # Models
    "Product",
    "ProductCreator",
    "ProductInput",
    "ProductCategory",
    "ProductListResponse",
    "ProductStats",
    "CategoryStat",
    "CATEGORY_VALUES",
    "LOW_STOCK_THRESHOLD",
    # Exceptions
    "ProductNotFoundError",
    "InvalidProductIdError",
    "DuplicateSkuError",
    "ProductValidationError",
]
