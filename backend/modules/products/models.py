"""
Products module data models.

These models define the product record, the list and stats envelopes, and
the request payloads. JSON field names are camelCase.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProductCategory(str, Enum):
    """The fixed set of product categories."""

    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    HOME_AND_GARDEN = "Home & Garden"
    SPORTS = "Sports"
    HEALTH = "Health"
    OTHER = "Other"


CATEGORY_VALUES = [c.value for c in ProductCategory]

# Products with quantity strictly below this count as low stock
LOW_STOCK_THRESHOLD = 10


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductCreator(CamelModel):
    """The creating user, resolved from createdBy."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class Product(CamelModel):
    """A stored product with its creator resolved."""

    id: str = Field(..., description="Product ID (ObjectId hex)")
    name: str
    quantity: int
    price: float
    category: str
    description: Optional[str] = None
    sku: str
    created_by: ProductCreator
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductInput(CamelModel):
    """
    Create/update payload.

    Fields are loosely typed on purpose: constraints are checked by
    validation.validate_product so every violation is reported together.
    """

    name: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[float] = None
    category: Optional[str] = None
    description: Optional[str] = None
    sku: Optional[str] = None

    def supplied_fields(self) -> dict[str, Any]:
        """Only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)


class ProductQuery(BaseModel):
    """Normalized list parameters."""

    page: int = 1
    limit: int = 10
    category: Optional[str] = None
    search: Optional[str] = None
    sort: list[tuple[str, int]] = Field(default_factory=list)


class ProductListResponse(CamelModel):
    """One page of products."""

    products: list[Product]
    total_pages: int
    current_page: int
    total: int


class CategoryStat(CamelModel):
    """Count and inventory value of one category."""

    category: str
    count: int
    value: float


class ProductStats(CamelModel):
    """Inventory overview."""

    total_products: int
    total_value: float
    category_stats: list[CategoryStat]
    low_stock: int


class ProductMutationResponse(CamelModel):
    """Response body for create and update."""

    message: str
    product: Product
