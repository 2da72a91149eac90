"""
Products service implementation.

Listing with filters and pagination, single-record CRUD with explicit
validation, and inventory statistics.
"""

import logging
import math
from typing import Optional, Any

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from modules.auth.repository import UserRepository

from .exceptions import (
    InvalidProductIdError,
    ProductNotFoundError,
    ProductValidationError,
)
from .interfaces import IProductService
from .models import (
    CategoryStat,
    LOW_STOCK_THRESHOLD,
    Product,
    ProductCreator,
    ProductInput,
    ProductListResponse,
    ProductQuery,
    ProductStats,
)
from .repository import ProductRepository
from .sku import generate_sku
from .validation import normalize_product, validate_product

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
SORTABLE_FIELDS = ("name", "quantity", "price", "category", "sku", "createdAt", "updatedAt")


def coerce_positive_int(value: Any, default: int) -> int:
    """Parse value as a positive integer, falling back to default."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_sort(spec: Optional[str]) -> list[tuple[str, int]]:
    """
    Parse a sort spec into pymongo sort keys.

    "-price,name" sorts by price descending then name ascending. Unknown
    fields are dropped; if nothing remains the default (newest first) applies.
    """
    keys: list[tuple[str, int]] = []
    for token in (spec or "").replace(",", " ").split():
        direction = DESCENDING if token.startswith("-") else ASCENDING
        field = token.lstrip("+-")
        if field in SORTABLE_FIELDS and field not in (k for k, _ in keys):
            keys.append((field, direction))
    return keys or [("createdAt", DESCENDING)]


class ProductService(IProductService):
    """
    Product service over MongoDB.

    Implements IProductService. Creators are resolved through the user
    repository in one batched lookup per request.
    """

    def __init__(self, repository: ProductRepository, users: UserRepository):
        self._repository = repository
        self._users = users

    async def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
        sort: Optional[str] = None,
    ) -> ProductListResponse:
        """List products with filtering, sorting and pagination."""
        query = ProductQuery(
            page=coerce_positive_int(page, DEFAULT_PAGE),
            limit=min(coerce_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT),
            category=category or None,
            search=search or None,
            sort=parse_sort(sort),
        )

        docs, total = self._repository.find_page(query)

        return ProductListResponse(
            products=self._resolve(docs),
            total_pages=math.ceil(total / query.limit),
            current_page=query.page,
            total=total,
        )

    async def get_product(self, product_id: str) -> Product:
        """Get a product by id with its creator."""
        oid = self._parse_id(product_id)
        doc = self._repository.get_by_id(oid)
        if doc is None:
            raise ProductNotFoundError(product_id)
        return self._resolve([doc])[0]

    async def create_product(self, data: ProductInput, user_id: str) -> Product:
        """Validate, stamp the owner, fill in the SKU and insert."""
        fields = normalize_product(data.model_dump())

        errors = validate_product(fields)
        if errors:
            raise ProductValidationError(errors)

        if not fields.get("sku"):
            fields["sku"] = generate_sku(fields["category"])
        if fields.get("description") is None:
            fields.pop("description", None)

        doc = self._repository.insert({
            **fields,
            "createdBy": ObjectId(user_id),
        })
        logger.info("User %s created product %s (%s)", user_id, doc["_id"], doc["sku"])
        return self._resolve([doc])[0]

    async def update_product(self, product_id: str, data: ProductInput) -> Product:
        """Merge the supplied fields over the stored product and replace it."""
        oid = self._parse_id(product_id)
        existing = self._repository.get_by_id(oid)
        if existing is None:
            raise ProductNotFoundError(product_id)

        changes = normalize_product(data.supplied_fields())
        # An empty SKU keeps the stored one
        if not changes.get("sku"):
            changes.pop("sku", None)

        errors = validate_product(changes, fields=changes.keys())
        if errors:
            raise ProductValidationError(errors)

        doc = self._repository.replace(oid, {**existing, **changes})
        if doc is None:
            raise ProductNotFoundError(product_id)
        return self._resolve([doc])[0]

    async def delete_product(self, product_id: str) -> None:
        """Delete a product by id."""
        oid = self._parse_id(product_id)
        if not self._repository.delete(oid):
            raise ProductNotFoundError(product_id)
        logger.info("Deleted product %s", product_id)

    async def get_stats(self) -> ProductStats:
        """Compute the inventory overview."""
        breakdown = self._repository.category_breakdown()
        return ProductStats(
            total_products=self._repository.count_all(),
            total_value=self._repository.total_value(),
            category_stats=[
                CategoryStat(category=row["_id"], count=row["count"], value=row["value"])
                for row in breakdown
            ],
            low_stock=self._repository.count_low_stock(LOW_STOCK_THRESHOLD),
        )

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_id(product_id: str) -> ObjectId:
        oid = ProductRepository.parse_object_id(product_id)
        if oid is None:
            raise InvalidProductIdError(product_id)
        return oid

    def _resolve(self, docs: list[dict]) -> list[Product]:
        """Map documents to Products, resolving createdBy to name and email."""
        creators = self._users.get_many([d.get("createdBy") for d in docs])
        return [self._map_to_product(d, creators) for d in docs]

    @staticmethod
    def _map_to_product(doc: dict[str, Any], creators: dict) -> Product:
        creator_id = str(doc.get("createdBy", ""))
        creator = creators.get(creator_id)
        return Product(
            id=str(doc["_id"]),
            name=doc["name"],
            quantity=doc["quantity"],
            price=doc["price"],
            category=doc["category"],
            description=doc.get("description"),
            sku=doc.get("sku", ""),
            created_by=ProductCreator(
                id=creator_id,
                name=creator.name if creator else None,
                email=creator.email if creator else None,
            ),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )
