"""
Product repository for database access.

Encapsulates all queries against the `products` collection: filtered and
paginated listing, id lookups, writes, and the statistics aggregations.
The creator is resolved by the service, not here.
"""

import re
from datetime import datetime, timezone
from typing import Optional, Any

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from shared.repository import BaseRepository
from .exceptions import DuplicateSkuError
from .models import LOW_STOCK_THRESHOLD, ProductQuery

# Search matches these fields (logical OR)
SEARCH_FIELDS = ("name", "description", "sku")

# skip() goes to the server as a signed 64-bit integer
MAX_SKIP = 2**63 - 1


class ProductRepository(BaseRepository[dict]):
    """
    Repository for product data access.

    Methods return raw documents; mapping to Product happens in the service
    once creators are resolved.

    Note: This repository does NOT perform authorization checks.
    """

    collection_name = "products"

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @staticmethod
    def build_filter(category: Optional[str], search: Optional[str]) -> dict[str, Any]:
        """
        Build the find filter for a listing.

        A category of "all" (or none) disables the category filter; search
        is a literal, case-insensitive substring.
        """
        query: dict[str, Any] = {}
        if category and category != "all":
            query["category"] = category
        if search:
            pattern = re.escape(search)
            query["$or"] = [
                {field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS
            ]
        return query

    def find_page(self, query: ProductQuery) -> tuple[list[dict], int]:
        """
        Fetch one page of products and the total matching count.

        Returns:
            (documents on the page, total matching documents)
        """
        mongo_filter = self.build_filter(query.category, query.search)
        skip = (query.page - 1) * query.limit
        total = self._collection.count_documents(mongo_filter)

        # Past the end of any collection
        if skip > MAX_SKIP:
            return [], total

        cursor = (
            self._collection.find(mongo_filter)
            .sort(query.sort)
            .skip(skip)
            .limit(query.limit)
        )
        return list(cursor), total

    def get_by_id(self, product_id: ObjectId) -> Optional[dict]:
        return self._collection.find_one({"_id": product_id})

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, data: dict[str, Any]) -> dict:
        """
        Insert a product document.

        Raises:
            DuplicateSkuError: If the SKU is taken
        """
        now = datetime.now(timezone.utc)
        doc = {**data, "createdAt": now, "updatedAt": now}
        try:
            result = self._collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise DuplicateSkuError(doc.get("sku", "")) from e
        doc["_id"] = result.inserted_id
        return doc

    def replace(self, product_id: ObjectId, data: dict[str, Any]) -> Optional[dict]:
        """
        Overwrite a whole product document.

        The caller passes the merged document, including the stored
        createdBy and createdAt.

        Returns:
            The stored document, or None if it no longer exists.

        Raises:
            DuplicateSkuError: If the new SKU is taken
        """
        doc = {key: value for key, value in data.items() if key != "_id"}
        doc["updatedAt"] = datetime.now(timezone.utc)

        try:
            return self._collection.find_one_and_replace(
                {"_id": product_id},
                doc,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise DuplicateSkuError(doc.get("sku", "")) from e

    def delete(self, product_id: ObjectId) -> bool:
        """Delete a product. Returns False if nothing matched."""
        result = self._collection.delete_one({"_id": product_id})
        return result.deleted_count > 0

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def count_all(self) -> int:
        return self._collection.count_documents({})

    def total_value(self) -> float:
        """Sum of quantity * price over all products."""
        result = list(self._collection.aggregate([
            {"$group": {"_id": None, "total": {"$sum": {"$multiply": ["$quantity", "$price"]}}}},
        ]))
        return result[0]["total"] if result else 0

    def category_breakdown(self) -> list[dict]:
        """Per-category count and value, largest count first."""
        return list(self._collection.aggregate([
            {"$group": {
                "_id": "$category",
                "count": {"$sum": 1},
                "value": {"$sum": {"$multiply": ["$quantity", "$price"]}},
            }},
            {"$sort": {"count": -1, "_id": 1}},
        ]))

    def count_low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> int:
        return self._collection.count_documents({"quantity": {"$lt": threshold}})

    def ensure_indexes(self) -> list[str]:
        """Create the SKU uniqueness index. Returns the index names."""
        return [
            self._collection.create_index(
                [("sku", ASCENDING)],
                unique=True,
                sparse=True,
                name="sku_unique",
            ),
        ]
