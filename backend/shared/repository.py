"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
MongoDB database access and providing shared utilities for data operations.
"""

from typing import Any, Optional, TypeVar, Generic

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.database import Database


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - MongoDB database access via self._db
    - The repository's own collection via self._collection
    - ObjectId parsing shared by all id-based lookups

    Subclasses set collection_name and handle document-to-Pydantic
    mapping internally.

    Example:
        class ProductRepository(BaseRepository[Product]):
            collection_name = "products"

            def get_by_id(self, product_id: ObjectId) -> Optional[dict]:
                return self._collection.find_one({"_id": product_id})
    """

    collection_name: str = ""

    def __init__(self, db: Database) -> None:
        """
        Initialize the repository with a MongoDB database.

        Args:
            db: pymongo Database instance for database operations.
        """
        self._db = db

    @property
    def _collection(self) -> Collection:
        return self._db[self.collection_name]

    @staticmethod
    def parse_object_id(value: Any) -> Optional[ObjectId]:
        """Return value as an ObjectId, or None if it is not a well-formed id."""
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        return None
