"""
Shared infrastructure for Stockroom backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: MongoDB client factory and store health handle
- exceptions: Base exception classes
- repository: Base repository over a MongoDB collection

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import StoreHealth, get_database, get_mongo_client, reset_client_cache
from .exceptions import (
    StockroomError,
    NotFoundError,
    ValidationError,
    InvalidArgumentError,
    ConflictError,
    AuthenticationError,
    StoreUnavailableError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "StoreHealth",
    "get_database",
    "get_mongo_client",
    "reset_client_cache",
    "StockroomError",
    "NotFoundError",
    "ValidationError",
    "InvalidArgumentError",
    "ConflictError",
    "AuthenticationError",
    "StoreUnavailableError",
    "AuthenticatedUser",
]
