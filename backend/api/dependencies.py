"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The store health handle lives here too, so route guards read an injected
object rather than process-wide state.
"""

import logging
from typing import TYPE_CHECKING

from fastapi import Depends
from pymongo.errors import PyMongoError

from shared.database import StoreHealth
from shared.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from pymongo.database import Database
    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import UserRepository
    from modules.products.interfaces import IProductService
    from modules.products.repository import ProductRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._store_health = StoreHealth()
        self._database: "Database | None" = None
        self._user_repository: "UserRepository | None" = None
        self._product_repository: "ProductRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._product_service: "IProductService | None" = None

    @property
    def store_health(self) -> StoreHealth:
        """Get the store reachability handle."""
        return self._store_health

    @property
    def database(self) -> "Database":
        """Get the application database handle."""
        if self._database is None:
            from shared.database import get_database
            self._database = get_database()
        return self._database

    @property
    def user_repository(self) -> "UserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            self._user_repository = UserRepository(self.database)
        return self._user_repository

    @property
    def product_repository(self) -> "ProductRepository":
        """Get the product repository instance."""
        if self._product_repository is None:
            from modules.products.repository import ProductRepository
            self._product_repository = ProductRepository(self.database)
        return self._product_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.user_repository)
        return self._auth_service

    @property
    def products(self) -> "IProductService":
        """Get the product service instance."""
        if self._product_service is None:
            from modules.products.service import ProductService
            self._product_service = ProductService(
                repository=self.product_repository,
                users=self.user_repository,
            )
        return self._product_service

    def connect_store(self) -> bool:
        """
        Ping the store once and record the result on the health handle.

        Called from the application lifespan. No retry follows a failure.
        A client that cannot even be built (missing URI, unresolvable SRV
        record) leaves the store offline instead of aborting startup.
        Unique indexes are ensured once the ping succeeds.
        """
        from shared.database import get_mongo_client, get_database

        try:
            client = get_mongo_client()
        except (RuntimeError, PyMongoError) as e:
            logger.warning("MongoDB client unavailable, running in offline mode: %s", e)
            self._store_health.mark_unavailable()
            return False

        if not self._store_health.connect(client):
            return False

        if self._database is None:
            self._database = get_database(client)
        self.ensure_indexes()
        return True

    def ensure_indexes(self) -> None:
        """Create the unique indexes, logging rather than raising on failure."""
        try:
            created = self.user_repository.ensure_indexes()
            created += self.product_repository.ensure_indexes()
        except PyMongoError as e:
            logger.warning("Could not ensure MongoDB indexes: %s", e)
            return
        logger.info("Ensured MongoDB indexes: %s", created)

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._store_health = StoreHealth()
        self._database = None
        self._user_repository = None
        self._product_repository = None
        self._auth_service = None
        self._product_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_store_health() -> StoreHealth:
    """FastAPI dependency for the store health handle."""
    return get_container().store_health


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_product_service() -> "IProductService":
    """FastAPI dependency for product service."""
    return get_container().products


def require_store(health: StoreHealth = Depends(get_store_health)) -> None:
    """
    Router-level guard for store-dependent routes.

    Runs before authentication and before any handler, so an offline store
    is reported without touching the database.
    """
    if not health.is_available():
        raise StoreUnavailableError()
