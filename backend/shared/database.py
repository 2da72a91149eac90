"""
Database client factory for MongoDB.

Provides the cached pymongo client, the default database handle, and the
StoreHealth handle that tracks whether the store answered the startup ping.
"""

import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import get_settings

logger = logging.getLogger(__name__)

# Module-level client cache
_client: Optional[MongoClient] = None


def get_mongo_client() -> MongoClient:
    """
    Get the shared MongoDB client.

    pymongo connects lazily, so creating the client never blocks; the first
    operation (or StoreHealth.connect) is what reaches the server.

    Returns:
        MongoClient configured from MONGODB_URI
    """
    global _client

    if _client is None:
        settings = get_settings()
        if not settings.mongodb_uri:
            raise RuntimeError(
                "MongoDB configuration missing. "
                "Set the MONGODB_URI environment variable."
            )
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
            tz_aware=True,
        )

    return _client


def get_database(client: Optional[MongoClient] = None) -> Database:
    """
    Get the application database.

    Uses MONGODB_DATABASE when set, otherwise the database named in the URI,
    otherwise "stockroom".
    """
    settings = get_settings()
    if client is None:
        client = get_mongo_client()
    if settings.mongodb_database:
        return client[settings.mongodb_database]
    return client.get_default_database(default="stockroom")


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _client
    if _client is not None:
        _client.close()
    _client = None


class StoreHealth:
    """
    Reachability flag for the document store.

    The flag is set once by connect() at startup. There is no reconnection
    loop: a store that failed the startup ping stays offline until restart.
    """

    def __init__(self, available: bool = False) -> None:
        self._available = available

    def is_available(self) -> bool:
        return self._available

    def mark_available(self) -> None:
        self._available = True

    def mark_unavailable(self) -> None:
        self._available = False

    def connect(self, client: MongoClient) -> bool:
        """
        Ping the server once and record the outcome.

        Args:
            client: The MongoDB client to ping

        Returns:
            True if the store answered
        """
        try:
            client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("MongoDB connection failed, running in offline mode: %s", e)
            self.mark_unavailable()
            return False

        logger.info("Connected to MongoDB")
        self.mark_available()
        return True
