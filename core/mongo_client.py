"""
MongoDB Client Wrapper for the Photo Catalog

Process-scoped document store handle built on pymongo's native async client.
The underlying AsyncMongoClient is created lazily on first access, shared by
every repository, and released once at shutdown.

Usage:
    from core.mongo_client import get_mongo_client

    store = get_mongo_client("catalog_service")
    photos = store.collection("photos")
    doc = await photos.find_one({"id": 5})

    # At process shutdown
    await store.close()
"""

import logging
from typing import Any, Dict, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from core.config import get_settings

logger = logging.getLogger(__name__)


class MongoClientWrapper:
    """
    MongoDB client wrapper with environment-driven configuration.

    Wraps pymongo.AsyncMongoClient and provides:
    - Lazy connection creation on first collection access
    - Collection handles by name
    - Ping-based health check
    - Single teardown point
    """

    def __init__(
        self,
        service_name: str,
        url: Optional[str] = None,
        database: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        """
        Initialize MongoDB client wrapper.

        Args:
            service_name: Name of the service using this client (sent as appname)
            url: MongoDB connection string (defaults to MONGODB_URL / host+port)
            database: Database name (defaults to MONGODB_DATABASE)
            timeout_ms: Server selection timeout in milliseconds
        """
        infra = get_settings().infrastructure

        self.service_name = service_name
        self.url = url or infra.mongodb_uri
        self.database_name = database or infra.mongodb_database
        self.timeout_ms = timeout_ms or infra.mongodb_timeout_ms

        self._client: Optional[AsyncMongoClient] = None
        self._database: Optional[AsyncDatabase] = None

    @property
    def client(self) -> AsyncMongoClient:
        """Get underlying AsyncMongoClient, creating it on first use"""
        if self._client is None:
            self._client = AsyncMongoClient(
                self.url,
                appname=self.service_name,
                serverSelectionTimeoutMS=self.timeout_ms,
                tz_aware=True,
            )
            logger.info(f"MongoDB client initialized for {self.service_name}: database {self.database_name}")
        return self._client

    @property
    def database(self) -> AsyncDatabase:
        if self._database is None:
            self._database = self.client[self.database_name]
        return self._database

    def collection(self, name: str) -> AsyncCollection:
        """Get a collection handle by name"""
        return self.database[name]

    async def health_check(self) -> Dict[str, Any]:
        """Ping the server; raises pymongo errors when unreachable"""
        return await self.database.command("ping")

    async def close(self):
        """Close connection"""
        if self._client is not None:
            await self._client.close()
            logger.info(f"MongoDB client closed for {self.service_name}")
        self._client = None
        self._database = None


# Singleton instances per service
_mongo_clients: Dict[str, MongoClientWrapper] = {}


def get_mongo_client(
    service_name: str,
    url: Optional[str] = None,
    database: Optional[str] = None,
    **kwargs,
) -> MongoClientWrapper:
    """
    Get or create the MongoDB client for a service.

    Args:
        service_name: Service name
        url: Optional connection string override
        database: Optional database override
        **kwargs: Additional wrapper options

    Returns:
        MongoClientWrapper instance
    """
    global _mongo_clients

    if service_name not in _mongo_clients:
        _mongo_clients[service_name] = MongoClientWrapper(
            service_name=service_name,
            url=url,
            database=database,
            **kwargs,
        )

    return _mongo_clients[service_name]
