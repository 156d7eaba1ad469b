"""MongoDB connection provider.

Single source of truth for the database handle:

- create_client(): one motor client per process (lazy connection, the
  driver multiplexes/pools connections internally)
- create_query_context(): client bound to one database namespace

The process-wide handle is exposed through get_mongo_client() /
get_query_context() and released by close_mongo_client() at shutdown.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import ConfigurationError as MongoConfigurationError
from pymongo.errors import InvalidName

from domain.activity.exceptions import ConfigurationError
from infrastructure.config import get_mongodb_database, get_mongodb_uri


logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("mongodb://", "mongodb+srv://")

_CREDENTIALS_RE = re.compile(r"://[^@/]+@")


def mask_uri(uri: str) -> str:
    """Hide credentials in a connection URI (for logs and errors)."""
    return _CREDENTIALS_RE.sub("://***@", uri)


class MongoQueryContext:
    """Client bound to a single database namespace.

    Pure composition: building a context performs no I/O.
    """

    def __init__(self, client: AsyncIOMotorClient[Dict[str, Any]], database_name: str) -> None:
        if not isinstance(database_name, str) or not database_name.strip():
            raise ConfigurationError("MongoDB database name is empty", database_name)

        try:
            database = client[database_name]
        except InvalidName as e:
            raise ConfigurationError(
                f"Invalid MongoDB database name '{database_name}': {e}", database_name
            ) from e

        self._client = client
        self._database: AsyncIOMotorDatabase[Dict[str, Any]] = database
        self._database_name = database_name

    @property
    def client(self) -> AsyncIOMotorClient[Dict[str, Any]]:
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase[Dict[str, Any]]:
        return self._database

    @property
    def database_name(self) -> str:
        return self._database_name

    def collection(self, name: str) -> AsyncIOMotorCollection[Dict[str, Any]]:
        """Collection handle in the bound database."""
        return self._database[name]

    def collection_for(self, entity_type: type) -> AsyncIOMotorCollection[Dict[str, Any]]:
        """Collection handle named after an entity type."""
        return self.collection(self.collection_name_for(entity_type))

    @staticmethod
    def collection_name_for(entity_type: type) -> str:
        """Derive the collection name from the entity class name.

        Examples:
            >>> MongoQueryContext.collection_name_for(Activity)
            'activity'
        """
        name = entity_type.__name__
        return name[:1].lower() + name[1:]

    def __repr__(self) -> str:
        return f"MongoQueryContext(database={self._database_name!r})"


class MongoConnectionProvider:
    """Builds the database client handle and its query context."""

    @staticmethod
    def create_client(connection_uri: str) -> AsyncIOMotorClient[Dict[str, Any]]:
        """Create a motor client from a connection URI.

        The connection is established lazily: an unreachable server does not
        fail here, the first query surfaces the error.

        Args:
            connection_uri: e.g. mongodb://localhost:27017/fitnessactivity

        Returns:
            AsyncIOMotorClient (tz_aware)

        Raises:
            ConfigurationError: If the URI is empty or malformed
        """
        if not isinstance(connection_uri, str) or not connection_uri.strip():
            raise ConfigurationError("MongoDB connection URI is empty", connection_uri)

        if not connection_uri.startswith(SUPPORTED_SCHEMES):
            raise ConfigurationError(
                "MongoDB connection URI must start with "
                f"{' or '.join(SUPPORTED_SCHEMES)}: {mask_uri(connection_uri)}",
                mask_uri(connection_uri),
            )

        try:
            client: AsyncIOMotorClient[Dict[str, Any]] = AsyncIOMotorClient(
                connection_uri, tz_aware=True
            )
        except (MongoConfigurationError, ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid MongoDB connection URI {mask_uri(connection_uri)}: {e}",
                mask_uri(connection_uri),
            ) from e

        logger.info(f"Created MongoDB client for {mask_uri(connection_uri)}")
        return client

    @staticmethod
    def create_query_context(
        client: AsyncIOMotorClient[Dict[str, Any]],
        database_name: Optional[str] = None,
    ) -> MongoQueryContext:
        """Bind a client to one database namespace.

        Args:
            client: Client from create_client()
            database_name: Database name; None uses the database in the URI

        Raises:
            ConfigurationError: No database given/in URI, or invalid name
        """
        if database_name is None:
            try:
                database_name = client.get_default_database().name
            except MongoConfigurationError as e:
                raise ConfigurationError(
                    "No MongoDB database configured: set MONGODB_DATABASE "
                    "or include it in MONGODB_URI"
                ) from e

        return MongoQueryContext(client, database_name)


# Process-wide handle (one per service instance)
_client: Optional[AsyncIOMotorClient[Dict[str, Any]]] = None
_query_context: Optional[MongoQueryContext] = None


def get_mongo_client() -> AsyncIOMotorClient[Dict[str, Any]]:
    """Get the process-wide motor client, creating it from config."""
    global _client
    if _client is None:
        _client = MongoConnectionProvider.create_client(get_mongodb_uri())
    return _client


def get_query_context() -> MongoQueryContext:
    """Get the process-wide query context, creating it from config."""
    global _query_context
    if _query_context is None:
        _query_context = MongoConnectionProvider.create_query_context(
            get_mongo_client(), get_mongodb_database()
        )
        logger.info(f"MongoDB query context ready: {_query_context.database_name}")
    return _query_context


def close_mongo_client() -> None:
    """Close and forget the process-wide client (shutdown/tests)."""
    global _client, _query_context
    if _client is not None:
        _client.close()
        logger.info("Closed MongoDB client")
    _client = None
    _query_context = None


__all__ = [
    "MongoQueryContext",
    "MongoConnectionProvider",
    "get_mongo_client",
    "get_query_context",
    "close_mongo_client",
    "mask_uri",
]
