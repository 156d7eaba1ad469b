"""MongoDB repository implementations."""

from .connection import (
    MongoConnectionProvider,
    MongoQueryContext,
    close_mongo_client,
    get_mongo_client,
    get_query_context,
)
from .base import MongoBaseRepository
from .activity_repository import MongoActivityRepository

__all__ = [
    "MongoConnectionProvider",
    "MongoQueryContext",
    "close_mongo_client",
    "get_mongo_client",
    "get_query_context",
    "MongoBaseRepository",
    "MongoActivityRepository",
]
