"""Base MongoDB repository with reusable patterns.

Provides common functionality for MongoDB repositories:
- Collection binding through MongoQueryContext
- Document mapping (domain ↔ MongoDB)
- Error translation (PyMongoError → PersistenceError)
- Logging

No retry logic: failures surface synchronously to the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union
import logging

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from domain.activity.exceptions import PersistenceError
from infrastructure.persistence.mongodb.connection import MongoQueryContext, get_query_context


# Type variables for generics
TEntity = TypeVar("TEntity")  # Domain entity type

logger = logging.getLogger(__name__)


class MongoBaseRepository(ABC, Generic[TEntity]):
    """
    Abstract base class for MongoDB repositories.

    Subclasses must implement:
    - collection_name: Name of MongoDB collection
    - to_document(): Convert domain entity to MongoDB document
    - from_document(): Convert MongoDB document to domain entity

    Example:
        class MongoActivityRepository(MongoBaseRepository[Activity]):
            @property
            def collection_name(self) -> str:
                return MongoQueryContext.collection_name_for(Activity)
    """

    def __init__(self, context: Optional[MongoQueryContext] = None):
        """
        Initialize repository with optional query context.

        Args:
            context: Query context (if None, uses the process-wide one)
        """
        self._context = context if context is not None else get_query_context()
        self._collection = self._context.collection(self.collection_name)

        logger.info(
            f"Initialized {self.__class__.__name__} "
            f"for collection '{self._context.database_name}.{self.collection_name}'"
        )

    # ============================================================
    # Abstract Properties/Methods (must be implemented)
    # ============================================================

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """MongoDB collection name."""
        pass

    @abstractmethod
    def to_document(self, entity: TEntity) -> Dict[str, Any]:
        """
        Convert domain entity to MongoDB document.

        Args:
            entity: Domain entity

        Returns:
            MongoDB document (dict)
        """
        pass

    @abstractmethod
    def from_document(self, doc: Dict[str, Any]) -> TEntity:
        """
        Convert MongoDB document to domain entity.

        Args:
            doc: MongoDB document

        Returns:
            Domain entity
        """
        pass

    # ============================================================
    # Protected Utility Methods (for subclasses)
    # ============================================================

    @property
    def context(self) -> MongoQueryContext:
        """Query context this repository is bound to."""
        return self._context

    @property
    def collection(self) -> AsyncIOMotorCollection[Dict[str, Any]]:
        """Get MongoDB collection handle."""
        return self._collection

    @staticmethod
    def to_object_key(entity_id: str) -> Union[ObjectId, str]:
        """Convert an entity id to the stored _id value.

        Canonical ObjectId hex (24 lowercase hex chars) is stored as ObjectId,
        anything else as plain string, so str(_id) always gives back the same id.
        """
        if ObjectId.is_valid(entity_id) and str(ObjectId(entity_id)) == entity_id:
            return ObjectId(entity_id)
        return entity_id

    def _failure(self, operation: str, filter_dict: Any, error: PyMongoError) -> PersistenceError:
        logger.error(
            f"Error in {operation}: collection={self.collection_name}, "
            f"filter={filter_dict}, error={error}"
        )
        return PersistenceError(operation, str(error))

    async def _find_one(self, filter_dict: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find single document with error handling.

        Returns:
            Document dict or None if not found

        Raises:
            PersistenceError: If MongoDB operation fails
        """
        try:
            doc: Optional[Dict[str, Any]] = await self._collection.find_one(filter_dict)
            return doc
        except PyMongoError as e:
            raise self._failure("find_one", filter_dict, e) from e

    async def _find_many(
        self,
        filter_dict: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents with error handling.

        Args:
            filter_dict: MongoDB filter
            sort: Sort specification [(field, direction), ...]

        Returns:
            List of document dicts (store-defined order unless sort given)

        Raises:
            PersistenceError: If MongoDB operation fails
        """
        try:
            cursor = self._collection.find(filter_dict)
            if sort:
                cursor = cursor.sort(sort)
            documents: List[Dict[str, Any]] = await cursor.to_list(length=None)
            return documents
        except PyMongoError as e:
            raise self._failure("find_many", filter_dict, e) from e

    async def _insert_one(self, document: Dict[str, Any]) -> Any:
        """
        Insert single document with error handling.

        Returns:
            The inserted _id

        Raises:
            PersistenceError: If MongoDB operation fails
        """
        try:
            result = await self._collection.insert_one(document)
            return result.inserted_id
        except PyMongoError as e:
            raise self._failure("insert_one", None, e) from e

    async def _replace_one(
        self,
        filter_dict: Dict[str, Any],
        document: Dict[str, Any],
        upsert: bool = True,
    ) -> None:
        """
        Replace single document with error handling.

        Raises:
            PersistenceError: If MongoDB operation fails
        """
        try:
            await self._collection.replace_one(filter_dict, document, upsert=upsert)
        except PyMongoError as e:
            raise self._failure("replace_one", filter_dict, e) from e

    async def _delete_one(self, filter_dict: Dict[str, Any]) -> int:
        """
        Delete single document with error handling.

        Returns:
            Number of documents deleted (0 or 1)

        Raises:
            PersistenceError: If MongoDB operation fails
        """
        try:
            result = await self._collection.delete_one(filter_dict)
            deleted: int = result.deleted_count
            return deleted
        except PyMongoError as e:
            raise self._failure("delete_one", filter_dict, e) from e

    async def _count(self, filter_dict: Dict[str, Any], limit: Optional[int] = None) -> int:
        """
        Count documents with error handling.

        Raises:
            PersistenceError: If MongoDB operation fails
        """
        try:
            if limit is not None:
                count: int = await self._collection.count_documents(filter_dict, limit=limit)
            else:
                count = await self._collection.count_documents(filter_dict)
            return count
        except PyMongoError as e:
            raise self._failure("count", filter_dict, e) from e
