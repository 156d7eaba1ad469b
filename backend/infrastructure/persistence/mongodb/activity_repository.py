"""MongoDB implementation of IActivityRepository.

Single collection ``activity`` (name derived from the entity type).

Design decisions:
  * _id: store-generated ObjectId on insert; ids that are not canonical
    (lowercase 24-hex) ObjectIds are stored as plain strings
  * type values outside ActivityType are read as OTHER, the stored value
    kept in additionalMetrics.originalType
  * camelCase document fields (userId, caloriesBurned, ...)
  * Auditing: createdAt set on insert, updatedAt on every save
  * Datetimes stored as UTC with millisecond precision
  * find_by_user_id: explicit equality filter on userId (indexed)
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional
import logging

from pymongo.errors import PyMongoError

from domain.activity.model import (
    Activity,
    ActivityType,
    truncate_to_millis,
    utc_now,
)
from domain.activity.repository import IActivityRepository
from infrastructure.persistence.mongodb.base import MongoBaseRepository
from infrastructure.persistence.mongodb.connection import MongoQueryContext


logger = logging.getLogger(__name__)


class ActivityFields:
    """Document field names for the activity collection"""

    ID = "_id"
    USER_ID = "userId"
    TYPE = "type"
    DURATION = "duration"
    CALORIES_BURNED = "caloriesBurned"
    START_TIME = "startTime"
    ADDITIONAL_METRICS = "additionalMetrics"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


USER_ID_INDEX_NAME = "idx_user"

# Metric key holding a stored type value outside ActivityType
ORIGINAL_TYPE_METRIC = "originalType"


class MongoActivityRepository(MongoBaseRepository[Activity], IActivityRepository):
    """MongoDB implementation for the Activity domain."""

    def __init__(self, context: Optional[MongoQueryContext] = None):
        """Initialize repository with optional query context.

        Args:
            context: Optional query context. If None, uses the process-wide one.
        """
        super().__init__(context)
        self._indexes_created = False

    @property
    def collection_name(self) -> str:
        """Collection for Activity documents."""
        return MongoQueryContext.collection_name_for(Activity)

    async def ensure_indexes(self) -> None:
        """Create the userId index if not already created.

        Idempotent on the server side; skipped after the first call.
        """
        if self._indexes_created:
            return

        try:
            await self.collection.create_index(
                [(ActivityFields.USER_ID, 1)],
                name=USER_ID_INDEX_NAME,
                background=True,
            )
        except PyMongoError as e:
            raise self._failure("create_index", None, e) from e
        self._indexes_created = True
        logger.info(f"Ensured index '{USER_ID_INDEX_NAME}' on {self.collection_name}")

    # ========================================================================
    # Document Mapping
    # ========================================================================

    def to_document(self, entity: Activity) -> Dict[str, Any]:
        """Convert Activity to MongoDB document.

        Schema:
            {
                "_id": ObjectId("6650c0..."),
                "userId": "user123",
                "type": "RUNNING",
                "duration": 30,
                "caloriesBurned": 300,
                "startTime": ISODate("2025-01-15T07:30:00Z"),
                "additionalMetrics": {"distanceKm": 5.2},
                "createdAt": ISODate(...),
                "updatedAt": ISODate(...)
            }

        The _id key is omitted for entities without id (insert).
        """
        doc: Dict[str, Any] = {}
        if entity.id is not None:
            doc[ActivityFields.ID] = self.to_object_key(entity.id)

        doc.update(
            {
                ActivityFields.USER_ID: entity.user_id,
                ActivityFields.TYPE: entity.type.value if entity.type else None,
                ActivityFields.DURATION: entity.duration,
                ActivityFields.CALORIES_BURNED: entity.calories_burned,
                ActivityFields.START_TIME: _as_stored_datetime(entity.start_time),
                ActivityFields.ADDITIONAL_METRICS: dict(entity.additional_metrics),
                ActivityFields.CREATED_AT: _as_stored_datetime(entity.created_at),
                ActivityFields.UPDATED_AT: _as_stored_datetime(entity.updated_at),
            }
        )
        return doc

    def from_document(self, doc: Dict[str, Any]) -> Activity:
        """Convert MongoDB document to Activity.

        Args:
            doc: MongoDB document with Activity data

        Returns:
            Activity domain object
        """
        additional_metrics = doc.get(ActivityFields.ADDITIONAL_METRICS)
        metrics: Dict[str, Any] = (
            dict(additional_metrics) if isinstance(additional_metrics, dict) else {}
        )

        raw_type = doc.get(ActivityFields.TYPE)
        activity_type: Optional[ActivityType] = None
        if raw_type:
            try:
                activity_type = ActivityType(raw_type)
            except ValueError:
                # Tipo sconosciuto: OTHER, valore grezzo nei metrics
                logger.warning(
                    f"Unknown activity type {raw_type!r} in document {doc[ActivityFields.ID]}, "
                    f"mapped to {ActivityType.OTHER.value}"
                )
                activity_type = ActivityType.OTHER
                metrics.setdefault(ORIGINAL_TYPE_METRIC, raw_type)

        return Activity(
            id=str(doc[ActivityFields.ID]),
            user_id=doc[ActivityFields.USER_ID],
            type=activity_type,
            duration=doc.get(ActivityFields.DURATION),
            calories_burned=doc.get(ActivityFields.CALORIES_BURNED),
            start_time=_as_stored_datetime(doc.get(ActivityFields.START_TIME)),
            additional_metrics=metrics,
            created_at=_as_stored_datetime(doc.get(ActivityFields.CREATED_AT)),
            updated_at=_as_stored_datetime(doc.get(ActivityFields.UPDATED_AT)),
        )

    # ========================================================================
    # CRUD
    # ========================================================================

    async def save(self, entity: Activity) -> Activity:
        """Insert (id unset) or replace (id set, upsert) an activity."""
        now = utc_now()
        entity = replace(entity, created_at=entity.created_at or now, updated_at=now)

        doc = self.to_document(entity)

        if entity.is_new():
            inserted_id = await self._insert_one(doc)
            doc[ActivityFields.ID] = inserted_id
            logger.debug(f"Inserted activity {inserted_id} for user {entity.user_id}")
        else:
            await self._replace_one({ActivityFields.ID: doc[ActivityFields.ID]}, doc, upsert=True)
            logger.debug(f"Replaced activity {entity.id} for user {entity.user_id}")

        return self.from_document(doc)

    async def save_all(self, entities: Iterable[Activity]) -> List[Activity]:
        return [await self.save(entity) for entity in entities]

    async def find_by_id(self, activity_id: str) -> Optional[Activity]:
        doc = await self._find_one({ActivityFields.ID: self.to_object_key(activity_id)})
        if doc is None:
            return None
        return self.from_document(doc)

    async def exists_by_id(self, activity_id: str) -> bool:
        count = await self._count({ActivityFields.ID: self.to_object_key(activity_id)}, limit=1)
        return count > 0

    async def find_all(self) -> List[Activity]:
        docs = await self._find_many({})
        return [self.from_document(doc) for doc in docs]

    async def count(self) -> int:
        return await self._count({})

    async def delete_by_id(self, activity_id: str) -> None:
        deleted = await self._delete_one({ActivityFields.ID: self.to_object_key(activity_id)})
        if not deleted:
            logger.debug(f"delete_by_id: activity {activity_id} not found (no-op)")

    async def find_by_user_id(self, user_id: str) -> List[Activity]:
        docs = await self._find_many({ActivityFields.USER_ID: user_id})
        activities = [self.from_document(doc) for doc in docs]
        logger.debug(f"Found {len(activities)} activities for user {user_id}")
        return activities


def _as_stored_datetime(value: Any) -> Any:
    """UTC/millisecond normalization applied to every datetime field."""
    if value is None:
        return None
    return truncate_to_millis(value)


__all__ = ["MongoActivityRepository", "ActivityFields", "ORIGINAL_TYPE_METRIC"]
