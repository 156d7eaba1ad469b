"""In-memory implementation of Activity repository.

Stessa semantica del repository MongoDB (id stile ObjectId, auditing,
ordine di inserimento) senza dipendenze esterne: usato in sviluppo e nei
test.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from bson import ObjectId

from domain.activity.model import Activity, utc_now
from domain.activity.repository import IActivityRepository


class InMemoryActivityRepository(IActivityRepository):
    """In-memory implementation of IActivityRepository.

    Stores activities in a dict keyed by id (insertion order preserved).

    Examples:
        >>> repo = InMemoryActivityRepository()
        >>> saved = await repo.save(Activity(user_id="u1"))
        >>> await repo.find_by_user_id("u1")
        [Activity(user_id='u1', ...)]
    """

    def __init__(self) -> None:
        """Initialize empty in-memory storage."""
        self._activities: Dict[str, Activity] = {}

    async def save(self, entity: Activity) -> Activity:
        now = utc_now()
        activity_id = entity.id if entity.id is not None else str(ObjectId())
        stored = replace(
            entity,
            id=activity_id,
            created_at=entity.created_at or now,
            updated_at=now,
            additional_metrics=dict(entity.additional_metrics),
        )
        self._activities[activity_id] = stored
        return _copy(stored)

    async def save_all(self, entities: Iterable[Activity]) -> List[Activity]:
        return [await self.save(entity) for entity in entities]

    async def delete_by_id(self, activity_id: str) -> None:
        self._activities.pop(activity_id, None)

    async def find_by_id(self, activity_id: str) -> Optional[Activity]:
        activity = self._activities.get(activity_id)
        return _copy(activity) if activity is not None else None

    async def exists_by_id(self, activity_id: str) -> bool:
        return activity_id in self._activities

    async def find_all(self) -> List[Activity]:
        return [_copy(a) for a in self._activities.values()]

    async def count(self) -> int:
        return len(self._activities)

    async def find_by_user_id(self, user_id: str) -> List[Activity]:
        return [_copy(a) for a in self._activities.values() if a.user_id == user_id]

    def clear(self) -> None:
        """Clear all activities from memory.

        Useful for test cleanup.
        """
        self._activities.clear()


def _copy(activity: Activity) -> Activity:
    return replace(activity, additional_metrics=dict(activity.additional_metrics))


__all__ = ["InMemoryActivityRepository"]
