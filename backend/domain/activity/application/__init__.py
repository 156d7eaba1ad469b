"""Activity domain application services.

Orchestrazione degli use case Activity:

- ActivityService: registrazione attività, lookup per utente/id, delete

Servizio stateless: usa IActivityRepository per l'accesso ai dati e non
trattiene stato proprio oltre al riferimento al repository.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from domain.activity.exceptions import ActivityNotFoundError
from domain.activity.model import Activity, ActivityType
from domain.activity.repository import IActivityRepository


logger = logging.getLogger(__name__)


class ActivityService:
    """Servizio applicativo per il tracking delle attività."""

    def __init__(self, repository: IActivityRepository) -> None:
        self._repository = repository

    @property
    def repository(self) -> IActivityRepository:
        return self._repository

    async def track_activity(
        self,
        user_id: str,
        type: Union[ActivityType, str, None] = None,
        duration: Optional[int] = None,
        calories_burned: Optional[int] = None,
        start_time: Optional[datetime] = None,
        additional_metrics: Optional[Dict[str, Any]] = None,
    ) -> Activity:
        """Registra una nuova attività per l'utente.

        Raises:
            InvalidActivityError: user_id vuoto o type sconosciuto
            PersistenceError: errore dello store
        """
        activity = Activity(
            user_id=user_id,
            type=type,  # type: ignore[arg-type]
            duration=duration,
            calories_burned=calories_burned,
            start_time=start_time,
            additional_metrics=additional_metrics if additional_metrics is not None else {},
        )
        saved = await self._repository.save(activity)
        logger.info(f"Tracked activity {saved.id} for user {saved.user_id}")
        return saved

    async def get_user_activities(self, user_id: str) -> List[Activity]:
        """Lista attività dell'utente (vuota se nessuna)."""
        activities = await self._repository.find_by_user_id(user_id)
        logger.debug(f"Found {len(activities)} activities for user {user_id}")
        return activities

    async def get_activity(self, activity_id: str) -> Activity:
        """Recupera un'attività per id.

        Raises:
            ActivityNotFoundError: se l'attività non esiste
        """
        activity = await self._repository.find_by_id(activity_id)
        if activity is None:
            raise ActivityNotFoundError(activity_id)
        return activity

    async def delete_activity(self, activity_id: str) -> None:
        """Elimina un'attività (idempotente)."""
        await self._repository.delete_by_id(activity_id)
        logger.info(f"Deleted activity {activity_id}")


__all__ = ["ActivityService"]
