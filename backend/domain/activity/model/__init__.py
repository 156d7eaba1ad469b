"""Activity domain models.

Contiene l'entity Activity (documento standalone, nessuna relazione) e
l'enum ActivityType.

Invarianti:
  * user_id non vuoto (unico predicato di query, indicizzato)
  * id, se presente, non vuoto; assegnato dallo store al primo save e
    immutabile da lì in poi

I campi applicativi (type, duration, calories_burned, start_time,
additional_metrics) non hanno validazione oltre al tipo: additional_metrics
è pass-through opaco.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from domain.activity.exceptions import InvalidActivityError


class ActivityType(str, Enum):
    """Tipo di attività registrata dall'utente."""

    RUNNING = "RUNNING"
    WALKING = "WALKING"
    CYCLING = "CYCLING"
    SWIMMING = "SWIMMING"
    WEIGHT_TRAINING = "WEIGHT_TRAINING"
    YOGA = "YOGA"
    HIIT = "HIIT"
    CARDIO = "CARDIO"
    STRETCHING = "STRETCHING"
    OTHER = "OTHER"


def utc_now() -> datetime:
    """Current UTC time truncated to millisecond precision.

    BSON dates keep milliseconds only: truncating here keeps the entity
    returned by save() equal to the one read back from the store.
    """
    return truncate_to_millis(datetime.now(timezone.utc))


def truncate_to_millis(dt: datetime) -> datetime:
    """Normalize a datetime to UTC with millisecond precision.

    Naive datetimes are interpreted as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


@dataclass
class Activity:
    """Activity entity (one document in the activity collection).

    Examples:
        >>> activity = Activity(user_id="u1", type=ActivityType.RUNNING, duration=30)
        >>> activity.is_new()
        True
        >>> Activity(user_id="  ")
        Traceback (most recent call last):
        ...
        domain.activity.exceptions.InvalidActivityError: ...
    """

    user_id: str
    type: Optional[ActivityType] = None
    duration: Optional[int] = None
    calories_burned: Optional[int] = None
    start_time: Optional[datetime] = None
    additional_metrics: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not isinstance(self.user_id, str) or not self.user_id.strip():
            raise InvalidActivityError("user_id", "must be a non-empty string")

        if self.id is not None and (not isinstance(self.id, str) or not self.id.strip()):
            raise InvalidActivityError("id", "must be a non-empty string when set")

        # Accetta anche il valore stringa (es. da input GraphQL/REST)
        if self.type is not None and not isinstance(self.type, ActivityType):
            try:
                self.type = ActivityType(self.type)
            except ValueError as e:
                raise InvalidActivityError("type", f"unknown activity type {self.type!r}") from e

        if not isinstance(self.additional_metrics, dict):
            raise InvalidActivityError("additional_metrics", "must be an object")

        # UTC, precisione al millisecondo: stesso valore in memoria e su MongoDB
        for name in ("start_time", "created_at", "updated_at"):
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, datetime):
                raise InvalidActivityError(name, "must be a datetime")
            setattr(self, name, truncate_to_millis(value))

    def is_new(self) -> bool:
        """True until the store has assigned an id."""
        return self.id is None

    def with_id(self, activity_id: str) -> "Activity":
        """Return a copy carrying the store-assigned id."""
        return replace(self, id=activity_id)


__all__ = [
    "ActivityType",
    "Activity",
    "utc_now",
    "truncate_to_millis",
]
