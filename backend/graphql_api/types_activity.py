from __future__ import annotations

from datetime import datetime
from typing import Optional

import strawberry
from strawberry.scalars import JSON

from domain.activity.model import Activity as _DomainActivity
from domain.activity.model import ActivityType as _DomainActivityType

# Enum GraphQL esposto direttamente dal dominio
ActivityType = strawberry.enum(_DomainActivityType, name="ActivityType")


@strawberry.input
class TrackActivityInput:
    """Input for a new activity."""

    user_id: str
    type: Optional[ActivityType] = None
    duration: Optional[int] = None  # minuti
    calories_burned: Optional[int] = None
    start_time: Optional[datetime] = None
    additional_metrics: Optional[JSON] = None


@strawberry.type
class Activity:
    id: strawberry.ID
    user_id: str
    type: Optional[ActivityType]
    duration: Optional[int]
    calories_burned: Optional[int]
    start_time: Optional[datetime]
    additional_metrics: JSON
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


def activity_from_domain(activity: _DomainActivity) -> Activity:
    """Map a persisted domain Activity to its GraphQL type."""
    return Activity(
        id=strawberry.ID(activity.id or ""),
        user_id=activity.user_id,
        type=activity.type,
        duration=activity.duration,
        calories_burned=activity.calories_burned,
        start_time=activity.start_time,
        additional_metrics=activity.additional_metrics,
        created_at=activity.created_at,
        updated_at=activity.updated_at,
    )
