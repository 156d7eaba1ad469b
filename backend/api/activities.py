"""REST API endpoints for activity tracking.

Thin wrapper over ActivityService:

- POST   /api/activities        track a new activity
- GET    /api/activities        list activities of the user in X-User-ID
- GET    /api/activities/{id}   single activity (404 when missing)
- DELETE /api/activities/{id}   delete (idempotent, 204)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Path, Response, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.activity.application import ActivityService
from domain.activity.exceptions import ActivityNotFoundError
from domain.activity.model import Activity, ActivityType
from infrastructure.persistence.activity_repository_factory import get_activity_repository

router = APIRouter(prefix="/api/activities", tags=["activities"])


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TrackActivityRequest(_CamelModel):
    """Request body for a new activity."""

    user_id: str
    type: Optional[ActivityType] = None
    duration: Optional[int] = None
    calories_burned: Optional[int] = None
    start_time: Optional[datetime] = None
    additional_metrics: Dict[str, Any] = Field(default_factory=dict)


class ActivityResponse(_CamelModel):
    """Activity as returned by the API."""

    id: str
    user_id: str
    type: Optional[ActivityType] = None
    duration: Optional[int] = None
    calories_burned: Optional[int] = None
    start_time: Optional[datetime] = None
    additional_metrics: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, activity: Activity) -> "ActivityResponse":
        return cls(
            id=activity.id or "",
            user_id=activity.user_id,
            type=activity.type,
            duration=activity.duration,
            calories_burned=activity.calories_burned,
            start_time=activity.start_time,
            additional_metrics=activity.additional_metrics,
            created_at=activity.created_at,
            updated_at=activity.updated_at,
        )


def get_activity_service() -> ActivityService:
    """ActivityService bound to the process-wide repository."""
    return ActivityService(get_activity_repository())


@router.post("", response_model=ActivityResponse)
async def track_activity(
    body: TrackActivityRequest,
    service: ActivityService = Depends(get_activity_service),
) -> ActivityResponse:
    activity = await service.track_activity(
        user_id=body.user_id,
        type=body.type,
        duration=body.duration,
        calories_burned=body.calories_burned,
        start_time=body.start_time,
        additional_metrics=body.additional_metrics,
    )
    return ActivityResponse.from_domain(activity)


@router.get("", response_model=List[ActivityResponse])
async def list_activities(
    user_id: str = Header(..., alias="X-User-ID"),
    service: ActivityService = Depends(get_activity_service),
) -> List[ActivityResponse]:
    activities = await service.get_user_activities(user_id)
    return [ActivityResponse.from_domain(a) for a in activities]


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity(
    activity_id: str = Path(..., description="Activity id"),
    service: ActivityService = Depends(get_activity_service),
) -> ActivityResponse:
    try:
        activity = await service.get_activity(activity_id)
    except ActivityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return ActivityResponse.from_domain(activity)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    activity_id: str = Path(..., description="Activity id"),
    service: ActivityService = Depends(get_activity_service),
) -> Response:
    await service.delete_activity(activity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
