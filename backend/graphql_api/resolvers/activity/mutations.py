"""Activity mutation resolvers.

Groups activity-related mutations:
- trackActivity: Register a new activity
- deleteActivity: Delete an activity (idempotent)
"""

from typing import Any

import strawberry
from strawberry.types import Info
from graphql import GraphQLError

from domain.activity.application import ActivityService
from domain.activity.exceptions import InvalidActivityError
from graphql_api.types_activity import (
    Activity,
    TrackActivityInput,
    activity_from_domain,
)


@strawberry.type
class ActivityMutations:
    """Activity domain mutations."""

    @strawberry.mutation(description="Registra una nuova attività")  # type: ignore[misc]
    async def track_activity(
        self,
        info: Info[Any, Any],
        input: TrackActivityInput,
    ) -> Activity:
        """Track a new activity.

        Example:
            mutation {
              activity {
                trackActivity(input: {userId: "user123", type: RUNNING, duration: 30}) {
                  id createdAt
                }
              }
            }
        """
        service: ActivityService = info.context.get("activity_service")
        try:
            saved = await service.track_activity(
                user_id=input.user_id,
                type=input.type,
                duration=input.duration,
                calories_burned=input.calories_burned,
                start_time=input.start_time,
                additional_metrics=input.additional_metrics,
            )
        except InvalidActivityError as e:
            raise GraphQLError(str(e)) from e
        return activity_from_domain(saved)

    @strawberry.mutation(description="Elimina un'attività (idempotente)")  # type: ignore[misc]
    async def delete_activity(self, info: Info[Any, Any], id: strawberry.ID) -> bool:
        service: ActivityService = info.context.get("activity_service")
        await service.delete_activity(str(id))
        return True
