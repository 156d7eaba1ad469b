"""Activity query resolvers.

Groups activity-related queries:
- activities: List activities owned by a user
- activity: Single activity by id
"""

from typing import Any, List, Optional

import strawberry
from strawberry.types import Info

from domain.activity.application import ActivityService
from domain.activity.exceptions import ActivityNotFoundError
from graphql_api.types_activity import Activity, activity_from_domain


@strawberry.type
class ActivityQueries:
    """Activity data queries."""

    @strawberry.field(description="Lista attività di un utente")  # type: ignore[misc]
    async def activities(self, info: Info[Any, Any], user_id: str) -> List[Activity]:
        """List activities owned by a user.

        Example:
            query {
              activity {
                activities(userId: "user123") { id type duration }
              }
            }
        """
        service: ActivityService = info.context.get("activity_service")
        activities = await service.get_user_activities(user_id)
        return [activity_from_domain(a) for a in activities]

    @strawberry.field(description="Dettaglio attività per id")  # type: ignore[misc]
    async def activity(self, info: Info[Any, Any], id: strawberry.ID) -> Optional[Activity]:
        """Single activity, null when not found."""
        service: ActivityService = info.context.get("activity_service")
        try:
            found = await service.get_activity(str(id))
        except ActivityNotFoundError:
            return None
        return activity_from_domain(found)
