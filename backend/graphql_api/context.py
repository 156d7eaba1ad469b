"""GraphQL context factory for dependency injection.

Provides the dependencies required by GraphQL resolvers:
- ActivityService (wraps the activity repository)
"""

from typing import Any, Dict, Optional
from strawberry.fastapi import BaseContext
from fastapi import Request

from domain.activity.application import ActivityService


class GraphQLContext(BaseContext):
    """GraphQL context with all dependencies.

    This context is injected into all GraphQL resolvers via the
    `info` parameter. Resolvers access dependencies using
    `info.context.get("service_name")`.

    Attributes:
        activity_service: Application service for activity use cases
        request: FastAPI request object
    """

    def __init__(
        self,
        activity_service: ActivityService,
        request: Optional[Request] = None,
    ) -> None:
        """Initialize GraphQL context with all dependencies."""
        super().__init__()
        self.activity_service = activity_service
        self.request = request
        self.headers: Dict[str, Any] = dict(request.headers) if request else {}

    def get(self, key: str) -> Any:
        """Get dependency by name (for resolver compatibility).

        Args:
            key: Dependency name (e.g., "activity_service")

        Returns:
            Dependency instance or None if not found

        Example:
            >>> context = info.context
            >>> service = context.get("activity_service")
        """
        return getattr(self, key, None)


def create_context(
    activity_service: ActivityService,
    request: Optional[Request] = None,
) -> GraphQLContext:
    """Create GraphQL context with all dependencies.

    Example:
        >>> from graphql_api.context import create_context
        >>> context = create_context(
        ...     activity_service=ActivityService(InMemoryActivityRepository()),
        ... )
    """
    return GraphQLContext(activity_service=activity_service, request=request)
