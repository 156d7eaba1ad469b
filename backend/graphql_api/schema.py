"""GraphQL schema: Query/Mutation roots with per-domain namespaces."""

import datetime

import strawberry

from graphql_api.resolvers.activity import ActivityMutations, ActivityQueries


@strawberry.type
class Query:
    @strawberry.field
    def server_time(self) -> str:
        return datetime.datetime.now(datetime.timezone.utc).isoformat().replace("+00:00", "Z")

    @strawberry.field
    def health(self) -> str:
        return "ok"

    @strawberry.field(description="Activity data queries")  # type: ignore[misc]
    def activity(self) -> ActivityQueries:
        """Activity queries.

        Example:
            query {
              activity {
                activities(userId: "user123") { id type }
                activity(id: "6650c0...") { caloriesBurned }
              }
            }
        """
        return ActivityQueries()


@strawberry.type
class Mutation:
    @strawberry.field(description="Activity mutations")  # type: ignore[misc]
    def activity(self) -> ActivityMutations:
        return ActivityMutations()


def create_schema() -> strawberry.Schema:
    return strawberry.Schema(query=Query, mutation=Mutation)


schema = create_schema()
