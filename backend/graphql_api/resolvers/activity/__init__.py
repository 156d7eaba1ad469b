"""Activity resolvers (queries + mutations)."""

from .queries import ActivityQueries
from .mutations import ActivityMutations

__all__ = ["ActivityQueries", "ActivityMutations"]
