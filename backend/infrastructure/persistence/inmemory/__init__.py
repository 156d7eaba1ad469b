"""In-memory repository implementations."""

from .activity_repository import InMemoryActivityRepository

__all__ = ["InMemoryActivityRepository"]
