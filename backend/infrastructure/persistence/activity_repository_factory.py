"""Factory for creating activity repositories.

Uses REPOSITORY_BACKEND environment variable to select the implementation.
"""

from domain.activity.repository import IActivityRepository
from infrastructure.config import get_repository_backend


# Singleton per riutilizzo repository
_repository_instance: IActivityRepository | None = None


def create_activity_repository() -> IActivityRepository:
    """Create activity repository based on REPOSITORY_BACKEND env var.

    - inmemory: InMemoryActivityRepository
    - mongodb: MongoActivityRepository (process-wide MongoDB query context)

    Returns:
        IActivityRepository: New repository instance

    Raises:
        ValueError: If REPOSITORY_BACKEND has unsupported value
        ConfigurationError: If mongodb is selected and the URI is malformed

    Environment Variables:
        REPOSITORY_BACKEND: Repository type (inmemory | mongodb)
            Default: inmemory
    """
    mode = get_repository_backend()

    if mode == "inmemory":
        from infrastructure.persistence.inmemory.activity_repository import (
            InMemoryActivityRepository,
        )

        return InMemoryActivityRepository()

    if mode == "mongodb":
        from infrastructure.persistence.mongodb import MongoActivityRepository

        return MongoActivityRepository()

    raise ValueError(
        f"Unknown REPOSITORY_BACKEND value: '{mode}'. " f"Supported values: inmemory, mongodb"
    )


def get_activity_repository() -> IActivityRepository:
    """Get singleton activity repository instance.

    Returns:
        IActivityRepository: The singleton repository
    """
    global _repository_instance

    if _repository_instance is None:
        _repository_instance = create_activity_repository()

    return _repository_instance


def reset_activity_repository() -> None:
    """Reset singleton for testing purposes.

    Useful in test suites to ensure clean state between tests.
    """
    global _repository_instance
    _repository_instance = None


__all__ = [
    "create_activity_repository",
    "get_activity_repository",
    "reset_activity_repository",
]
