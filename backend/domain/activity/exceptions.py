"""Activity domain exceptions."""

from typing import Optional


class ActivityDomainError(Exception):
    """Base exception for Activity domain errors."""

    pass


class ConfigurationError(ActivityDomainError):
    """Database configuration is invalid (malformed URI, missing database).

    Raised at startup; the process should not start serving.
    """

    def __init__(self, message: str, value: Optional[str] = None):
        """Initialize with message and the offending value.

        Args:
            message: Human readable reason
            value: Offending configuration value (URI, database name)
        """
        self.value = value
        super().__init__(message)


class PersistenceError(ActivityDomainError):
    """The store could not be reached or the query could not be executed."""

    def __init__(self, operation: str, reason: str):
        """Initialize with failed operation and reason.

        Args:
            operation: Repository operation that failed (e.g. "find_one")
            reason: Underlying driver error message
        """
        self.operation = operation
        self.reason = reason
        super().__init__(f"Persistence operation '{operation}' failed: {reason}")


class InvalidActivityError(ActivityDomainError):
    """Activity violates an entity invariant."""

    def __init__(self, field: str, reason: str):
        """Initialize with invalid field and reason.

        Args:
            field: Name of the invalid field
            reason: Reason why it's invalid
        """
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid activity field '{field}': {reason}")


class ActivityNotFoundError(ActivityDomainError):
    """Activity was not found (application layer only)."""

    def __init__(self, activity_id: str):
        """Initialize with activity identifier.

        Args:
            activity_id: ID that was not found
        """
        self.activity_id = activity_id
        super().__init__(f"Activity not found: {activity_id}")


__all__ = [
    "ActivityDomainError",
    "ConfigurationError",
    "PersistenceError",
    "InvalidActivityError",
    "ActivityNotFoundError",
]
