"""Activity domain repository interface.

Definisce il contratto per la persistenza del dominio Activity:
CRUD generico su un singolo tipo di entity più un lookup per owner
(find_by_user_id), espresso come filtro esplicito nelle implementazioni.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from domain.activity.model import Activity


class IActivityRepository(ABC):
    """Repository interface per il dominio Activity.

    "Not found" non è mai un errore: find_by_id ritorna None e le query
    multiple ritornano lista vuota. Qualsiasi errore di I/O verso lo store
    viene sollevato come PersistenceError.
    """

    # ===== Scrittura =====

    @abstractmethod
    async def save(self, entity: Activity) -> Activity:
        """Insert or replace an activity.

        Args:
            entity: Activity to persist. If ``entity.id`` is None a new
                document is inserted and the store assigns the id; otherwise
                the document with the same id is replaced.

        Returns:
            The persisted Activity with id and audit timestamps populated

        Raises:
            PersistenceError: If the store operation fails
        """

    @abstractmethod
    async def save_all(self, entities: Iterable[Activity]) -> List[Activity]:
        """Save every activity, returning the persisted copies in order.

        Args:
            entities: Activities to persist

        Returns:
            List of persisted activities (same order as input)
        """

    @abstractmethod
    async def delete_by_id(self, activity_id: str) -> None:
        """Delete an activity by id.

        Idempotent: deleting a missing id is not an error.

        Args:
            activity_id: Activity identifier
        """

    # ===== Lettura =====

    @abstractmethod
    async def find_by_id(self, activity_id: str) -> Optional[Activity]:
        """Find activity by id.

        Args:
            activity_id: Activity identifier

        Returns:
            Activity if found, None otherwise
        """

    @abstractmethod
    async def exists_by_id(self, activity_id: str) -> bool:
        """Check if an activity with the given id exists.

        Args:
            activity_id: Activity identifier

        Returns:
            True if the activity exists
        """

    @abstractmethod
    async def find_all(self) -> List[Activity]:
        """List every activity in the collection (store-defined order)."""

    @abstractmethod
    async def count(self) -> int:
        """Number of activities in the collection."""

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> List[Activity]:
        """List activities owned by a user.

        Args:
            user_id: Owner identifier (exact match)

        Returns:
            Activities whose user_id equals the argument; empty list if none
        """


__all__ = ["IActivityRepository"]
