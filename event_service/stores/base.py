"""Store interface (repository pattern).

Stores are swappable and return ``Event`` models. Every failure is raised
as ``StoreError``.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Set

from ..models.event import Event

class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def find_by_id(self, event_id: int) -> Optional[Event]:
        """Return an active event by ID, or None if missing or soft-deleted."""
        ...

    @abstractmethod
    def find_by_id_including_deleted(self, event_id: int) -> Optional[Event]:
        """Return an event by ID whether or not it is soft-deleted."""
        ...

    @abstractmethod
    def list_active(self) -> List[Event]:
        """Return all events that are not soft-deleted, ordered by id."""
        ...

    @abstractmethod
    def list_deleted(self) -> List[Event]:
        """Return all soft-deleted events, ordered by id."""
        ...

    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> Event:
        """Insert a new event from validated fields and return it."""
        ...

    @abstractmethod
    def update(self, event_id: int, fields: Dict[str, Any]) -> None:
        """Apply only the given fields to an active event."""
        ...

    @abstractmethod
    def delete_by_id(self, event_id: int) -> None:
        """Permanently remove an active event."""
        ...

    @abstractmethod
    def soft_delete_by_id(self, event_id: int) -> None:
        """Mark an active event as deleted."""
        ...

    @abstractmethod
    def restore_by_id(self, event_id: int) -> None:
        """Clear the deleted mark of an event."""
        ...

    @abstractmethod
    def force_delete_by_id(self, event_id: int) -> None:
        """Permanently remove an event, deleted or not."""
        ...

    @abstractmethod
    def delete_where_id_in(self, event_ids: Iterable[int]) -> int:
        """Permanently remove every event whose id is listed, returning the count."""
        ...

    @abstractmethod
    def existing_ids(self, event_ids: Iterable[int]) -> Set[int]:
        """Return the subset of ids that exist, soft-deleted rows included."""
        ...

    @abstractmethod
    def purge_deleted_before(self, cutoff: datetime) -> int:
        """Permanently remove events soft-deleted before ``cutoff``."""
        ...
