"""SQLAlchemy-backed event store."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Set

from ..db import Database
from ..models.event import Event
from ..utils.timezone import now_local
from .base import EventStore

logger = logging.getLogger(__name__)

class SQLAlchemyEventStore(EventStore):
    """
    Event store running each operation in its own ``Database.session()``.

    The session scope commits on success and wraps any failure in
    ``SessionError``, so callers only ever see ``DatabaseError`` subclasses.
    """

    def __init__(self, database: Database):
        self.database = database

    @staticmethod
    def _active(query):
        return query.filter(Event.deleted_at.is_(None))

    def find_by_id(self, event_id: int) -> Optional[Event]:
        with self.database.session() as session:
            return self._active(session.query(Event)).filter(Event.id == event_id).first()

    def find_by_id_including_deleted(self, event_id: int) -> Optional[Event]:
        with self.database.session() as session:
            return session.get(Event, event_id)

    def list_active(self) -> List[Event]:
        with self.database.session() as session:
            return self._active(session.query(Event)).order_by(Event.id).all()

    def list_deleted(self) -> List[Event]:
        with self.database.session() as session:
            return (
                session.query(Event)
                .filter(Event.deleted_at.isnot(None))
                .order_by(Event.id)
                .all()
            )

    def create(self, fields: Dict[str, Any]) -> Event:
        with self.database.session() as session:
            event = Event()
            event.fill(fields)
            session.add(event)
            session.flush()
            session.refresh(event)
            logger.info(f"Created event {event.id}")
            return event

    def update(self, event_id: int, fields: Dict[str, Any]) -> None:
        with self.database.session() as session:
            event = self._active(session.query(Event)).filter(Event.id == event_id).first()
            if event is None:
                logger.warning(f"Update skipped, event {event_id} no longer exists")
                return
            event.fill(fields)
            # Touch even when no fillable field changed
            event.updated_at = now_local()
            logger.info(f"Updated event {event_id} fields: {sorted(fields)}")

    def delete_by_id(self, event_id: int) -> None:
        with self.database.session() as session:
            count = (
                self._active(session.query(Event))
                .filter(Event.id == event_id)
                .delete(synchronize_session=False)
            )
            logger.info(f"Deleted event {event_id} ({count} row)")

    def soft_delete_by_id(self, event_id: int) -> None:
        with self.database.session() as session:
            event = self._active(session.query(Event)).filter(Event.id == event_id).first()
            if event is None:
                logger.warning(f"Soft delete skipped, event {event_id} is not active")
                return
            event.deleted_at = now_local()
            logger.info(f"Soft-deleted event {event_id}")

    def restore_by_id(self, event_id: int) -> None:
        with self.database.session() as session:
            event = session.get(Event, event_id)
            if event is None or event.deleted_at is None:
                logger.warning(f"Restore skipped, event {event_id} is not deleted")
                return
            event.deleted_at = None
            event.updated_at = now_local()
            logger.info(f"Restored event {event_id}")

    def force_delete_by_id(self, event_id: int) -> None:
        with self.database.session() as session:
            count = (
                session.query(Event)
                .filter(Event.id == event_id)
                .delete(synchronize_session=False)
            )
            logger.info(f"Force-deleted event {event_id} ({count} row)")

    def delete_where_id_in(self, event_ids: Iterable[int]) -> int:
        ids = set(event_ids)
        if not ids:
            return 0
        with self.database.session() as session:
            count = (
                session.query(Event)
                .filter(Event.id.in_(ids))
                .delete(synchronize_session=False)
            )
            logger.info(f"Bulk-deleted {count} events")
            return count

    def existing_ids(self, event_ids: Iterable[int]) -> Set[int]:
        ids = set(event_ids)
        if not ids:
            return set()
        with self.database.session() as session:
            rows = session.query(Event.id).filter(Event.id.in_(ids)).all()
            return {row[0] for row in rows}

    def purge_deleted_before(self, cutoff: datetime) -> int:
        with self.database.session() as session:
            count = (
                session.query(Event)
                .filter(Event.deleted_at.isnot(None))
                .filter(Event.deleted_at < cutoff)
                .delete(synchronize_session=False)
            )
            logger.info(f"Purged {count} events deleted before {cutoff.isoformat()}")
            return count
