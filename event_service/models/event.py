"""Event model definition."""

from typing import Any, Dict

from sqlalchemy import Column, Date, DateTime, Integer, String, Text

from .base import Base
from ..utils.timezone import ensure_timezone, now_local

class Event(Base):
    """
    Event model, the only resource exposed by the service.

    Soft deletion is explicit: a record is logically removed when
    ``deleted_at`` is set. Nothing filters deleted rows implicitly, the
    store decides per query whether to include them.

    Fields:
        id: Unique identifier (auto-generated, never reused)
        title: Event title (max 255 characters)
        description: Event description
        date: Calendar date of the event
        created_at: When this event was first stored
        updated_at: When this event was last modified
        deleted_at: When this event was soft-deleted (None while active)
    """
    __tablename__ = 'events'

    # sqlite_autoincrement keeps SQLite from reusing the ids of deleted rows
    __table_args__ = {'sqlite_autoincrement': True}

    # Required fields
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(Date, nullable=False)

    # Store-assigned timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_local)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_local, onupdate=now_local)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Fields that may be mass-assigned from validated input
    FILLABLE = ('title', 'description', 'date')

    @property
    def is_deleted(self) -> bool:
        """Whether the event is currently soft-deleted."""
        return self.deleted_at is not None

    def fill(self, fields: Dict[str, Any]) -> None:
        """Assign the fillable subset of ``fields``, ignoring anything else."""
        for name in self.FILLABLE:
            if name in fields:
                setattr(self, name, fields[name])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'date': self.date,
            'created_at': ensure_timezone(self.created_at),
            'updated_at': ensure_timezone(self.updated_at),
            'deleted_at': ensure_timezone(self.deleted_at),
            'is_deleted': self.is_deleted
        }

    def __str__(self) -> str:
        """String representation."""
        return f"Event(id={self.id}, title={self.title}, date={self.date}, deleted={self.is_deleted})"
