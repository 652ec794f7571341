"""Event store implementations."""

from .base import EventStore
from .sqlalchemy_store import SQLAlchemyEventStore

__all__ = ['EventStore', 'SQLAlchemyEventStore']
