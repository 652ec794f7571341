"""FastAPI dependencies wiring the handler to its collaborators."""

from typing import Optional

from fastapi import Depends, Header

from ..config.settings import SUPPORTED_LOCALES, get_app_config
from ..db import Database, get_database
from ..handlers import EventResourceHandler
from ..stores import EventStore, SQLAlchemyEventStore
from ..utils.messages import Messages
from ..validation import EventValidator

def resolve_locale(accept_language: Optional[str]) -> str:
    """Pick the first supported language from an Accept-Language header."""
    if accept_language:
        for part in accept_language.split(','):
            tag = part.split(';')[0].strip().lower().split('-')[0]
            if tag in SUPPORTED_LOCALES:
                return tag
    return get_app_config().locale

def get_db() -> Database:
    return get_database()

def get_event_store(database: Database = Depends(get_db)) -> EventStore:
    return SQLAlchemyEventStore(database)

def get_messages(accept_language: Optional[str] = Header(None)) -> Messages:
    return Messages(resolve_locale(accept_language))

def get_event_handler(
    store: EventStore = Depends(get_event_store),
    messages: Messages = Depends(get_messages)
) -> EventResourceHandler:
    return EventResourceHandler(store, EventValidator(messages, store), messages)
