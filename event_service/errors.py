"""Error taxonomy raised by the event handler and its collaborators."""

from typing import Dict, List

from .db import DatabaseError

# Any persistence failure, surfaced as 500
StoreError = DatabaseError

class EventServiceError(Exception):
    """Base exception for request-level failures."""
    status_code: int

class EventValidationError(EventServiceError):
    """Raised when the request payload fails its rule set."""
    status_code = 422

    def __init__(self, field_errors: Dict[str, List[str]]):
        super().__init__("Validation failed")
        self.field_errors = field_errors

class EventNotFoundError(EventServiceError):
    """Raised when the target id does not resolve to a record."""
    status_code = 404

    def __init__(self, event_id: int):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id

class EventStateError(EventServiceError):
    """Raised when a record exists but is not in the state the operation needs."""
    status_code = 400

    def __init__(self, event_id: int, message_key: str):
        super().__init__(f"Event {event_id} is in the wrong state for this operation")
        self.event_id = event_id
        self.message_key = message_key

__all__ = [
    'StoreError',
    'EventServiceError',
    'EventValidationError',
    'EventNotFoundError',
    'EventStateError',
]
