"""Request payload validation."""

from .schemas import MAX_EVENT_ID, BulkDeleteRequest, EventCreate, EventUpdate
from .validator import EventValidator, RuleSet, ValidationResult

__all__ = [
    'MAX_EVENT_ID',
    'BulkDeleteRequest',
    'EventCreate',
    'EventUpdate',
    'EventValidator',
    'RuleSet',
    'ValidationResult',
]
