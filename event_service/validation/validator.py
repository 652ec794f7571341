"""Rule-set based validation returning a result value instead of raising."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from ..stores.base import EventStore
from ..utils.messages import Messages
from .schemas import MAX_EVENT_ID, BulkDeleteRequest, EventCreate, EventUpdate

logger = logging.getLogger(__name__)

class RuleSet(str, Enum):
    """Named rule sets the handler validates payloads against."""
    CREATE = 'create'
    UPDATE = 'update'
    BULK_DELETE = 'bulk_delete'

SCHEMAS: Dict[RuleSet, Type[BaseModel]] = {
    RuleSet.CREATE: EventCreate,
    RuleSet.UPDATE: EventUpdate,
    RuleSet.BULK_DELETE: BulkDeleteRequest,
}

@dataclass
class ValidationResult:
    """
    Outcome of validating one payload.

    Fields:
        ok: Whether every rule passed
        data: The validated fields that were present in the payload
        field_errors: Field name to list of messages, empty when ok
    """
    ok: bool
    data: Dict[str, Any] = field(default_factory=dict)
    field_errors: Dict[str, List[str]] = field(default_factory=dict)

class EventValidator:
    """Validates event payloads and renders localized field errors."""

    def __init__(self, messages: Messages, store: Optional[EventStore] = None):
        """
        Args:
            messages: Catalog used for field error messages
            store: Used by the bulk-delete rule set to check that ids exist
        """
        self.messages = messages
        self.store = store

    def validate(self, payload: Any, rule_set: RuleSet) -> ValidationResult:
        """
        Validate ``payload`` against ``rule_set``.

        Raises:
            DatabaseError: If the id existence check cannot reach the store
        """
        if not isinstance(payload, dict):
            return ValidationResult(ok=False, field_errors={'body': [self.messages.get('body.invalid')]})

        schema = SCHEMAS[rule_set]
        try:
            model = schema.model_validate(payload)
        except ValidationError as e:
            errors = self._render_errors(e)
            logger.debug(f"Payload failed {rule_set.value} rules: {errors}")
            return ValidationResult(ok=False, field_errors=errors)

        data = model.model_dump(exclude_unset=True)

        if rule_set is RuleSet.BULK_DELETE:
            errors = self._check_ids_exist(data['ids'])
            if errors:
                return ValidationResult(ok=False, field_errors=errors)

        return ValidationResult(ok=True, data=data)

    def _check_ids_exist(self, ids: List[int]) -> Dict[str, List[str]]:
        if self.store is None:
            raise RuntimeError("Bulk delete validation needs an event store")
        # Ids beyond the column range are unknown without asking the store
        in_range = [i for i in ids if 1 <= i <= MAX_EVENT_ID]
        existing = self.store.existing_ids(in_range) if in_range else set()
        errors: Dict[str, List[str]] = {}
        for index, event_id in enumerate(ids):
            if event_id not in existing:
                name = f"ids.{index}"
                errors[name] = [self.messages.get('field.exists', field=name)]
        return errors

    def _render_errors(self, exc: ValidationError) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        for error in exc.errors():
            name = '.'.join(str(part) for part in error['loc']) or 'body'
            errors.setdefault(name, []).append(self._message_for(name, error))
        return errors

    def _message_for(self, name: str, error: Dict[str, Any]) -> str:
        """Translate one pydantic error into a catalog message."""
        kind = error['type']
        ctx = error.get('ctx') or {}

        if kind in ('missing', 'required') or error.get('input', '') is None:
            return self.messages.get('field.required', field=name)
        if kind == 'string_too_short' and ctx.get('min_length') == 1:
            return self.messages.get('field.required', field=name)
        if kind == 'string_type':
            return self.messages.get('field.string', field=name)
        if kind == 'string_too_long':
            return self.messages.get('field.max', field=name, max=ctx.get('max_length'))
        if kind.startswith('date'):
            return self.messages.get('field.date', field=name)
        if kind == 'list_type':
            return self.messages.get('field.array', field=name)
        if kind == 'too_short':
            return self.messages.get('field.min_items', field=name, min=ctx.get('min_length'))
        if kind.startswith('int'):
            return self.messages.get('field.integer', field=name)
        return self.messages.get('field.invalid', field=name)
