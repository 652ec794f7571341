"""Handler implementing the CRUD operations of the event resource.

Every operation validates its input, resolves the target record and
performs one store call. Failures are raised as the typed errors from
``event_service.errors`` and turned into envelopes in ``_run``, so nothing
escapes to the caller.
"""

import logging
from typing import Any, Callable, Dict, Optional

from ..errors import EventNotFoundError, EventStateError, EventValidationError, StoreError
from ..models.event import Event
from ..stores.base import EventStore
from ..utils.messages import Messages
from ..validation import MAX_EVENT_ID, EventValidator, RuleSet
from . import responses
from .responses import HandlerResponse

logger = logging.getLogger(__name__)

class EventResourceHandler:
    """Maps each event operation onto the store and shapes the envelope."""

    def __init__(
        self,
        store: EventStore,
        validator: Optional[EventValidator] = None,
        messages: Optional[Messages] = None
    ):
        self.store = store
        self.messages = messages or Messages()
        self.validator = validator or EventValidator(self.messages, store)

    # Operations

    def list_events(self) -> HandlerResponse:
        """Return every active event."""
        def operation():
            events = self.store.list_active()
            return responses.success(self.messages.get('list.success'), [e.to_dict() for e in events])
        return self._run('list', operation)

    def list_trashed_events(self) -> HandlerResponse:
        """Return every soft-deleted event."""
        def operation():
            events = self.store.list_deleted()
            return responses.success(self.messages.get('trashed.success'), [e.to_dict() for e in events])
        return self._run('trashed', operation)

    def create_event(self, payload: Any) -> HandlerResponse:
        """Validate a full payload and store a new event."""
        def operation():
            fields = self._validate(payload, RuleSet.CREATE)
            event = self.store.create(fields)
            return responses.success(self.messages.get('create.success'), event.to_dict(), status_code=201)
        return self._run('create', operation)

    def get_event(self, event_id: int) -> HandlerResponse:
        """Return one active event."""
        def operation():
            event = self._find_active(event_id)
            return responses.success(self.messages.get('show.success'), event.to_dict())
        return self._run('show', operation)

    def update_event(self, event_id: int, payload: Any) -> HandlerResponse:
        """
        Apply a partial update.

        Only keys present in the payload are written. The payload is checked
        before the record is looked up, so a bad payload answers 422 even for
        an unknown id.
        """
        def operation():
            fields = self._validate(payload, RuleSet.UPDATE)
            self._find_active(event_id)
            self.store.update(event_id, fields)
            event = self._find_active(event_id)
            return responses.success(self.messages.get('update.success'), event.to_dict())
        return self._run('update', operation)

    def delete_event(self, event_id: int) -> HandlerResponse:
        """Permanently delete an active event, answering with its last state."""
        def operation():
            snapshot = self._find_active(event_id).to_dict()
            self.store.delete_by_id(event_id)
            return responses.success(self.messages.get('delete.success'), snapshot)
        return self._run('delete', operation)

    def bulk_delete_events(self, payload: Any) -> HandlerResponse:
        """Permanently delete every listed event."""
        def operation():
            fields = self._validate(payload, RuleSet.BULK_DELETE)
            count = self.store.delete_where_id_in(fields['ids'])
            return responses.deleted_count(self.messages.get('bulk_delete.success', count=count), count)
        return self._run('bulk_delete', operation)

    def soft_delete_event(self, event_id: int) -> HandlerResponse:
        """Mark an active event as deleted."""
        def operation():
            self._find_active(event_id)
            self.store.soft_delete_by_id(event_id)
            event = self._find_any(event_id)
            return responses.success(self.messages.get('soft_delete.success'), event.to_dict())
        return self._run('soft_delete', operation)

    def restore_event(self, event_id: int) -> HandlerResponse:
        """Bring a soft-deleted event back."""
        def operation():
            event = self._find_any(event_id)
            if not event.is_deleted:
                raise EventStateError(event_id, 'restore.not_deleted')
            self.store.restore_by_id(event_id)
            event = self._find_any(event_id)
            return responses.success(self.messages.get('restore.success'), event.to_dict())
        return self._run('restore', operation)

    def force_delete_event(self, event_id: int) -> HandlerResponse:
        """Permanently delete an event whether or not it is soft-deleted."""
        def operation():
            snapshot = self._find_any(event_id).to_dict()
            self.store.force_delete_by_id(event_id)
            return responses.success(self.messages.get('force_delete.success'), snapshot)
        return self._run('force_delete', operation)

    # Helpers

    def _validate(self, payload: Any, rule_set: RuleSet) -> Dict[str, Any]:
        result = self.validator.validate(payload, rule_set)
        if not result.ok:
            raise EventValidationError(result.field_errors)
        return result.data

    @staticmethod
    def _check_id_range(event_id: int) -> None:
        # Ids outside the column range cannot exist and must not reach the store
        if not 1 <= event_id <= MAX_EVENT_ID:
            raise EventNotFoundError(event_id)

    def _find_active(self, event_id: int) -> Event:
        self._check_id_range(event_id)
        event = self.store.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _find_any(self, event_id: int) -> Event:
        self._check_id_range(event_id)
        event = self.store.find_by_id_including_deleted(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def _run(self, action: str, operation: Callable[[], HandlerResponse]) -> HandlerResponse:
        """Run one operation and translate its failures into envelopes."""
        try:
            return operation()
        except EventValidationError as e:
            logger.info(f"{action}: validation failed for {sorted(e.field_errors)}")
            return responses.validation_failure(self.messages.get('validation_failed'), e.field_errors, e.status_code)
        except EventNotFoundError as e:
            logger.info(f"{action}: event {e.event_id} not found")
            return responses.failure(self.messages.get('not_found'), e.status_code)
        except EventStateError as e:
            logger.info(f"{action}: {e}")
            return responses.failure(self.messages.get(e.message_key), e.status_code)
        except StoreError as e:
            logger.error(f"{action}: store error: {e}")
            return responses.server_error(self.messages.get(f"{action}.failed"), str(e))
        except Exception as e:
            logger.exception(f"{action}: unexpected error")
            return responses.server_error(self.messages.get(f"{action}.failed"), str(e))
