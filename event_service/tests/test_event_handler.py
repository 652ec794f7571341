"""
Unit tests for EventResourceHandler.

Covers every operation's envelope, the validation/not-found/state/store
failure paths, partial updates and the soft delete lifecycle.
"""

from datetime import date

import pytest

from event_service.db import SessionError
from event_service.errors import EventNotFoundError, EventStateError, EventValidationError
from event_service.handlers import EventResourceHandler
from event_service.stores.base import EventStore
from event_service.utils.messages import Messages


class BrokenStore(EventStore):
    """Store whose every call fails the way a lost connection would."""

    def _fail(self, *args, **kwargs):
        raise SessionError("Database session error: connection refused")

    find_by_id = _fail
    find_by_id_including_deleted = _fail
    list_active = _fail
    list_deleted = _fail
    create = _fail
    update = _fail
    delete_by_id = _fail
    soft_delete_by_id = _fail
    restore_by_id = _fail
    force_delete_by_id = _fail
    delete_where_id_in = _fail
    existing_ids = _fail
    purge_deleted_before = _fail


# ============================================================================
# List / Create / Get
# ============================================================================


class TestListEvents:
    """Tests for listing events."""

    def test_list_empty(self, event_handler):
        response = event_handler.list_events()

        assert response.status_code == 200
        assert response.body == {
            'success': True,
            'message': "Successfully retrieved all events",
            'data': []
        }

    def test_list_returns_active_events_in_id_order(self, event_handler, sample_event):
        first = sample_event(title='First')
        second = sample_event(title='Second')

        response = event_handler.list_events()

        assert [e['id'] for e in response.body['data']] == [first.id, second.id]


class TestCreateEvent:
    """Tests for event creation."""

    def test_create_returns_201_with_stored_fields(self, event_handler, event_payload):
        response = event_handler.create_event(event_payload())

        assert response.status_code == 201
        assert response.body['success'] is True
        assert response.body['message'] == "Event created successfully"
        data = response.body['data']
        assert data['id'] is not None
        assert data['title'] == 'Standup'
        assert data['description'] == 'Daily sync'
        assert data['date'] == date(2025, 1, 10)
        assert data['deleted_at'] is None
        assert data['is_deleted'] is False
        assert data['created_at'] is not None
        assert data['updated_at'] is not None

    def test_created_event_can_be_fetched(self, event_handler, event_payload):
        created = event_handler.create_event(event_payload()).body['data']

        fetched = event_handler.get_event(created['id'])

        assert fetched.status_code == 200
        assert fetched.body['data'] == created

    def test_create_missing_fields(self, event_handler):
        response = event_handler.create_event({})

        assert response.status_code == 422
        assert response.body['success'] is False
        assert response.body['message'] == "Validation failed"
        assert response.body['errors'] == {
            'title': ["The title field is required."],
            'description': ["The description field is required."],
            'date': ["The date field is required."],
        }

    def test_create_title_too_long(self, event_handler, event_payload):
        response = event_handler.create_event(event_payload(title='x' * 256))

        assert response.status_code == 422
        assert response.body['errors'] == {
            'title': ["The title field must not be greater than 255 characters."]
        }

    def test_create_title_at_limit(self, event_handler, event_payload):
        response = event_handler.create_event(event_payload(title='x' * 255))

        assert response.status_code == 201

    def test_create_invalid_date(self, event_handler, event_payload):
        response = event_handler.create_event(event_payload(date='not-a-date'))

        assert response.status_code == 422
        assert response.body['errors'] == {'date': ["The date field must be a valid date."]}

    def test_create_non_string_title(self, event_handler, event_payload):
        response = event_handler.create_event(event_payload(title=123))

        assert response.status_code == 422
        assert response.body['errors'] == {'title': ["The title field must be a string."]}

    def test_create_blank_title_counts_as_missing(self, event_handler, event_payload):
        response = event_handler.create_event(event_payload(title='   '))

        assert response.status_code == 422
        assert response.body['errors'] == {'title': ["The title field is required."]}

    def test_create_ignores_unknown_and_guarded_fields(self, event_handler, event_payload):
        payload = event_payload()
        payload.update(id=999, deleted_at='2025-01-01T00:00:00', location='Room 1')

        response = event_handler.create_event(payload)

        assert response.status_code == 201
        assert response.body['data']['id'] != 999
        assert response.body['data']['deleted_at'] is None
        assert 'location' not in response.body['data']

    def test_create_non_object_payload(self, event_handler):
        response = event_handler.create_event(['Standup'])

        assert response.status_code == 422
        assert 'body' in response.body['errors']


class TestGetEvent:
    """Tests for fetching a single event."""

    def test_get_unknown_id(self, event_handler):
        response = event_handler.get_event(12345)

        assert response.status_code == 404
        assert response.body == {'success': False, 'message': "Event not found"}

    def test_get_soft_deleted_is_not_found(self, event_handler, sample_event, event_store):
        event = sample_event()
        event_store.soft_delete_by_id(event.id)

        assert event_handler.get_event(event.id).status_code == 404


# ============================================================================
# Update
# ============================================================================


class TestUpdateEvent:
    """Tests for partial updates."""

    def test_partial_update_leaves_absent_fields(self, event_handler, sample_event):
        event = sample_event()

        response = event_handler.update_event(event.id, {'title': 'Retro'})

        assert response.status_code == 200
        assert response.body['message'] == "Event updated successfully"
        data = response.body['data']
        assert data['title'] == 'Retro'
        assert data['description'] == 'Daily sync'
        assert data['date'] == date(2025, 1, 10)

    def test_update_all_fields(self, event_handler, sample_event):
        event = sample_event()

        response = event_handler.update_event(event.id, {
            'title': 'Planning',
            'description': 'Sprint planning',
            'date': '2025-02-01'
        })

        data = response.body['data']
        assert (data['title'], data['description'], data['date']) == (
            'Planning', 'Sprint planning', date(2025, 2, 1)
        )

    def test_update_response_reflects_persisted_state(self, event_handler, sample_event):
        event = sample_event()

        updated = event_handler.update_event(event.id, {'description': 'Moved'}).body['data']

        assert event_handler.get_event(event.id).body['data'] == updated

    def test_empty_update_changes_nothing(self, event_handler, sample_event):
        event = sample_event()
        before = event_handler.get_event(event.id).body['data']

        response = event_handler.update_event(event.id, {})

        assert response.status_code == 200
        after = response.body['data']
        assert {k: after[k] for k in ('title', 'description', 'date')} == \
            {k: before[k] for k in ('title', 'description', 'date')}

    def test_update_explicit_null_is_rejected(self, event_handler, sample_event):
        event = sample_event()

        response = event_handler.update_event(event.id, {'title': None})

        assert response.status_code == 422
        assert response.body['errors'] == {'title': ["The title field is required."]}

    def test_update_invalid_field(self, event_handler, sample_event):
        event = sample_event()

        response = event_handler.update_event(event.id, {'date': '2025-13-45'})

        assert response.status_code == 422
        assert 'date' in response.body['errors']

    def test_update_unknown_id(self, event_handler):
        response = event_handler.update_event(404, {'title': 'Retro'})

        assert response.status_code == 404

    def test_update_validates_before_lookup(self, event_handler):
        response = event_handler.update_event(404, {'title': 'x' * 300})

        assert response.status_code == 422


# ============================================================================
# Deletes
# ============================================================================


class TestDeleteEvent:
    """Tests for single hard delete."""

    def test_delete_returns_pre_delete_record(self, event_handler, event_payload):
        created = event_handler.create_event(event_payload()).body['data']

        response = event_handler.delete_event(created['id'])

        assert response.status_code == 200
        assert response.body['message'] == "Event deleted successfully"
        assert response.body['data'] == created

    def test_get_after_delete_is_not_found(self, event_handler, sample_event, event_store):
        event = sample_event()

        event_handler.delete_event(event.id)

        assert event_handler.get_event(event.id).status_code == 404
        assert event_store.find_by_id_including_deleted(event.id) is None

    def test_delete_unknown_id(self, event_handler):
        assert event_handler.delete_event(7).status_code == 404

    def test_ids_are_not_reused(self, event_handler, event_payload):
        first = event_handler.create_event(event_payload()).body['data']['id']
        event_handler.delete_event(first)

        second = event_handler.create_event(event_payload()).body['data']['id']

        assert second > first


class TestBulkDeleteEvents:
    """Tests for deleting a set of ids."""

    def test_bulk_delete_reports_count(self, event_handler, sample_event):
        ids = [sample_event(title=f"Event {i}").id for i in range(3)]

        response = event_handler.bulk_delete_events({'ids': ids})

        assert response.status_code == 200
        assert response.body == {
            'success': True,
            'message': "Deleted 3 events",
            'deleted_count': 3
        }
        assert event_handler.list_events().body['data'] == []

    def test_bulk_delete_empty_array(self, event_handler):
        response = event_handler.bulk_delete_events({'ids': []})

        assert response.status_code == 422
        assert response.body['errors'] == {'ids': ["The ids field must have at least 1 items."]}

    def test_bulk_delete_missing_ids(self, event_handler):
        response = event_handler.bulk_delete_events({})

        assert response.status_code == 422
        assert response.body['errors'] == {'ids': ["The ids field is required."]}

    def test_bulk_delete_unknown_id_deletes_nothing(self, event_handler, sample_event):
        event = sample_event()

        response = event_handler.bulk_delete_events({'ids': [event.id, 9999]})

        assert response.status_code == 422
        assert response.body['errors'] == {'ids.1': ["The selected ids.1 is invalid."]}
        assert event_handler.get_event(event.id).status_code == 200

    def test_bulk_delete_rejects_non_integers(self, event_handler):
        response = event_handler.bulk_delete_events({'ids': ['a']})

        assert response.status_code == 422
        assert response.body['errors'] == {'ids.0': ["The ids.0 field must be an integer."]}

    def test_bulk_delete_includes_soft_deleted(self, event_handler, sample_event, event_store):
        active = sample_event()
        trashed = sample_event()
        event_store.soft_delete_by_id(trashed.id)

        response = event_handler.bulk_delete_events({'ids': [active.id, trashed.id]})

        assert response.body['deleted_count'] == 2
        assert event_store.find_by_id_including_deleted(trashed.id) is None

    def test_bulk_delete_duplicate_ids_count_once(self, event_handler, sample_event):
        event = sample_event()

        response = event_handler.bulk_delete_events({'ids': [event.id, event.id]})

        assert response.body['deleted_count'] == 1


class TestSoftDeleteLifecycle:
    """Tests for soft delete, restore and force delete."""

    def test_soft_delete_sets_deleted_at(self, event_handler, sample_event):
        event = sample_event()

        response = event_handler.soft_delete_event(event.id)

        assert response.status_code == 200
        assert response.body['message'] == "Event deleted successfully (soft delete)"
        assert response.body['data']['deleted_at'] is not None
        assert response.body['data']['is_deleted'] is True

    def test_soft_deleted_event_leaves_list_and_restore_brings_it_back(self, event_handler, sample_event):
        event = sample_event()
        event_handler.soft_delete_event(event.id)

        assert event_handler.list_events().body['data'] == []
        assert [e['id'] for e in event_handler.list_trashed_events().body['data']] == [event.id]

        restored = event_handler.restore_event(event.id)

        assert restored.status_code == 200
        assert restored.body['data']['deleted_at'] is None
        assert [e['id'] for e in event_handler.list_events().body['data']] == [event.id]
        assert event_handler.list_trashed_events().body['data'] == []

    def test_soft_delete_twice_is_not_found(self, event_handler, sample_event):
        event = sample_event()
        event_handler.soft_delete_event(event.id)

        assert event_handler.soft_delete_event(event.id).status_code == 404

    def test_restore_active_event_is_bad_request(self, event_handler, sample_event):
        event = sample_event()

        response = event_handler.restore_event(event.id)

        assert response.status_code == 400
        assert response.body == {'success': False, 'message': "Event is not in a deleted state"}

    def test_restore_unknown_id(self, event_handler):
        assert event_handler.restore_event(55).status_code == 404

    def test_force_delete_soft_deleted_event(self, event_handler, sample_event):
        event = sample_event()
        trashed = event_handler.soft_delete_event(event.id).body['data']

        response = event_handler.force_delete_event(event.id)

        assert response.status_code == 200
        assert response.body['message'] == "Event permanently deleted"
        assert response.body['data'] == trashed
        assert event_handler.restore_event(event.id).status_code == 404

    def test_force_delete_active_event(self, event_handler, sample_event):
        event = sample_event()

        assert event_handler.force_delete_event(event.id).status_code == 200
        assert event_handler.get_event(event.id).status_code == 404

    def test_force_delete_unknown_id(self, event_handler):
        assert event_handler.force_delete_event(3).status_code == 404


# ============================================================================
# Store failures and localization
# ============================================================================


class TestStoreFailures:
    """Every operation reports store errors as 500."""

    @pytest.fixture
    def broken_handler(self, messages):
        return EventResourceHandler(BrokenStore(), messages=messages)

    @pytest.mark.parametrize('call, message', [
        (lambda h: h.list_events(), "Failed to retrieve events"),
        (lambda h: h.list_trashed_events(), "Failed to retrieve deleted events"),
        (lambda h: h.create_event({'title': 'a', 'description': 'b', 'date': '2025-01-10'}),
         "Failed to create event"),
        (lambda h: h.get_event(1), "Failed to retrieve event"),
        (lambda h: h.update_event(1, {'title': 'a'}), "Failed to update event"),
        (lambda h: h.delete_event(1), "Failed to delete event"),
        (lambda h: h.bulk_delete_events({'ids': [1]}), "Failed to delete events"),
        (lambda h: h.soft_delete_event(1), "Failed to delete event"),
        (lambda h: h.restore_event(1), "Failed to restore event"),
        (lambda h: h.force_delete_event(1), "Failed to permanently delete event"),
    ])
    def test_store_error_is_500(self, broken_handler, call, message):
        response = call(broken_handler)

        assert response.status_code == 500
        assert response.body == {
            'success': False,
            'message': message,
            'error': "Database session error: connection refused"
        }

    def test_validation_runs_before_store(self, broken_handler):
        response = broken_handler.create_event({})

        assert response.status_code == 422


class TestLocalizedMessages:
    """The handler speaks the locale it was given."""

    def test_indonesian_messages(self, event_store):
        messages = Messages('id')
        handler = EventResourceHandler(event_store, messages=messages)

        assert handler.get_event(1).body['message'] == "Kegiatan tidak ditemukan"
        assert handler.create_event({}).body['errors']['title'] == ["Kolom title wajib diisi."]


class TestIdRange:
    """Ids the store column cannot hold never reach the store."""

    @pytest.mark.parametrize('event_id', [0, -5, 2147483648, 99999999999999999999])
    def test_out_of_range_ids_are_not_found(self, messages, event_id):
        handler = EventResourceHandler(BrokenStore(), messages=messages)

        assert handler.get_event(event_id).status_code == 404
        assert handler.update_event(event_id, {'title': 'Retro'}).status_code == 404
        assert handler.delete_event(event_id).status_code == 404
        assert handler.soft_delete_event(event_id).status_code == 404
        assert handler.restore_event(event_id).status_code == 404
        assert handler.force_delete_event(event_id).status_code == 404


class TestErrorStatusCodes:
    """Envelope status codes come from the error types."""

    @pytest.mark.parametrize('error, status', [
        (EventValidationError({'title': ['x']}), 422),
        (EventNotFoundError(1), 404),
        (EventStateError(1, 'restore.not_deleted'), 400),
    ])
    def test_run_uses_error_status(self, event_handler, error, status):
        def operation():
            raise error

        assert event_handler._run('show', operation).status_code == status
