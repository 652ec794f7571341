"""
Pytest configuration and fixtures for the event service tests.

Provides shared fixtures for:
- An in-memory SQLite database
- The SQLAlchemy event store and the resource handler
- A FastAPI test client wired to the test database
- Sample event factories
"""

import os

# Set test environment variables before importing app modules
os.environ['ENVIRONMENT'] = 'development'
os.environ['APP_LOCALE'] = 'en'
os.environ['APP_TIMEZONE'] = 'UTC'
os.environ['API_PREFIX'] = ''

import pytest
from fastapi.testclient import TestClient

from event_service.api.app import create_application
from event_service.api.dependencies import get_db
from event_service.db import Database, DatabaseConfig
from event_service.handlers import EventResourceHandler
from event_service.stores import SQLAlchemyEventStore
from event_service.utils.messages import Messages
from event_service.validation import EventValidator


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope='function')
def test_database():
    """Create an in-memory SQLite database for testing."""
    database = Database(DatabaseConfig(database_url='sqlite:///:memory:'))
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture(scope='function')
def event_store(test_database):
    """Create an SQLAlchemyEventStore on the test database."""
    return SQLAlchemyEventStore(test_database)


# ============================================================================
# Handler Fixtures
# ============================================================================

@pytest.fixture
def messages():
    """English message catalog."""
    return Messages('en')


@pytest.fixture
def event_handler(event_store, messages):
    """Create an EventResourceHandler backed by the test store."""
    return EventResourceHandler(event_store, EventValidator(messages, event_store), messages)


@pytest.fixture
def client(test_database):
    """FastAPI test client whose routes use the test database."""
    app = create_application()
    app.dependency_overrides[get_db] = lambda: test_database
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# Sample Data Factories
# ============================================================================

@pytest.fixture
def event_payload():
    """Factory for creating valid create payloads."""
    def _create(
        title='Standup',
        description='Daily sync',
        date='2025-01-10'
    ):
        return {'title': title, 'description': description, 'date': date}
    return _create


@pytest.fixture
def sample_event(event_store):
    """Factory for storing events directly through the store."""
    from datetime import date

    def _create(title='Standup', description='Daily sync', event_date=date(2025, 1, 10)):
        return event_store.create({'title': title, 'description': description, 'date': event_date})
    return _create
