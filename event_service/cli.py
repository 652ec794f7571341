"""
Command-line interface for maintaining the events database.

This module handles:
- Creating the database schema
- Listing stored events (active or soft-deleted)
- Purging soft-deleted events that have been in the trash for too long

For usage information, run:
    events-admin --help

Common use cases:
    # Create tables in the configured database
    events-admin init-db

    # Show active events
    events-admin list

    # Show soft-deleted events
    events-admin list --trashed

    # Permanently remove events soft-deleted more than 30 days ago
    events-admin purge-trashed --older-than-days 30
"""

import argparse
import logging
import sys
from datetime import timedelta
from typing import List, Optional

from .config.environment import IS_PRODUCTION_ENVIRONMENT
from .config.settings import get_app_config
from .db import Database, DatabaseError, get_database
from .stores import SQLAlchemyEventStore
from .utils.logging_config import setup_logging
from .utils.timezone import now_local

logger = logging.getLogger(__name__)

def init_db(database: Database) -> int:
    """Create all tables."""
    database.init_db()
    logger.info(f"Schema ready ({'production' if IS_PRODUCTION_ENVIRONMENT else 'development'} database)")
    return 0

def list_events(database: Database, trashed: bool = False) -> int:
    """Log one line per event."""
    store = SQLAlchemyEventStore(database)
    events = store.list_deleted() if trashed else store.list_active()
    logger.info(f"Found {len(events)} {'deleted' if trashed else 'active'} events")
    for event in events:
        logger.info(str(event))
    return 0

def purge_trashed(database: Database, older_than_days: int) -> int:
    """Permanently delete events soft-deleted before the cutoff."""
    if older_than_days < 0:
        logger.error("--older-than-days must not be negative")
        return 2
    cutoff = now_local() - timedelta(days=older_than_days)
    count = SQLAlchemyEventStore(database).purge_deleted_before(cutoff)
    logger.info(f"Purged {count} events deleted before {cutoff.isoformat()}")
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maintain the events database")
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help="Create the database schema")

    list_parser = subparsers.add_parser('list', help="List stored events")
    list_parser.add_argument('--trashed', action='store_true', help="List soft-deleted events instead")

    purge_parser = subparsers.add_parser('purge-trashed', help="Permanently remove old soft-deleted events")
    purge_parser.add_argument(
        '--older-than-days',
        type=int,
        default=30,
        help="Only purge events deleted more than this many days ago (default: 30)"
    )
    return parser

def main(argv: Optional[List[str]] = None, database: Optional[Database] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(get_app_config().log_level)

    try:
        database = database or get_database()
        if args.command == 'init-db':
            return init_db(database)
        if args.command == 'list':
            return list_events(database, trashed=args.trashed)
        return purge_trashed(database, args.older_than_days)
    except DatabaseError as e:
        logger.error(f"Database error: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
