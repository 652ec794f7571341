"""Timezone helpers for store-assigned timestamps."""

from datetime import datetime
from zoneinfo import ZoneInfo

from ..config.settings import get_app_config

def app_timezone() -> ZoneInfo:
    """Return the configured application timezone."""
    return ZoneInfo(get_app_config().timezone)

def now_local() -> datetime:
    """Current time as an aware datetime in the application timezone."""
    return datetime.now(app_timezone())

def ensure_timezone(dt: datetime) -> datetime:
    """
    Make sure a datetime is timezone-aware.

    Naive datetimes (e.g. read back from SQLite) are assumed to already be
    in the application timezone.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=app_timezone())
    return dt.astimezone(app_timezone())
