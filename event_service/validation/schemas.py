"""
Pydantic schemas for event request validation.
"""

import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic_core import PydanticCustomError

TITLE_MAX_LENGTH = 255

# Upper bound of the events.id column (int4 on PostgreSQL)
MAX_EVENT_ID = 2147483647

def _calendar_date_input(value):
    """Only ISO strings (or date objects from Python callers) name a calendar date."""
    if value is None or isinstance(value, (str, datetime.date)):
        return value
    raise PydanticCustomError('date_type', 'Input should be a date string')

class _EventPayload(BaseModel):
    # Unknown keys are dropped, blank strings become too-short errors
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

class EventCreate(_EventPayload):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1)
    date: datetime.date

    check_date = field_validator('date', mode='before')(_calendar_date_input)

class EventUpdate(_EventPayload):
    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime.date] = None

    check_date = field_validator('date', mode='before')(_calendar_date_input)

    @field_validator('title', 'description', 'date', mode='before')
    @classmethod
    def reject_explicit_null(cls, value):
        """A field sent in the payload must carry a value."""
        if value is None:
            raise PydanticCustomError('required', 'Field is required when present')
        return value

class BulkDeleteRequest(BaseModel):
    model_config = ConfigDict(extra='ignore')

    ids: List[StrictInt] = Field(..., min_length=1)
