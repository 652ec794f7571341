"""Events router module."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ...handlers import EventResourceHandler, HandlerResponse
from ..dependencies import get_event_handler
from ...validation import MAX_EVENT_ID

router = APIRouter(prefix="/events", tags=["events"])

# Ids outside the column range answer 404 through the path error handler
EventId = Annotated[int, Path(ge=1, le=MAX_EVENT_ID)]

def render(response: HandlerResponse) -> JSONResponse:
    """Serialize a handler envelope, dates included."""
    return JSONResponse(status_code=response.status_code, content=jsonable_encoder(response.body))

def _body(payload: Any) -> Any:
    return {} if payload is None else payload

# Fixed paths are registered before /{event_id} so they are not read as ids

@router.get("")
def list_events(handler: EventResourceHandler = Depends(get_event_handler)):
    """List all active events."""
    return render(handler.list_events())

@router.get("/trashed")
def list_trashed_events(handler: EventResourceHandler = Depends(get_event_handler)):
    """List soft-deleted events."""
    return render(handler.list_trashed_events())

@router.post("")
def create_event(
    payload: Any = Body(None),
    handler: EventResourceHandler = Depends(get_event_handler)
):
    """Create an event from title, description and date."""
    return render(handler.create_event(_body(payload)))

@router.delete("/bulk")
def bulk_delete_events(
    payload: Any = Body(None),
    handler: EventResourceHandler = Depends(get_event_handler)
):
    """Permanently delete every event listed in ``ids``."""
    return render(handler.bulk_delete_events(_body(payload)))

@router.get("/{event_id}")
def get_event(event_id: EventId, handler: EventResourceHandler = Depends(get_event_handler)):
    """Get a single active event by ID."""
    return render(handler.get_event(event_id))

@router.put("/{event_id}")
@router.patch("/{event_id}")
def update_event(
    event_id: EventId,
    payload: Any = Body(None),
    handler: EventResourceHandler = Depends(get_event_handler)
):
    """Update only the fields present in the payload."""
    return render(handler.update_event(event_id, _body(payload)))

@router.delete("/{event_id}")
def delete_event(event_id: EventId, handler: EventResourceHandler = Depends(get_event_handler)):
    """Permanently delete an active event."""
    return render(handler.delete_event(event_id))

@router.delete("/{event_id}/soft")
def soft_delete_event(event_id: EventId, handler: EventResourceHandler = Depends(get_event_handler)):
    """Soft-delete an event so it can be restored later."""
    return render(handler.soft_delete_event(event_id))

@router.post("/{event_id}/restore")
def restore_event(event_id: EventId, handler: EventResourceHandler = Depends(get_event_handler)):
    """Restore a soft-deleted event."""
    return render(handler.restore_event(event_id))

@router.delete("/{event_id}/force")
def force_delete_event(event_id: EventId, handler: EventResourceHandler = Depends(get_event_handler)):
    """Permanently delete an event, including soft-deleted ones."""
    return render(handler.force_delete_event(event_id))
