"""Request handlers, independent of the HTTP framework."""

from .event_handler import EventResourceHandler
from .responses import HandlerResponse

__all__ = ['EventResourceHandler', 'HandlerResponse']
