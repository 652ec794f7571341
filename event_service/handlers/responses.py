"""Uniform response envelope shared by every operation."""

from dataclasses import dataclass
from typing import Any, Dict, List

@dataclass
class HandlerResponse:
    """An envelope body paired with its HTTP status code."""
    status_code: int
    body: Dict[str, Any]

def success(message: str, data: Any, status_code: int = 200) -> HandlerResponse:
    return HandlerResponse(status_code, {'success': True, 'message': message, 'data': data})

def deleted_count(message: str, count: int) -> HandlerResponse:
    return HandlerResponse(200, {'success': True, 'message': message, 'deleted_count': count})

def failure(message: str, status_code: int) -> HandlerResponse:
    return HandlerResponse(status_code, {'success': False, 'message': message})

def validation_failure(message: str, errors: Dict[str, List[str]], status_code: int = 422) -> HandlerResponse:
    return HandlerResponse(status_code, {'success': False, 'message': message, 'errors': errors})

def server_error(message: str, error: str) -> HandlerResponse:
    return HandlerResponse(500, {'success': False, 'message': message, 'error': error})
