"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Internal imports
from ..config.environment import IS_PRODUCTION_ENVIRONMENT # Environment must be imported first
from ..config.cors import CORS_CONFIG
from ..config.settings import get_app_config
from ..utils.logging_config import setup_logging
from .. import __version__
from .dependencies import get_db, get_messages
from .routes import events, health

# Set up logging
setup_logging(get_app_config().log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    provider = app.dependency_overrides.get(get_db, get_db)
    database = provider()
    try:
        database.ensure_tables_exist()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise
    yield
    # Shutdown
    database.dispose()

async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render framework-level request errors in the response envelope."""
    messages = get_messages(request.headers.get('accept-language'))

    # An id that is not an integer cannot name any event
    if any(error['loc'] and error['loc'][0] == 'path' for error in exc.errors()):
        return JSONResponse(status_code=404, content={
            'success': False,
            'message': messages.get('not_found')
        })

    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error['loc'] if part != 'body']
        name = '.'.join(loc) if loc and error['type'] != 'json_invalid' else 'body'
        key = 'body.invalid' if name == 'body' else 'field.invalid'
        errors.setdefault(name, []).append(messages.get(key, field=name))
    logger.info(f"Rejected malformed request to {request.url.path}: {list(errors)}")
    return JSONResponse(status_code=422, content={
        'success': False,
        'message': messages.get('validation_failed'),
        'errors': errors
    })

def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_app_config()
    app = FastAPI(
        title="Event Resource API",
        description="CRUD API for events with soft delete and restore",
        version=__version__,
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/redoc',
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include health check router without prefix
    app.include_router(health.router)

    # Include the events router under the configured prefix
    app.include_router(events.router, prefix=config.api_prefix)

    return app

# Create the application instance
app = create_application()
