"""Health check routes for the FastAPI application."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ... import __version__
from ...config.environment import IS_PRODUCTION_ENVIRONMENT
from ...db import Database, DatabaseError
from ..dependencies import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

@router.get("/")
def health_check(database: Database = Depends(get_db)):
    """Check if the application and database are healthy."""
    body = {
        "status": "healthy",
        "environment": "production" if IS_PRODUCTION_ENVIRONMENT else "development",
        "version": __version__,
        "database": "connected"
    }
    try:
        database.check_connection()
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        body.update(status="unhealthy", database=str(e))
        return JSONResponse(status_code=500, content=body)
    return body
