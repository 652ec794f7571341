"""Main application entry point."""

from event_service.config.environment import IS_PRODUCTION_ENVIRONMENT
from event_service.api.app import app

if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.environ.get('PORT', 8000))

    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - reload needs the import string rather than the app instance
        uvicorn.run(
            "event_service.api.app:app",
            host="0.0.0.0",
            port=port,
            reload=True,
            log_level="debug"
        )
    else:
        # Production mode - use string reference for proper multi-worker support
        uvicorn.run(
            "event_service.api.app:app",  # String reference required for multiple workers
            host="0.0.0.0",
            port=port,
            reload=False,
            workers=int(os.environ.get('WEB_CONCURRENCY', 4)),
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
