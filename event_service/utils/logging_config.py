"""Logging configuration for the application."""

import logging
import sys

_HANDLER_NAME = 'event_service_console'

def setup_logging(level: str = 'INFO'):
    """Configure logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Only attach our console handler once, uvicorn reload imports the app again
    if not any(getattr(h, 'name', None) == _HANDLER_NAME for h in root_logger.handlers):
        # Create a formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # Create a console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)

    # Configure specific loggers
    loggers = [
        'event_service.handlers.event_handler',
        'event_service.stores.sqlalchemy_store',
        'event_service.db.db_core',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Don't add handler here since it's already handled by root logger
