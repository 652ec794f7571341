"""CORS configuration for the FastAPI application."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT

def _production_origins():
    """Read the comma-separated production origins from the environment."""
    raw = os.environ.get('CORS_ALLOWED_ORIGINS', '')
    return [origin.strip() for origin in raw.split(',') if origin.strip()]

# CORS Origins configuration
ALLOWED_ORIGINS = {
    False: ["*"],                   # Development - allow all
    True: _production_origins(),    # Production - restricted
}

# CORS Methods configuration
ALLOWED_METHODS = [
    "GET",      # List and show
    "POST",     # Create and restore
    "PUT",      # Full update
    "PATCH",    # Partial update
    "DELETE",   # Hard, bulk, soft and force delete
    "OPTIONS"   # Required for CORS preflight
]

# CORS Headers configuration
ALLOWED_HEADERS = [
    "Content-Type",   # For request bodies
    "Accept",         # For content negotiation
    "Accept-Language",
]

# Additional CORS settings
CORS_CONFIG = {
    "allow_origins": ALLOWED_ORIGINS[IS_PRODUCTION_ENVIRONMENT],
    "allow_credentials": False,
    "allow_methods": ALLOWED_METHODS,
    "allow_headers": ALLOWED_HEADERS,
    "expose_headers": [],
    "max_age": 3600,
}
