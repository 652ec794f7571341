"""Application settings loaded from the environment."""

import logging
import os
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

SUPPORTED_LOCALES = ('en', 'id')

@dataclass
class AppConfig:
    """Application configuration settings."""

    locale: str = ""
    timezone: str = ""
    api_prefix: Optional[str] = None
    log_level: str = ""

    def __post_init__(self):
        """Load unset values from environment."""
        if not self.locale:
            self.locale = os.environ.get('APP_LOCALE', 'en').strip().lower()
        if not self.timezone:
            self.timezone = os.environ.get('APP_TIMEZONE', 'UTC').strip()
        if self.api_prefix is None:
            self.api_prefix = os.environ.get('API_PREFIX', '').strip().rstrip('/')
        if not self.log_level:
            self.log_level = os.environ.get('LOG_LEVEL', 'INFO').strip().upper()

    def validate(self) -> bool:
        """Validate the configuration."""
        if self.locale not in SUPPORTED_LOCALES:
            raise ValueError(
                f"APP_LOCALE must be one of {', '.join(SUPPORTED_LOCALES)}, got '{self.locale}'"
            )
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"APP_TIMEZONE '{self.timezone}' is not a valid timezone") from e
        if self.api_prefix and not self.api_prefix.startswith('/'):
            raise ValueError("API_PREFIX must start with '/'")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"LOG_LEVEL '{self.log_level}' is not a valid logging level")
        return True

# Module-level singleton instance
_app_config: Optional[AppConfig] = None

def get_app_config() -> AppConfig:
    """Get the validated application configuration, loading it on first use."""
    global _app_config
    if _app_config is None:
        config = AppConfig()
        config.validate()
        _app_config = config
    return _app_config
