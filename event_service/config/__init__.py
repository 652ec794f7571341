"""Configuration package initialization."""

from .environment import IS_PRODUCTION_ENVIRONMENT
from .settings import AppConfig, get_app_config

__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'AppConfig', 'get_app_config']
