"""
Configuration module for the application.
Exports the settings instances for use throughout the application.
"""

from config.settings import settings, get_settings
from config.redis_config import redis_settings

__all__ = ["settings", "get_settings", "redis_settings"]
