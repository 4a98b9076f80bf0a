"""
Observability package.

Structured logging for the backend via Logfire.
"""
from observability.logfire_config import LogfireConfig

__all__ = ["LogfireConfig"]
