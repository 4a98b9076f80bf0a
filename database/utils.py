"""
Database utility functions.
Provides helpers for health checks and safe logging of connection URLs.
"""

from typing import Optional, Union

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from config import settings
from database.exceptions import DatabaseStateError
from database.manager import PING_QUERY, DatabaseManager, get_db_manager


def check_db_connection(manager: Optional[DatabaseManager] = None) -> bool:
    """
    Check if the shared database connection is working.

    Returns:
        bool: True if the manager is ready and the ping succeeds, False otherwise
    """
    manager = manager or get_db_manager()
    try:
        with manager.engine.connect() as connection:
            connection.execute(text(PING_QUERY))
        return True
    except (DatabaseStateError, SQLAlchemyError, OSError):
        return False


def sanitize_db_url(url: Union[str, URL]) -> str:
    """
    Hide the password in a database URL for safe logging.

    Values that are not SQLAlchemy URLs are returned unchanged.
    """
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return str(url)


def get_db_info(manager: Optional[DatabaseManager] = None) -> dict:
    """
    Get database connection information and status.

    Returns:
        dict: connection status, lifecycle state, sanitized URL and pool status
    """
    manager = manager or get_db_manager()
    is_connected = check_db_connection(manager)

    url = manager.engine.url if manager.is_ready else settings.database_url
    info = {
        "status": "connected" if is_connected else "disconnected",
        "state": manager.state.value,
        "url": sanitize_db_url(url),
        "environment": settings.environment,
    }
    if manager.is_ready:
        info["pool"] = manager.pool_status()
    return info
