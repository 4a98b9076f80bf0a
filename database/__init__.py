"""
Database module initialization.
Exports database components for use throughout the application.
"""

from database.base import Base, SessionLocal
from database.policy import PoolPolicy
from database.exceptions import (
    DatabaseError,
    DatabaseConnectionError,
    HandleAcquisitionError,
    ConnectivityError,
    ShutdownError,
    DatabaseStateError,
    CacheConnectionError,
)
from database.manager import (
    ConnectionState,
    DatabaseManager,
    db_manager,
    get_db_manager,
    init_db,
    close_db,
    get_engine,
)
from database.cache import RedisManager, get_redis_manager, init_redis, close_redis
from database.session import get_db_context
from database.dependencies import get_db
from database.utils import (
    check_db_connection,
    get_db_info,
    sanitize_db_url,
)

__all__ = [
    # Base components
    "Base",
    "SessionLocal",
    "PoolPolicy",
    # Lifecycle
    "ConnectionState",
    "DatabaseManager",
    "db_manager",
    "get_db_manager",
    "init_db",
    "close_db",
    "get_engine",
    "RedisManager",
    "get_redis_manager",
    "init_redis",
    "close_redis",
    # Errors
    "DatabaseError",
    "DatabaseConnectionError",
    "HandleAcquisitionError",
    "ConnectivityError",
    "ShutdownError",
    "DatabaseStateError",
    "CacheConnectionError",
    # Session management
    "get_db_context",
    # FastAPI dependencies
    "get_db",
    # Utilities
    "check_db_connection",
    "get_db_info",
    "sanitize_db_url",
]
