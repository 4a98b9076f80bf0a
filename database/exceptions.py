"""
Custom exceptions for the database connection lifecycle.

Each lifecycle step fails with its own exception type so startup code can
tell a bad DSN apart from an unreachable server.
"""

from typing import Optional


class DatabaseError(Exception):
    """
    Base exception for connection lifecycle failures.

    Attributes:
        original_error: The underlying driver/ORM exception, if any
    """

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        self.original_error = original_error
        if original_error is not None:
            message = f"{message}: {original_error}"
        super().__init__(message)


class DatabaseConnectionError(DatabaseError):
    """
    Raised when the engine cannot be created from the DSN.

    Examples: malformed URL, unknown driver, network DSN without credentials.
    """
    pass


class HandleAcquisitionError(DatabaseError):
    """
    Raised when the engine was created but its connection pool is unusable.
    """
    pass


class ConnectivityError(DatabaseError):
    """
    Raised when the database does not answer the liveness ping.
    """
    pass


class ShutdownError(DatabaseError):
    """
    Raised when releasing the pooled connections fails.
    """
    pass


class DatabaseStateError(DatabaseError):
    """
    Raised when an operation is not valid in the current lifecycle state,
    e.g. accessing the engine before initialize() or after close().
    """
    pass


class CacheConnectionError(DatabaseError):
    """
    Raised when the Redis cache cannot be reached on startup.
    """
    pass
