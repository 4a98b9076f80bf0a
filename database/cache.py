"""
Redis cache connection lifecycle.

Mirrors DatabaseManager on a smaller scale: one client per process,
initialized on startup, closed on shutdown. The cache is optional, so
callers are expected to log a failed initialize() and carry on.
"""

from typing import Optional

import logfire
import redis

from config.redis_config import RedisSettings, redis_settings
from database.exceptions import CacheConnectionError, DatabaseStateError, ShutdownError
from database.manager import ConnectionState


class RedisManager:
    """Owns the process-wide Redis client."""

    def __init__(self, cache_settings: Optional[RedisSettings] = None):
        self.settings = cache_settings or redis_settings
        self._client: Optional[redis.Redis] = None
        self._state = ConnectionState.UNINITIALIZED

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ConnectionState.READY

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            raise DatabaseStateError(
                f"Redis client is not available (state: {self._state.value})"
            )
        return self._client

    def initialize(self) -> redis.Redis:
        """
        Create the client and ping the server.

        Raises:
            DatabaseStateError: Already initialized or closed
            CacheConnectionError: Redis did not answer the ping
        """
        if self._state is not ConnectionState.UNINITIALIZED:
            raise DatabaseStateError(
                f"Cannot initialize Redis from state '{self._state.value}'"
            )

        client = redis.from_url(
            self.settings.redis_url,
            socket_connect_timeout=self.settings.redis_socket_timeout_seconds,
            socket_timeout=self.settings.redis_socket_timeout_seconds,
        )
        try:
            client.ping()
        except redis.RedisError as e:
            client.close()
            raise CacheConnectionError("Failed to connect to redis", e) from e

        self._client = client
        self._state = ConnectionState.READY
        logfire.info("Redis connected successfully", address=self.settings.address)
        return client

    def close(self) -> None:
        """Close the client. No-op unless READY."""
        if self._client is None:
            return

        client = self._client
        self._client = None
        self._state = ConnectionState.CLOSED
        try:
            client.close()
        except redis.RedisError as e:
            raise ShutdownError("Failed to close redis client", e) from e


redis_manager = RedisManager()


def get_redis_manager() -> RedisManager:
    """Return the process-wide Redis manager."""
    return redis_manager


def init_redis() -> redis.Redis:
    return get_redis_manager().initialize()


def close_redis() -> None:
    get_redis_manager().close()
