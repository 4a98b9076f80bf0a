"""
Database connection lifecycle.

DatabaseManager owns the single shared SQLAlchemy engine of the process:

    UNINITIALIZED --initialize()--> READY --close()--> CLOSED

- initialize() opens the engine, checks its pool, pings the database and
  only then publishes the engine. Any failure leaves the manager
  UNINITIALIZED with no engine.
- close() disposes the pool. It is a no-op unless the manager is READY.
- engine raises DatabaseStateError outside READY instead of handing out a
  disposed engine.

initialize() and close() belong on the startup and shutdown paths; they are
not safe to call concurrently with each other.
"""

import time
from contextlib import suppress
from enum import Enum
from typing import Any, Dict, Optional, Union

import logfire
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from config import settings
from database.exceptions import (
    ConnectivityError,
    DatabaseConnectionError,
    DatabaseStateError,
    HandleAcquisitionError,
    ShutdownError,
)
from database.policy import PoolPolicy

PING_QUERY = "SELECT 1"

# Drivers that accept libpq's connect_timeout keyword
_CONNECT_TIMEOUT_DRIVERS = {"psycopg2", "psycopg"}


class ConnectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


class DatabaseManager:
    """
    Owns the process-wide engine and its connection pool.

    Args:
        policy: Pool size/lifetime limits (defaults: 25 open, 5 idle, 5h)
        pool_pre_ping: Check each connection before checkout
        echo: Log SQL statements
        connect_retries: Extra ping attempts on initialize (0 = fail fast)
        retry_delay: Delay before the first retry, doubled after each attempt
        connect_timeout: Driver connect timeout in seconds (PostgreSQL only)
    """

    def __init__(
        self,
        policy: Optional[PoolPolicy] = None,
        *,
        pool_pre_ping: bool = True,
        echo: bool = False,
        connect_retries: int = 0,
        retry_delay: float = 0.5,
        connect_timeout: Optional[int] = None,
    ):
        if connect_retries < 0:
            raise ValueError("connect_retries cannot be negative")
        self.policy = policy or PoolPolicy()
        self.pool_pre_ping = pool_pre_ping
        self.echo = echo
        self.connect_retries = connect_retries
        self.retry_delay = retry_delay
        self.connect_timeout = connect_timeout

        self._engine: Optional[Engine] = None
        self._state = ConnectionState.UNINITIALIZED

    @classmethod
    def from_settings(cls, app_settings) -> "DatabaseManager":
        """Build a manager from the db_* fields of Settings."""
        return cls(
            PoolPolicy.from_settings(app_settings),
            pool_pre_ping=app_settings.db_pool_pre_ping,
            echo=app_settings.db_echo,
            connect_retries=app_settings.db_connect_retries,
            retry_delay=app_settings.db_retry_delay_seconds,
            connect_timeout=app_settings.db_connect_timeout_seconds or None,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ConnectionState.READY

    @property
    def engine(self) -> Engine:
        """
        The shared engine.

        Raises:
            DatabaseStateError: If initialize() has not succeeded or close() ran
        """
        if self._state is not ConnectionState.READY or self._engine is None:
            raise DatabaseStateError(
                f"Database engine is not available (state: {self._state.value})"
            )
        return self._engine

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, dsn: Union[str, URL]) -> Engine:
        """
        Open, check and publish the shared engine.

        Raises:
            DatabaseStateError: Manager is already READY or was CLOSED
            DatabaseConnectionError: The engine cannot be created from the DSN
            HandleAcquisitionError: The engine has no usable QueuePool
            ConnectivityError: The database did not answer the ping
        """
        if self._state is not ConnectionState.UNINITIALIZED:
            raise DatabaseStateError(
                f"Cannot initialize database from state '{self._state.value}'"
            )

        with logfire.span("Initializing database connection"):
            engine = self._open_engine(dsn)
            try:
                pool = self._acquire_pool(engine)
                self._ping(engine)
            except Exception:
                # Keep the lifecycle error; a failing dispose must not replace it
                with suppress(Exception):
                    engine.dispose()
                raise

            self._engine = engine
            self._state = ConnectionState.READY

            logfire.info(
                "Database connected successfully",
                url=engine.url.render_as_string(hide_password=True),
                pool_size=pool.size(),
                **self.policy.to_dict(),
            )
        return engine

    def close(self) -> None:
        """
        Release every pooled connection.

        Idempotent: does nothing unless the manager is READY. The manager is
        CLOSED afterwards even when dispose() fails.

        Raises:
            ShutdownError: The pool could not be disposed cleanly
        """
        if self._state is not ConnectionState.READY or self._engine is None:
            return

        engine = self._engine
        self._engine = None
        self._state = ConnectionState.CLOSED

        try:
            engine.dispose()
        except Exception as e:
            logfire.error("Failed to close database connection pool", error=str(e))
            raise ShutdownError("Failed to close database connection pool", e) from e

        logfire.info("Database connection pool closed")

    def pool_status(self) -> Dict[str, Any]:
        """Configured limits plus live pool counters (READY only)."""
        pool = self.engine.pool
        status = self.policy.to_dict()
        status.update(
            size=pool.size(),
            checked_in=pool.checkedin(),
            checked_out=pool.checkedout(),
            overflow=pool.overflow(),
        )
        return status

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _open_engine(self, dsn: Union[str, URL]) -> Engine:
        try:
            url = make_url(dsn)
        except SQLAlchemyError as e:
            raise DatabaseConnectionError("Invalid database URL", e) from e

        # Network databases need a user; file databases such as SQLite do not.
        if url.host and not url.username:
            raise DatabaseConnectionError(
                f"Database URL for host '{url.host}' is missing credentials"
            )

        connect_args: Dict[str, Any] = {}
        if self.connect_timeout and url.get_driver_name() in _CONNECT_TIMEOUT_DRIVERS:
            connect_args["connect_timeout"] = self.connect_timeout

        try:
            return create_engine(
                url,
                poolclass=QueuePool,
                pool_pre_ping=self.pool_pre_ping,
                echo=self.echo,
                connect_args=connect_args,
                **self.policy.engine_options(),
            )
        except (SQLAlchemyError, ImportError, TypeError, ValueError) as e:
            raise DatabaseConnectionError("Failed to connect to database", e) from e

    def _acquire_pool(self, engine: Engine) -> QueuePool:
        pool = getattr(engine, "pool", None)
        if pool is None:
            raise HandleAcquisitionError("Engine exposes no connection pool")
        if not isinstance(pool, QueuePool):
            raise HandleAcquisitionError(
                f"Expected a QueuePool, got {type(pool).__name__}; pool limits cannot be applied"
            )
        if pool.size() != self.policy.max_idle:
            raise HandleAcquisitionError(
                f"Pool size {pool.size()} does not match policy ({self.policy.max_idle})"
            )
        return pool

    def _ping(self, engine: Engine) -> None:
        attempts = self.connect_retries + 1
        delay = self.retry_delay

        for attempt in range(1, attempts + 1):
            try:
                with engine.connect() as connection:
                    connection.execute(text(PING_QUERY))
                return

            except (SQLAlchemyError, OSError) as e:
                if attempt < attempts:
                    logfire.warning(
                        "Database ping failed, retrying",
                        error=str(e)[:200],
                        attempt=attempt,
                        max_attempts=attempts,
                        retry_delay=delay,
                    )
                    engine.dispose()  # Clear stale connections
                    time.sleep(delay)
                    delay *= 2
                else:
                    raise ConnectivityError("Failed to ping database", e) from e


# Process-wide manager configured from settings
db_manager = DatabaseManager.from_settings(settings)


def get_db_manager() -> DatabaseManager:
    """Return the process-wide manager."""
    return db_manager


def init_db(dsn: Optional[Union[str, URL]] = None) -> Engine:
    """Initialize the process-wide engine (defaults to settings.database_url)."""
    return get_db_manager().initialize(dsn if dsn is not None else settings.database_url)


def close_db() -> None:
    """Close the process-wide engine. Safe to call more than once."""
    get_db_manager().close()


def get_engine() -> Engine:
    """Return the process-wide engine; fails fast if it is not READY."""
    return get_db_manager().engine
