"""
Logfire configuration and initialization.

Logfire provides structured logging and tracing for the backend. Without a
token, events are only written to the console.

Environment Variables:
    LOGFIRE_TOKEN: Logfire project token (optional)
    ENVIRONMENT: deployment environment (development, staging, production)
    LOG_LEVEL: minimum level printed to the console
"""
import os
from typing import Optional

import logfire


class LogfireConfig:
    """
    Logfire configuration singleton.

    Ensures Logfire is configured only once per process.
    """

    _initialized = False

    @classmethod
    def initialize(cls, token: Optional[str] = None, log_level: str = "info") -> None:
        """
        Initialize Logfire.

        Args:
            token: Logfire project token (or set LOGFIRE_TOKEN env var)
            log_level: Minimum level shown on the console
        """
        if cls._initialized:
            return

        token = token or os.getenv("LOGFIRE_TOKEN") or None

        logfire.configure(
            token=token,
            service_name="blog-backend",
            environment=os.getenv("ENVIRONMENT", "development"),
            send_to_logfire="if-token-present",
            console=logfire.ConsoleOptions(min_log_level=log_level.lower()),
        )

        cls._initialized = True

    @classmethod
    def is_initialized(cls) -> bool:
        """
        Check if Logfire has been initialized.

        Returns:
            True if initialized, False otherwise
        """
        return cls._initialized
