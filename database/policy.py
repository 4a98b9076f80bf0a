"""Connection pool limits and their mapping onto SQLAlchemy's QueuePool."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict

DEFAULT_MAX_OPEN = 25
DEFAULT_MAX_IDLE = 5
DEFAULT_MAX_LIFETIME = timedelta(hours=5)


@dataclass(frozen=True)
class PoolPolicy:
    """
    Size and lifetime limits for the shared connection pool.

    QueuePool keeps up to ``pool_size`` connections open while idle and
    allows ``max_overflow`` more under load, so:

        pool_size    = max_idle
        max_overflow = max_open - max_idle
        pool_recycle = max_lifetime (seconds)
    """

    max_open: int = DEFAULT_MAX_OPEN
    max_idle: int = DEFAULT_MAX_IDLE
    max_lifetime: timedelta = DEFAULT_MAX_LIFETIME

    def __post_init__(self) -> None:
        if self.max_open <= 0 or self.max_idle <= 0:
            raise ValueError("Pool limits must be positive")
        if self.max_idle > self.max_open:
            raise ValueError(
                f"max_idle ({self.max_idle}) cannot exceed max_open ({self.max_open})"
            )
        if self.max_lifetime.total_seconds() <= 0:
            raise ValueError("max_lifetime must be positive")

    @classmethod
    def from_settings(cls, settings) -> "PoolPolicy":
        """Build the policy from the db_* pool fields of Settings."""
        return cls(
            max_open=settings.db_max_open_conns,
            max_idle=settings.db_max_idle_conns,
            max_lifetime=timedelta(minutes=settings.db_conn_max_lifetime_minutes),
        )

    @property
    def max_overflow(self) -> int:
        return self.max_open - self.max_idle

    @property
    def recycle_seconds(self) -> int:
        return int(self.max_lifetime.total_seconds())

    def engine_options(self) -> Dict[str, Any]:
        """Keyword arguments for create_engine()."""
        return {
            "pool_size": self.max_idle,
            "max_overflow": self.max_overflow,
            "pool_recycle": self.recycle_seconds,
        }

    def to_dict(self) -> Dict[str, int]:
        return {
            "max_open": self.max_open,
            "max_idle": self.max_idle,
            "max_lifetime_seconds": self.recycle_seconds,
        }
