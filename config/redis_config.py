"""
Redis configuration for the article cache.

The cache is optional: the service keeps running without it when Redis
is disabled or unreachable.
"""
from typing import Optional
from pydantic_settings import BaseSettings


class RedisSettings(BaseSettings):
    """Redis configuration settings."""

    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None
    redis_socket_timeout_seconds: float = 2.0

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def address(self) -> str:
        """host:port pair, used in log events."""
        return f"{self.redis_host}:{self.redis_port}"

    @property
    def redis_url(self) -> str:
        """
        Construct the redis:// connection URL.
        """
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"


# Global instance
redis_settings = RedisSettings()
