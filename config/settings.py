"""Application configuration using Pydantic Settings."""

from typing import List, Optional, Union

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# NOTE: logfire is configured once at application startup (main.py via
# observability/logfire_config.py) or in pytest hooks (conftest.py), never here.

_LOG_LEVELS = {"trace", "debug", "info", "warning", "error"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults target a local PostgreSQL instance so the service can start
    without a .env file in development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    environment: str = Field(default="development", description="Environment: development, staging, production")
    debug: bool = Field(default=False, description="Debug mode")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    # CORS Settings
    allowed_origins: str = Field(
        default="http://localhost:3000, http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # Database Configuration
    db_driver: str = Field(default="postgresql+psycopg2", description="SQLAlchemy driver name")
    db_user: str = Field(default="postgres", description="Database user")
    db_password: str = Field(default="postgres", description="Database password")
    db_host: str = Field(default="localhost", description="Database host")
    db_port: int = Field(default=5432, description="Database port")
    db_name: str = Field(default="enterprise_blog", description="Database name")
    db_sslmode: str = Field(default="disable", description="libpq sslmode")
    db_url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the individual db_* fields when set",
    )

    # Connection pool policy
    db_max_open_conns: int = Field(default=25, description="Maximum open connections")
    db_max_idle_conns: int = Field(default=5, description="Maximum idle connections kept in the pool")
    db_conn_max_lifetime_minutes: int = Field(default=300, description="Maximum connection lifetime in minutes")
    db_pool_pre_ping: bool = Field(default=True, description="Verify connections before handing them out")
    db_echo: bool = Field(default=False, description="Log every SQL statement")

    # Startup hardening (opt-in)
    db_connect_retries: int = Field(default=0, ge=0, description="Extra ping attempts on startup")
    db_retry_delay_seconds: float = Field(default=0.5, ge=0, description="Initial delay between ping attempts")
    db_connect_timeout_seconds: int = Field(default=10, ge=0, description="Driver connect timeout (0 disables)")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Observability
    logfire_token: str = Field(default="", description="Logfire observability token")

    @field_validator("allowed_origins")
    @classmethod
    def parse_origins(cls, v: str) -> List[str]:
        """Parse comma-separated origins into a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("db_host")
    @classmethod
    def validate_db_host(cls, v: str) -> str:
        """Validate that the database host is provided."""
        if not v.strip():
            raise ValueError("Database host cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.lower() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return v.upper()

    @model_validator(mode="after")
    def validate_pool_limits(self) -> "Settings":
        """Pool limits must be positive and idle cannot exceed open."""
        if self.db_max_open_conns <= 0 or self.db_max_idle_conns <= 0:
            raise ValueError("Pool limits must be positive")
        if self.db_conn_max_lifetime_minutes <= 0:
            raise ValueError("Connection lifetime must be positive")
        if self.db_max_idle_conns > self.db_max_open_conns:
            raise ValueError("db_max_idle_conns cannot exceed db_max_open_conns")
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() == "production"

    @property
    def database_url(self) -> Union[str, URL]:
        """
        Construct the SQLAlchemy database URL.

        sslmode travels as a query parameter, which psycopg2 hands to libpq.
        DB_URL is returned as given; DatabaseManager parses it so a malformed
        value surfaces as DatabaseConnectionError.
        """
        if self.db_url:
            return self.db_url
        return URL.create(
            drivername=self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
            query={"sslmode": self.db_sslmode},
        )


# Create a singleton instance
settings = Settings()


def get_settings() -> "Settings":
    """Return the singleton settings instance."""
    return settings
