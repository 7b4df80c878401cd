"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

WHY Pydantic Settings?
======================
1. Type Safety: All configuration values are validated against their types
2. Environment Variables: Automatically loads from environment variables
3. .env Support: Can load from .env files for local development
4. Validation: Catches configuration errors at startup, not runtime

Required Settings
=================
The API refuses to start when any of these is missing or empty:

- ENVIRONMENT, HOST, PORT
- LOG_LEVEL, LOG_FORMAT
- DATABASE_HOST, DATABASE_PORT, DATABASE_USER, DATABASE_PASSWORD, DATABASE_NAME

Pydantic raises a ValidationError listing every offending variable, and
since get_settings() is called at import time by app.main, the process
exits before accepting any request.

Usage:
    from app.config import get_settings

    settings = get_settings()
    print(settings.database_url)
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Field(...) marks a required field. min_length=1 on top of it rejects
    variables that are present but empty (e.g. ``DATABASE_HOST=``).
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Library API",
        description="Application name displayed in docs and logs"
    )
    api_version: str = Field(
        default="1.0",
        description="API version shown in the OpenAPI document"
    )
    api_prefix: str = Field(
        default="/api",
        description="URL prefix under which the authors and books routers are mounted"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (SQL echo, auto-reload)"
    )
    environment: str = Field(
        ...,
        min_length=1,
        description="Environment: development, staging, production"
    )
    host: str = Field(
        ...,
        min_length=1,
        description="Host to bind the server to"
    )
    port: int = Field(
        ...,
        gt=0,
        lt=65536,
        description="Port to bind the server to"
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Per-request deadline in seconds; in-flight work is cancelled past it"
    )
    allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Rate Limiting Settings
    # -------------------------------------------------------------------------
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable per-client rate limiting"
    )
    rate_limit_default: str = Field(
        default="100/minute",
        description="Requests allowed per client IP, in slowapi limit notation"
    )
    rate_limit_storage_uri: str = Field(
        default="memory://",
        description="Counter storage for the limiter (memory:// or redis://...)"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        ...,
        min_length=1,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        ...,
        min_length=1,
        description="Log output format: text or json"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    database_driver: str = Field(
        default="postgresql+asyncpg",
        description="SQLAlchemy dialect+driver used to build the connection URL"
    )
    database_host: str = Field(..., min_length=1, description="Database host")
    database_port: int = Field(..., gt=0, lt=65536, description="Database port")
    database_user: str = Field(..., min_length=1, description="Database user")
    database_password: str = Field(..., min_length=1, description="Database password")
    database_name: str = Field(..., min_length=1, description="Database name")
    database_log_level: str = Field(
        default="WARNING",
        description="Level of the sqlalchemy.engine logger"
    )
    db_pool_size: int = Field(
        default=10,
        ge=1,
        description="Number of permanent database connections"
    )
    db_max_overflow: int = Field(
        default=0,
        ge=0,
        description="Maximum additional connections during high load"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def database_url(self) -> URL:
        """
        Build the SQLAlchemy connection URL from the individual settings.

        URL.create() escapes special characters in the password, which
        plain string formatting would not.
        """
        return URL.create(
            drivername=self.database_driver,
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        )

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level", "database_log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that the value is a valid Python logging level.

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is text or json."""
        valid_formats = {"text", "json"}
        if v.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}")
        return v.lower()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Ensure the prefix starts with a slash and has no trailing one."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    lru_cache makes this a process-wide singleton: the environment and
    .env file are read and validated once, on first call.

    Returns:
        Cached Settings instance
    """
    return Settings()
