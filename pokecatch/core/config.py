"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV selects which .env file to load (development, testing, staging,
  production)
- Each settings group reads its own prefixed environment variables
- The token signing secret has no default and must be injected at startup
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_path = PROJECT_ROOT / ENV_FILE_MAP.get(APP_ENV, ".env.development")

# Nested BaseSettings don't inherit env_file, so populate os.environ up front.
# Variables already present in the environment win over the file.
if _env_path.is_file():
    from dotenv import load_dotenv
    load_dotenv(_env_path, override=False)


def _build_auth_settings() -> "AuthSettings":
    """Build auth settings from environment.

    BaseSettings populates required fields from the environment; type
    checkers still see them as constructor arguments, hence the ignore.
    """

    return AuthSettings()  # type: ignore[call-arg]


class AuthSettings(BaseSettings):
    """Session token and password hashing configuration."""

    jwt_secret: str = Field(
        ...,
        min_length=1,
        description="Process-wide secret used to sign session tokens",
    )
    jwt_algorithm: str = Field(
        "HS256",
        description="JWT signing algorithm",
    )
    token_ttl_seconds: int = Field(
        3600,
        description="Lifetime of an issued session token in seconds",
        ge=1,
    )
    bcrypt_rounds: int = Field(
        10,
        description="bcrypt cost factor used when hashing passwords",
        ge=4,
        le=31,
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    cors_allow_origins: str = Field(
        "*",
        description="Comma-separated list of origins allowed by CORS",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client request rate limiting",
    )
    rate_limit_requests: int = Field(
        100,
        description="Maximum number of requests allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        60,
        description="Fixed rate limit window size in seconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )

    default_page: int = Field(
        1,
        description="Page used when the page query parameter is missing or invalid",
        ge=1,
    )
    default_per_page: int = Field(
        10,
        description="Page size used when perPage is missing or invalid",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class DatabaseSettings(BaseSettings):
    """Persistence configuration."""

    url: str = Field(
        "sqlite+aiosqlite:///./pokecatch.db",
        description="SQLAlchemy async database URL",
    )
    echo: bool = Field(
        False,
        description="Log emitted SQL statements",
    )
    create_tables: bool = Field(
        True,
        description="Create missing tables on startup",
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        case_sensitive=False,
    )


class CatalogSettings(BaseSettings):
    """External creature catalog (PokeAPI) configuration."""

    base_url: str = Field(
        "https://pokeapi.co/api/v2",
        description="Base URL of the catalog API",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Timeout for a single catalog lookup in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log output: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10_485_760,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Number of rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to propagate the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Raises validation errors on startup if required settings (the JWT
    secret) are missing.
    """

    app_env: str = APP_ENV
    auth: AuthSettings = Field(default_factory=_build_auth_settings)
    app: AppSettings = Field(default_factory=AppSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
