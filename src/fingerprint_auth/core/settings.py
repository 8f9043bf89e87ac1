"""Application settings and configuration.

This module defines all configuration options for the fingerprint auth service.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Fingerprint Auth", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=8000, alias="PORT")

    # Session nonce lifetime in milliseconds
    nonce_ttl_ms: int = Field(default=120_000, ge=0, alias="NONCE_TTL_MS")

    # Cookie transport
    nonce_cookie_name: str = Field(default="nonceToken", alias="NONCE_COOKIE_NAME")
    client_id_cookie_name: str = Field(default="cid", alias="CLIENT_ID_COOKIE_NAME")
    client_id_cookie_max_age: int = Field(
        default=60 * 60 * 24 * 365,
        alias="CLIENT_ID_COOKIE_MAX_AGE",
    )
    cookie_secure: bool = Field(default=False, alias="COOKIE_SECURE")
    cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="lax",
        alias="COOKIE_SAMESITE",
    )

    # Credential hashing and token generation
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, alias="BCRYPT_ROUNDS")
    token_bytes: int = Field(default=32, ge=16, alias="TOKEN_BYTES")

    # Account/link storage
    store_backend: Literal["memory", "sql"] = Field(default="memory", alias="STORE_BACKEND")
    database_url: str = Field(default="sqlite:///./fingerprint_auth.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


settings = Settings()
