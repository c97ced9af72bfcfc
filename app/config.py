"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logger import setup_logger

load_dotenv(override=False)


logger = setup_logger("core_config")

DEFAULT_SECRET_KEY = "your-secret-key-change-this-in-production"


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix="",
    )

    # ===== Database Configuration =====
    app_database_url: str = Field(
        default="sqlite+aiosqlite:///./life_rpg.db",
        alias="LIFE_RPG_DATABASE_URL",
        description="Application database URL (PostgreSQL or SQLite)",
    )

    life_rpg_schema: str = Field(
        default="life_rpg",
        alias="LIFE_RPG_SCHEMA",
        description="Database schema name (PostgreSQL only)",
    )

    # ===== Authentication Configuration =====
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        alias="SECRET_KEY",
        description="Secret used to sign JWT access tokens",
    )

    access_token_expire_minutes: int = Field(
        default=1440,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
        description="Lifetime of an access token and its session (default 24 hours)",
    )

    # ===== Progression Configuration =====
    daily_reset_timezone: str = Field(
        default="UTC",
        alias="DAILY_RESET_TIMEZONE",
        description="IANA timezone whose midnight separates daily mission windows",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=8080, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",  # Vite dev server default port
            "http://localhost:3000",
            "http://127.0.0.1:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=True,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    db_unavailable_hint: str = Field(
        default="Database connection failed. The server may be offline or network connectivity is down.",
        alias="DB_UNAVAILABLE_HINT",
        description="User-facing hint for database connection errors",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for insecure or unusual configurations."""

        if self.secret_key == DEFAULT_SECRET_KEY:
            logger.warning(
                "SECRET_KEY environment variable not set. Using the insecure default key."
            )

        if self.access_token_expire_minutes <= 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")

        if self.daily_reset_timezone.upper() != "UTC":
            try:
                ZoneInfo(self.daily_reset_timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(
                    f"DAILY_RESET_TIMEZONE '{self.daily_reset_timezone}' is not a known IANA timezone"
                ) from e
        logger.debug(f"Daily reset timezone: {self.daily_reset_timezone}")

        return self

    @property
    def schema_name(self) -> str:
        return self.life_rpg_schema

    @property
    def is_sqlite(self) -> bool:
        return self.app_database_url.startswith("sqlite")


# Global settings instance
settings = Settings()
