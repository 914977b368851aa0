# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.DATABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_PATH = Path("data") / "database.db"
DEFAULT_UPLOAD_DIR = "./data/images"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default, so the API starts with an
    empty environment and keeps its data under ./data.
    """

    # -------------------------------------------------------------------------
    # Database Configuration
    # -------------------------------------------------------------------------

    DATABASE_URL: str | None = Field(
        default=None,
        description=(
            "SQLAlchemy database URL. A 'file:./data/database.db' path "
            "is accepted too. Falls back to ./data/database.db (SQLite)"
        ),
    )

    # -------------------------------------------------------------------------
    # Image Upload Settings
    # -------------------------------------------------------------------------

    UPLOAD_DIR: str = Field(
        default=DEFAULT_UPLOAD_DIR,
        description="Root directory for uploaded images",
    )

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum image upload size in MB",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, SQL echo)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def database_url(self) -> str:
        """
        Resolve DATABASE_URL into a SQLAlchemy URL.

        Example:
            None                       -> "sqlite:///<cwd>/data/database.db"
            "file:./data/database.db"  -> "sqlite:///<cwd>/data/database.db"
            "postgresql://..."         -> unchanged
        """
        return resolve_database_url(self.DATABASE_URL)

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS string into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def max_upload_size_bytes(self) -> int:
        """Convert MB to bytes for file size validation."""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


def resolve_database_url(raw_url: str | None, base_dir: Path | None = None) -> str:
    """
    Turn the configured database location into a SQLAlchemy URL.

    Relative file paths are resolved against base_dir (the working
    directory by default).
    """
    base = base_dir or Path.cwd()

    if not raw_url:
        return f"sqlite:///{(base / DEFAULT_DATABASE_PATH).as_posix()}"

    if raw_url.startswith("file:"):
        file_path = Path(raw_url[len("file:"):])
        if not file_path.is_absolute():
            file_path = base / file_path
        return f"sqlite:///{file_path.as_posix()}"

    return raw_url


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
