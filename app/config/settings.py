"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the catalog back-office using Pydantic Settings.

A single global configuration instance is shared through ``get_settings()``.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- Computed properties for derived values
- Duplicate detection mode selection

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Duplicate Match Modes:
---------------------
- exact:          variation selections must be equal key by key
- sorted_values:  compare value sequences sorted by variation set id
                  (legacy behaviour, kept for data imported from the
                  old back-office)

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


MATCH_MODES = ("exact", "sorted_values")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        database_url: SQLAlchemy database connection string
        seed_sample_data: Seed sample categories and variation sets on startup
        duplicate_match_mode: How variation selections are compared
        default_page_size: Page size used when the client sends none
        max_page_size: Upper bound for client page sizes
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> print(settings.app_name)
        'Catalog Back-Office API'
        >>> print(settings.duplicate_match_mode)
        'exact'
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Catalog Back-Office API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # DATABASE SETTINGS
    # =========================================================================
    database_url: str = Field(
        default="sqlite:///./storage/db/catalog.db",
        description="SQLAlchemy database connection string"
    )

    seed_sample_data: bool = Field(
        default=False,
        description="Seed sample categories and variation sets on startup"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    duplicate_match_mode: str = Field(
        default="exact",
        description="Variation comparison: exact or sorted_values"
    )

    default_page_size: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Page size used when none is requested"
    )

    max_page_size: int = Field(
        default=100,
        ge=1,
        le=500,
        description="Largest page size a client may request"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Unknown values fall back to 'development'.
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("duplicate_match_mode")
    @classmethod
    def validate_duplicate_match_mode(cls, value: str) -> str:
        """
        Validate the duplicate match mode.

        Raises:
            ValueError: If the mode is not supported
        """
        normalized = value.lower().strip()

        if normalized not in MATCH_MODES:
            raise ValueError(
                f"Unsupported duplicate match mode: {value}. "
                f"Supported: {', '.join(MATCH_MODES)}"
            )

        return normalized

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def get_database_path(self) -> Optional[Path]:
        """
        Extract database file path for SQLite databases.

        Returns:
            Path to database file, or None for non-SQLite or in-memory databases
        """
        if self.database_url.startswith("sqlite:///"):
            db_path = self.database_url.replace("sqlite:///", "")
            if db_path.startswith("./"):
                db_path = db_path[2:]
            if not db_path or db_path == ":memory:":
                return None
            return Path(db_path)
        return None

    def ensure_directories(self) -> None:
        """Create the database directory (SQLite only)."""
        db_path = self.get_database_path()
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"duplicate_match_mode={self.duplicate_match_mode!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    Uses lru_cache so only one Settings instance is created for the
    process lifetime.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    settings.ensure_directories()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
