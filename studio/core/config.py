"""Application configuration using Pydantic Settings.

This module defines the process configuration loaded from environment variables.
Configuration is validated at startup and provides type-safe access throughout the app.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration.

    All configuration is loaded from environment variables or .env file.
    Validation happens automatically via Pydantic.

    Example:
        >>> config = Config()
        >>> print(config.app_name)
        'Studio Console'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # Application Settings
    # ============================================
    app_name: str = Field(default="Studio Console", description="Application name")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )

    # ============================================
    # Console REST API
    # ============================================
    api_base_url: str = Field(
        default="http://localhost:5000/api",
        description="Base URL of the persistence REST service",
    )
    api_timeout: float = Field(default=30.0, description="Request timeout", gt=0, le=300)
    api_max_connections: int = Field(
        default=20, description="Max pooled HTTP connections", ge=1, le=200
    )

    # ============================================
    # Draft files
    # ============================================
    drafts_directory: str = Field(default="./drafts", description="Directory of draft files")

    @field_validator("api_base_url", mode="before")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Ensure the API base URL is absolute and has no trailing slash.

        Args:
            v: API base URL string

        Returns:
            Normalized base URL

        Raises:
            ValueError: If URL is not http(s)
        """
        if isinstance(v, str):
            if not v.startswith(("http://", "https://")):
                raise ValueError("api_base_url must start with http:// or https://")
            return v.rstrip("/")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode.

        Returns:
            True if app_env is 'development'
        """
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if app_env is 'production'
        """
        return self.app_env == "production"


# =============================================================================
# Singleton accessor
# =============================================================================

_config: Config | None = None


def get_config() -> Config:
    """Get the global Config singleton.

    Returns:
        The global Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config
