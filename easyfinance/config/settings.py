"""
Configuration Management for EasyFinance

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Business rules that have no documented rationale (such as how far back
an entry may be dated) live here instead of as constants in the domain code.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """EasyFinance REST API client configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EASYFINANCE_API_",
        extra="ignore"
    )

    base_url: str = Field(
        default="http://localhost:5000",
        description="Base URL of the EasyFinance API"
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Request timeout in seconds"
    )

    # Retry policy for transient transport failures
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum attempts per request"
    )
    retry_min_wait: float = Field(
        default=0.5,
        ge=0,
        description="Minimum back-off between attempts (seconds)"
    )
    retry_max_wait: float = Field(
        default=5.0,
        ge=0,
        description="Maximum back-off between attempts (seconds)"
    )

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined with a leading slash."""
        return v.rstrip("/")


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )

    # Validation rules
    max_years_in_past: int = Field(
        default=200,
        ge=1,
        description="How many years back an entry date may go (exclusive)"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def api(self) -> ApiSettings:
        return ApiSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.api
        results["api"] = True
    except ValueError as e:
        results["api"] = False
        results["api_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except ValueError as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
