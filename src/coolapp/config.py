"""
CoolApp Configuration Module.

Handles application settings, feature flags, and environment configuration.
Uses pydantic-settings for validation and type safety.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureFlags(BaseSettings):
    """Feature flags for enabling/disabling forecast stores."""

    model_config = SettingsConfigDict(env_prefix="FEATURE_")

    weatherforecast: bool = True
    second_source: bool = True

    def to_dict(self) -> dict[str, bool]:
        """Return feature flags as dictionary for health endpoint."""
        return {
            "weatherforecast": self.weatherforecast,
            "second_source": self.second_source,
        }


class ForecastSettings(BaseSettings):
    """Forecast generation and validation limits."""

    model_config = SettingsConfigDict(env_prefix="FORECAST_")

    default_generate_count: int = Field(default=5, ge=1, description="Batch size when PATCH has no count")
    max_generate_count: int = Field(default=100, ge=1, description="Largest batch a single PATCH may generate")
    summary_max_length: int = Field(default=100, ge=1, description="Maximum summary length accepted on create/update")


class ClientSettings(BaseSettings):
    """HTTP client configuration (forecast board)."""

    model_config = SettingsConfigDict(env_prefix="CLIENT_")

    base_url: str = Field(default="http://localhost:8000", description="Base URL of the forecast API")
    timeout_seconds: float = Field(default=8.0, description="HTTP timeout when calling the forecast API")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_log_level: str = "INFO"

    # Nested settings
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    forecast: ForecastSettings = Field(default_factory=ForecastSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
