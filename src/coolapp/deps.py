"""
CoolApp - Dependency Injection.

FastAPI dependencies for settings, feature flags, stores, and services.
"""

from typing import Annotated

from fastapi import Depends, Request

from coolapp.config import FeatureFlags, Settings, get_settings
from coolapp.exceptions import FeatureDisabledException
from coolapp.modules.forecasts.service import ForecastService
from coolapp.modules.forecasts.store import DataContext


# =============================================================================
# Settings Dependencies
# =============================================================================


def get_features(settings: Annotated[Settings, Depends(get_settings)]) -> FeatureFlags:
    """Get feature flags from settings."""
    return settings.features


# =============================================================================
# Feature Flag Guards
# =============================================================================


def require_feature(feature_name: str):
    """Create a dependency that requires a specific feature to be enabled."""

    def check_feature(features: Annotated[FeatureFlags, Depends(get_features)]) -> bool:
        if not getattr(features, feature_name, False):
            raise FeatureDisabledException(feature_name)
        return True

    return check_feature


# =============================================================================
# Stores and Services
# =============================================================================


def get_data_context(request: Request) -> DataContext:
    """The stores owned by the running application."""
    return request.app.state.data_context


def forecast_service_for(store_name: str):
    """Create a dependency that builds a ForecastService over one store."""

    def build_service(
        request: Request,
        context: Annotated[DataContext, Depends(get_data_context)],
        settings: Annotated[Settings, Depends(get_settings)],
    ) -> ForecastService:
        return ForecastService(
            context.get(store_name),
            generator=request.app.state.generator,
            today=request.app.state.today,
            max_generate_count=settings.forecast.max_generate_count,
            summary_max_length=settings.forecast.summary_max_length,
        )

    return build_service
