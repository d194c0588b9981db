"""
CoolApp Forecasts - Router.

REST API endpoints for forecast CRUD. ``build_router`` is called once per
store so both APIs share one set of handlers.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from coolapp.config import Settings, get_settings
from coolapp.deps import forecast_service_for, require_feature
from coolapp.modules.forecasts.schemas import ForecastInput, ForecastResponse
from coolapp.modules.forecasts.service import ForecastService


def build_router(prefix: str, store_name: str, feature_name: str, tag: str) -> APIRouter:
    """Build the CRUD router for the store called ``store_name``."""
    router = APIRouter(
        prefix=prefix,
        tags=[tag],
        dependencies=[Depends(require_feature(feature_name))],
    )
    Service = Annotated[ForecastService, Depends(forecast_service_for(store_name))]

    @router.get("", response_model=list[ForecastResponse])
    def list_forecasts(service: Service) -> list[ForecastResponse]:
        """List all forecasts in insertion order."""
        return [ForecastResponse.from_record(r) for r in service.list()]

    @router.post("", response_model=ForecastResponse)
    def create_forecast(data: ForecastInput, service: Service) -> ForecastResponse:
        """Add a forecast."""
        return ForecastResponse.from_record(service.create(data))

    @router.put("", response_model=ForecastResponse)
    def update_forecast(data: ForecastInput, service: Service) -> ForecastResponse:
        """Update the forecast for the given date, inserting it if absent."""
        return ForecastResponse.from_record(service.update(data))

    @router.delete("", status_code=status.HTTP_200_OK, response_class=Response)
    def delete_forecast(
        service: Service,
        day: date = Query(..., alias="date", description="Date of the forecast to delete"),
    ) -> Response:
        """Delete the forecast for a date."""
        service.delete(day)
        return Response(status_code=status.HTTP_200_OK)

    @router.patch("", response_model=list[ForecastResponse])
    def generate_forecasts(
        service: Service,
        settings: Annotated[Settings, Depends(get_settings)],
        count: int | None = Query(default=None, description="Number of days to generate"),
    ) -> list[ForecastResponse]:
        """Generate forecasts for the coming days and append them."""
        if count is None:
            count = settings.forecast.default_generate_count
        return [ForecastResponse.from_record(r) for r in service.generate(count)]

    return router


weatherforecast_router = build_router(
    "/weatherforecast", "weatherforecast", "weatherforecast", "weatherforecast"
)
second_source_router = build_router(
    "/second", "second_source", "second_source", "second-source"
)
