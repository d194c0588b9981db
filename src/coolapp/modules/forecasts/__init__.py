"""CoolApp Forecasts Module - forecast CRUD over in-memory stores.

Routers live in ``coolapp.modules.forecasts.router`` and are imported by the
application directly.
"""

from coolapp.modules.forecasts.generator import SUMMARIES, ForecastGenerator
from coolapp.modules.forecasts.models import ForecastRecord
from coolapp.modules.forecasts.schemas import ForecastInput, ForecastResponse
from coolapp.modules.forecasts.service import ForecastService
from coolapp.modules.forecasts.store import DataContext, ForecastStore
from coolapp.modules.forecasts.validation import parse_forecast, validate_forecast

__all__ = [
    "SUMMARIES",
    "DataContext",
    "ForecastGenerator",
    "ForecastInput",
    "ForecastRecord",
    "ForecastResponse",
    "ForecastService",
    "ForecastStore",
    "parse_forecast",
    "validate_forecast",
]
