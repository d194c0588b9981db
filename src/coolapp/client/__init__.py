"""CoolApp Client - HTTP client and presentation state for the forecast page."""

from coolapp.client.api import ForecastApiClient
from coolapp.client.board import ForecastBoard, ForecastForm, ModalState

__all__ = ["ForecastApiClient", "ForecastBoard", "ForecastForm", "ModalState"]
