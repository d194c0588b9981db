"""
CoolApp Forecasts - Schemas.

Pydantic models for forecast operations. Wire names are camelCase.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt

from coolapp.modules.forecasts.models import ForecastRecord


class ForecastInput(BaseModel):
    """Submitted forecast fields, as typed into the form.

    Values are kept loose so validation can report every bad field at once
    instead of failing on the first parse error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    date: str | None = None
    # Booleans stay booleans here; validation rejects them
    temperature_c: StrictBool | StrictInt | StrictFloat | str | None = Field(default=None, alias="temperatureC")
    summary: str | None = None


class ForecastResponse(BaseModel):
    """Forecast as returned by the API; temperatureF is always derived."""

    model_config = ConfigDict(populate_by_name=True)

    date: date
    temperature_c: int = Field(..., alias="temperatureC")
    temperature_f: int = Field(..., alias="temperatureF")
    summary: str | None = None

    @classmethod
    def from_record(cls, record: ForecastRecord) -> "ForecastResponse":
        return cls(
            date=record.date,
            temperature_c=record.temperature_c,
            temperature_f=record.temperature_f,
            summary=record.summary,
        )
