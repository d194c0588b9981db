"""
CoolApp Forecasts - Validation.

Field checks run before any create/update touches a store. Keys of the
returned mapping are the wire field names.
"""

import math
import re
from datetime import date

from coolapp.exceptions import ValidationException
from coolapp.modules.forecasts.models import ForecastRecord
from coolapp.modules.forecasts.schemas import ForecastInput

DEFAULT_SUMMARY_MAX_LENGTH = 100

# Absolute zero up to a bound that keeps temperatureF finite
MIN_TEMPERATURE_C = -273
MAX_TEMPERATURE_C = 1000

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _parse_date(value: str) -> date | None:
    value = value.strip()
    if not _ISO_DATE.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _parse_temperature(value: bool | int | float | str) -> int | None:
    """Parse a temperature, truncating fractions. None if not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    return value


def validate_forecast(
    data: ForecastInput,
    summary_max_length: int = DEFAULT_SUMMARY_MAX_LENGTH,
) -> dict[str, str]:
    """Return field -> message for every invalid field; empty when valid."""
    errors: dict[str, str] = {}

    if not data.date:
        errors["date"] = "Date is required"
    elif _parse_date(data.date) is None:
        errors["date"] = "Date must be a valid date (YYYY-MM-DD)"

    temperature = data.temperature_c
    if temperature is None or (isinstance(temperature, str) and not temperature.strip()):
        errors["temperatureC"] = "Temperature is required"
    else:
        celsius = _parse_temperature(temperature)
        if celsius is None:
            errors["temperatureC"] = "Temperature must be a number"
        elif not MIN_TEMPERATURE_C <= celsius <= MAX_TEMPERATURE_C:
            errors["temperatureC"] = (
                f"Temperature must be between {MIN_TEMPERATURE_C} and {MAX_TEMPERATURE_C}"
            )

    if not data.summary or not data.summary.strip():
        errors["summary"] = "Summary is required"
    elif len(data.summary) > summary_max_length:
        errors["summary"] = f"Summary must be {summary_max_length} characters or fewer"

    return errors


def parse_forecast(
    data: ForecastInput,
    summary_max_length: int = DEFAULT_SUMMARY_MAX_LENGTH,
) -> ForecastRecord:
    """
    Validate ``data`` and build a record from it.

    Raises:
        ValidationException: With the per-field error mapping.
    """
    errors = validate_forecast(data, summary_max_length)
    if errors:
        raise ValidationException("Forecast is invalid", errors=errors)

    return ForecastRecord(
        date=_parse_date(data.date),
        temperature_c=_parse_temperature(data.temperature_c),
        summary=data.summary,
    )
