"""
CoolApp Forecasts - Domain Model.
"""

from dataclasses import dataclass
from datetime import date


@dataclass
class ForecastRecord:
    """One date/temperature/summary entry.

    Records are mutable: an upsert on an existing date rewrites
    ``temperature_c`` and ``summary`` in place.
    """

    date: date
    temperature_c: int
    summary: str | None = None

    @property
    def temperature_f(self) -> int:
        # 1/0.5556 stands in for 9/5; truncation gives 100C -> 211F
        return 32 + int(self.temperature_c / 0.5556)
