"""
CoolApp Forecasts - Generator.

Synthetic forecasts for demo data.
"""

import random
from datetime import date, timedelta

from coolapp.modules.forecasts.models import ForecastRecord

SUMMARIES = (
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
)

MIN_TEMPERATURE_C = -20
MAX_TEMPERATURE_C = 55  # exclusive


class ForecastGenerator:
    """Produces random forecasts for the days following ``today``."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def generate(self, count: int = 5, today: date | None = None) -> list[ForecastRecord]:
        today = today or date.today()
        return [
            ForecastRecord(
                date=today + timedelta(days=i),
                temperature_c=self._rng.randrange(MIN_TEMPERATURE_C, MAX_TEMPERATURE_C),
                summary=self._rng.choice(SUMMARIES),
            )
            for i in range(1, count + 1)
        ]
