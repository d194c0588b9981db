"""
CoolApp Forecasts - Store.

In-memory, insertion-ordered forecast collections keyed by date.
"""

from __future__ import annotations

import threading
from datetime import date

from coolapp.modules.forecasts.models import ForecastRecord


class ForecastStore:
    """
    Ordered collection of forecast records.

    Dates are not enforced unique on ``add``; lookups, upserts and removals
    act on the first record with a matching date. All operations hold the
    store lock, so concurrent requests against one store are serialized.
    """

    def __init__(self, name: str, records: list[ForecastRecord] | None = None):
        self.name = name
        self._records: list[ForecastRecord] = list(records or [])
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def list(self) -> list[ForecastRecord]:
        """Return the records in insertion order."""
        with self._lock:
            return list(self._records)

    def add(self, record: ForecastRecord) -> ForecastRecord:
        with self._lock:
            self._records.append(record)
        return record

    def find_by_date(self, day: date) -> ForecastRecord | None:
        with self._lock:
            return self._find(day)

    def upsert(self, record: ForecastRecord) -> ForecastRecord:
        """Update the first record with the same date, or append ``record``."""
        with self._lock:
            existing = self._find(record.date)
            if existing is None:
                self._records.append(record)
                return record
            existing.temperature_c = record.temperature_c
            existing.summary = record.summary
            return existing

    def remove_by_date(self, day: date) -> bool:
        with self._lock:
            existing = self._find(day)
            if existing is None:
                return False
            self._records.remove(existing)
            return True

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def _find(self, day: date) -> ForecastRecord | None:
        # Caller must hold the lock
        return next((r for r in self._records if r.date == day), None)


class DataContext:
    """The two independent forecast stores owned by one application."""

    def __init__(
        self,
        weather_forecasts: ForecastStore | None = None,
        second_source_forecasts: ForecastStore | None = None,
    ):
        if weather_forecasts is None:
            weather_forecasts = ForecastStore("weatherforecast")
        if second_source_forecasts is None:
            second_source_forecasts = ForecastStore("second_source")
        self.weather_forecasts = weather_forecasts
        self.second_source_forecasts = second_source_forecasts

    def stores(self) -> dict[str, ForecastStore]:
        return {
            self.weather_forecasts.name: self.weather_forecasts,
            self.second_source_forecasts.name: self.second_source_forecasts,
        }

    def get(self, name: str) -> ForecastStore:
        return self.stores()[name]
