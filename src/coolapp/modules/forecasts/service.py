"""
CoolApp Forecasts - Service.

Business logic for forecast CRUD. One service instance wraps one store;
both the primary and the second-source API use this same class.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date

from coolapp.exceptions import CoolAppException, NotFoundException, ValidationException
from coolapp.modules.forecasts.generator import ForecastGenerator
from coolapp.modules.forecasts.models import ForecastRecord
from coolapp.modules.forecasts.schemas import ForecastInput
from coolapp.modules.forecasts.store import ForecastStore
from coolapp.modules.forecasts.validation import DEFAULT_SUMMARY_MAX_LENGTH, parse_forecast
from coolapp.observability import MetricsStore, get_metrics_store

logger = logging.getLogger(__name__)


class ForecastService:
    """Service for forecast operations on a single store."""

    def __init__(
        self,
        store: ForecastStore,
        generator: ForecastGenerator | None = None,
        today: Callable[[], date] = date.today,
        max_generate_count: int = 100,
        summary_max_length: int = DEFAULT_SUMMARY_MAX_LENGTH,
        metrics: MetricsStore | None = None,
    ):
        self.store = store
        self.generator = generator or ForecastGenerator()
        self._today = today
        self.max_generate_count = max_generate_count
        self.summary_max_length = summary_max_length
        self._metrics = metrics or get_metrics_store()

    @contextmanager
    def _track(self, operation: str) -> Iterator[None]:
        """Time an operation and count its CoolAppException codes."""
        name = f"{self.store.name}.{operation}"
        start = time.perf_counter()
        try:
            yield
        except CoolAppException as exc:
            self._metrics.record_operation_error(name, exc.code)
            raise
        finally:
            self._metrics.record_operation_latency(name, (time.perf_counter() - start) * 1000)

    def list(self) -> list[ForecastRecord]:
        """Return all forecasts in insertion order."""
        with self._track("list"):
            return self.store.list()

    def create(self, data: ForecastInput) -> ForecastRecord:
        """Validate and append a new forecast.

        Duplicate dates are accepted; ``update`` and ``delete`` then act
        on the first of them.
        """
        with self._track("create"):
            record = self._parse(data)
            self.store.add(record)
            logger.info(f"[{self.store.name}] created forecast for {record.date}")
            return record

    def update(self, data: ForecastInput) -> ForecastRecord:
        """Validate, then update the forecast for that date or insert it."""
        with self._track("update"):
            record = self._parse(data)
            result = self.store.upsert(record)
            action = "inserted" if result is record else "updated"
            logger.info(f"[{self.store.name}] {action} forecast for {record.date}")
            return result

    def delete(self, day: date) -> None:
        """
        Remove the forecast for ``day``.

        Raises:
            NotFoundException: If no forecast exists for that date.
        """
        with self._track("delete"):
            if not self.store.remove_by_date(day):
                logger.warning(f"[{self.store.name}] delete of missing forecast {day}")
                raise NotFoundException("forecast", day.isoformat())
            logger.info(f"[{self.store.name}] deleted forecast for {day}")

    def generate(self, count: int = 5) -> list[ForecastRecord]:
        """Generate ``count`` forecasts starting tomorrow and append them."""
        with self._track("generate"):
            if count < 0 or count > self.max_generate_count:
                raise ValidationException(
                    "Invalid generate count",
                    errors={"count": f"Count must be between 0 and {self.max_generate_count}"},
                )
            batch = self.generator.generate(count, self._today())
            for record in batch:
                self.store.add(record)
            logger.info(f"[{self.store.name}] generated {len(batch)} forecasts")
            return batch

    def _parse(self, data: ForecastInput) -> ForecastRecord:
        try:
            return parse_forecast(data, self.summary_max_length)
        except ValidationException as exc:
            logger.warning(f"[{self.store.name}] rejected forecast: {exc.errors}")
            raise
