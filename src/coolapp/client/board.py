"""
CoolApp Client - Forecast Board.

Presentation state for the forecast table page and its add/edit modal,
independent of any UI toolkit. A renderer reads the attributes; user
actions call the methods.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from coolapp.client.api import ForecastApiClient
from coolapp.config import Settings, get_settings
from coolapp.exceptions import CoolAppException, TransportFailureException
from coolapp.modules.forecasts.schemas import ForecastInput, ForecastResponse
from coolapp.modules.forecasts.validation import parse_forecast, validate_forecast

logger = logging.getLogger(__name__)

FORM_FIELDS = {"date": "date", "temperatureC": "temperature_c", "summary": "summary"}


class ModalState(str, Enum):
    CLOSED = "closed"
    ADD_OPEN = "add_open"
    EDIT_OPEN = "edit_open"


@dataclass
class ForecastForm:
    """Raw text of the modal inputs."""

    date: str = ""
    temperature_c: str = ""
    summary: str = ""

    @classmethod
    def from_forecast(cls, forecast: ForecastResponse) -> "ForecastForm":
        return cls(
            date=forecast.date.isoformat(),
            temperature_c=str(forecast.temperature_c),
            summary=forecast.summary or "",
        )

    def to_input(self) -> ForecastInput:
        return ForecastInput(date=self.date, temperature_c=self.temperature_c, summary=self.summary)


class ForecastBoard:
    """
    State machine behind the forecast page.

    The modal is CLOSED, ADD_OPEN, or EDIT_OPEN with ``editing`` set.
    Every failure lands in ``validation_errors`` or ``error_message``;
    no method raises for server or network errors.
    """

    def __init__(
        self,
        client: ForecastApiClient,
        generate_count: int = 7,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.client = client
        self.generate_count = generate_count
        self.summary_max_length = settings.forecast.summary_max_length

        self.forecasts: list[ForecastResponse] = []
        self.loading = True
        self.success_message = ""
        self.error_message = ""

        self.modal = ModalState.CLOSED
        self.editing: ForecastResponse | None = None
        self.form = ForecastForm()
        self.validation_errors: dict[str, str] = {}
        self.is_submitting = False

    @property
    def is_edit_mode(self) -> bool:
        return self.modal is ModalState.EDIT_OPEN

    # -------------------------------------------------------------------------
    # Table
    # -------------------------------------------------------------------------

    async def refresh(self) -> None:
        """Reload the table from the server."""
        self.loading = True
        try:
            self.forecasts = await self.client.list()
        except CoolAppException as exc:
            logger.error(f"Error loading weather data: {exc.message}")
            self.error_message = "Error loading weather forecasts. Please try again."
        finally:
            self.loading = False

    async def generate(self, count: int | None = None) -> None:
        """Generate a batch on the server, then show the full table."""
        self.loading = True
        try:
            await self.client.generate(self.generate_count if count is None else count)
            self.forecasts = await self.client.list()
        except TransportFailureException as exc:
            logger.error(f"Error generating weather data: {exc.message}")
            self.error_message = "Error generating weather forecasts. Please try again."
        except CoolAppException:
            self.error_message = "Failed to generate weather forecasts. Please try again."
        finally:
            self.loading = False

    async def delete(self, day: str, confirm: Callable[[str], bool] | None = None) -> bool:
        """Delete a forecast after ``confirm`` agrees. Returns True on success."""
        if confirm is not None and not confirm(f"Are you sure you want to delete the forecast for {day}?"):
            return False

        try:
            await self.client.delete(day)
        except TransportFailureException as exc:
            logger.error(f"Error deleting weather data: {exc.message}")
            self.error_message = "Error deleting weather forecast. Please try again."
            return False
        except CoolAppException:
            self.error_message = "Failed to delete weather forecast. Please try again."
            return False

        self.success_message = "Weather forecast deleted successfully!"
        self.error_message = ""
        await self.refresh()
        return True

    def dismiss_success(self) -> None:
        self.success_message = ""

    def dismiss_error(self) -> None:
        self.error_message = ""

    # -------------------------------------------------------------------------
    # Modal
    # -------------------------------------------------------------------------

    def open_add(self) -> None:
        self._open(ModalState.ADD_OPEN, None, ForecastForm())

    def open_edit(self, forecast: ForecastResponse) -> None:
        self._open(ModalState.EDIT_OPEN, forecast, ForecastForm.from_forecast(forecast))

    def _open(self, modal: ModalState, editing: ForecastResponse | None, form: ForecastForm) -> None:
        self.modal = modal
        self.editing = editing
        self.form = form
        self.validation_errors = {}
        self.success_message = ""
        self.error_message = ""

    def close(self) -> None:
        self.modal = ModalState.CLOSED
        self.editing = None
        self.form = ForecastForm()
        self.validation_errors = {}
        self.is_submitting = False

    def change_field(self, field: str, value: str) -> None:
        """Set a form input (wire name) and clear its validation error."""
        if field not in FORM_FIELDS:
            raise KeyError(field)
        if self.is_edit_mode and field == "date":
            return  # the key of an existing forecast is read-only
        setattr(self.form, FORM_FIELDS[field], value)
        self.validation_errors.pop(field, None)

    async def submit(self) -> bool:
        """
        Validate the form, then POST (add) or PUT (edit) it.

        Returns True when the server accepted the forecast.
        """
        if self.modal is ModalState.CLOSED:
            return False

        data = self.form.to_input()
        errors = validate_forecast(data, self.summary_max_length)
        if errors:
            self.validation_errors = errors
            return False

        record = parse_forecast(data, self.summary_max_length)
        payload = {
            "date": record.date.isoformat(),
            "temperatureC": record.temperature_c,
            "summary": record.summary,
        }
        editing = self.is_edit_mode
        verb = "update" if editing else "add"

        self.is_submitting = True
        try:
            if editing:
                await self.client.update(payload)
            else:
                await self.client.create(payload)
        except TransportFailureException as exc:
            logger.error(f"Error saving weather data: {exc.message}")
            noun = "updating" if editing else "adding"
            self.error_message = f"Error {noun} weather forecast. Please try again."
            return False
        except CoolAppException as exc:
            self.validation_errors = dict(getattr(exc, "errors", {}) or {})
            self.error_message = f"Failed to {verb} weather forecast. Please try again."
            return False
        finally:
            self.is_submitting = False

        self.close()
        self.success_message = f"Weather forecast {verb + 'd' if editing else 'added'} successfully!"
        self.error_message = ""
        await self.refresh()
        return True
