"""
CoolApp Client - Forecast API.

Async HTTP client for one forecast store. Error envelopes are turned back
into CoolApp exceptions; anything that prevents a usable answer becomes a
TransportFailureException.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from coolapp.config import Settings, get_settings
from coolapp.exceptions import (
    CoolAppException,
    NotFoundException,
    TransportFailureException,
    ValidationException,
)
from coolapp.modules.forecasts.schemas import ForecastResponse

logger = logging.getLogger(__name__)

SERVICE_NAME = "forecast-api"


def _api_url(base: str, path: str) -> str:
    b = (base or "").strip().rstrip("/")
    p = (path or "").strip()
    if not p.startswith("/"):
        p = "/" + p
    return f"{b}{p}"


class ForecastApiClient:
    """Client for ``/weatherforecast`` (or ``/second``) on a CoolApp server."""

    def __init__(
        self,
        base_url: str | None = None,
        path: str = "/weatherforecast",
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.url = _api_url(base_url or settings.client.base_url, path)
        self.timeout_s = timeout_s if timeout_s is not None else settings.client.timeout_seconds
        self._transport = transport

    async def list(self) -> list[ForecastResponse]:
        return self._records(await self._request("GET"))

    async def create(self, data: dict[str, Any]) -> ForecastResponse:
        return ForecastResponse.model_validate(await self._request("POST", json=data))

    async def update(self, data: dict[str, Any]) -> ForecastResponse:
        return ForecastResponse.model_validate(await self._request("PUT", json=data))

    async def delete(self, day: date | str) -> None:
        day = day.isoformat() if isinstance(day, date) else day
        await self._request("DELETE", params={"date": day})

    async def generate(self, count: int | None = None) -> list[ForecastResponse]:
        params = {"count": count} if count is not None else None
        return self._records(await self._request("PATCH", params=params))

    def _records(self, payload: Any) -> list[ForecastResponse]:
        if not isinstance(payload, list):
            raise TransportFailureException(SERVICE_NAME, "expected a list of forecasts")
        return [ForecastResponse.model_validate(item) for item in payload]

    async def _request(self, method: str, **kwargs) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_s), transport=self._transport
            ) as client:
                r = await client.request(method, self.url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {self.url} failed: {exc!r}")
            raise TransportFailureException(SERVICE_NAME, str(exc) or type(exc).__name__) from exc

        if r.is_success:
            if not r.content:
                return None
            try:
                return r.json()
            except ValueError as exc:
                raise TransportFailureException(SERVICE_NAME, "response is not JSON") from exc

        raise self._error_from(r)

    def _error_from(self, r: httpx.Response) -> CoolAppException:
        try:
            error = r.json().get("error") or {}
        except (ValueError, AttributeError):
            error = {}

        code = error.get("code")
        message = error.get("message") or f"HTTP {r.status_code}"
        details = error.get("details") or {}

        if code == "VALIDATION_ERROR" or r.status_code in (400, 422):
            return ValidationException(message, errors=details.get("errors"))
        if code == "NOT_FOUND" or r.status_code == 404:
            return NotFoundException(details.get("resource_type", "forecast"), details.get("resource_id", ""))
        return CoolAppException(code or "HTTP_ERROR", message, status_code=r.status_code, details=details or None)
