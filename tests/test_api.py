"""
Tests for CoolApp API endpoints.
"""

import random
from datetime import date

import pytest
from fastapi.testclient import TestClient

from coolapp.config import get_settings
from coolapp.main import create_app
from coolapp.modules.forecasts import DataContext, ForecastGenerator, ForecastRecord

TODAY = date(2024, 1, 1)


@pytest.fixture
def context():
    return DataContext()


@pytest.fixture
def client(context):
    """Create test client over a fresh pair of stores."""
    app = create_app(
        data_context=context,
        generator=ForecastGenerator(random.Random(7)),
        today=lambda: TODAY,
    )
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


WARM = {"date": "2024-01-01", "temperatureC": 20, "summary": "Warm"}


class TestHealth:
    """Health check tests."""

    def test_health_check(self, client):
        """Test health endpoint returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert data["features"] == {"weatherforecast": True, "second_source": True}

    def test_health_reports_store_sizes(self, client, context):
        context.second_source_forecasts.add(ForecastRecord(TODAY, 1, "Cool"))

        data = client.get("/health").json()
        assert data["store_sizes"] == {"weatherforecast": 0, "second_source": 1}

    def test_request_id_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self, client):
        response = client.get("/health")
        assert response.headers["X-Request-ID"]


class TestRoot:
    """Root and docs endpoints."""

    def test_root_endpoint(self, client):
        data = client.get("/").json()
        assert "message" in data
        assert data["docs"] == "/docs"

    def test_openapi_available(self, client):
        data = client.get("/openapi.json").json()
        assert data["info"]["title"] == "CoolApp API"
        assert "/weatherforecast" in data["paths"]
        assert "/second" in data["paths"]

    def test_metrics_available(self, client):
        client.get("/weatherforecast")

        data = client.get("/metrics").json()
        assert "weatherforecast.list" in data["operations"]


class TestWeatherForecastCrud:
    """CRUD over the primary store."""

    def test_list_empty(self, client):
        response = client.get("/weatherforecast")
        assert response.status_code == 200
        assert response.json() == []

    def test_create_returns_record_with_fahrenheit(self, client, context):
        response = client.post("/weatherforecast", json=WARM)

        assert response.status_code == 200
        assert response.json() == {
            "date": "2024-01-01",
            "temperatureC": 20,
            "temperatureF": 67,
            "summary": "Warm",
        }
        assert len(context.weather_forecasts) == 1

    def test_temperature_f_is_never_accepted(self, client):
        response = client.post("/weatherforecast", json={**WARM, "temperatureF": 1000})
        assert response.json()["temperatureF"] == 67

    def test_create_validation_error(self, client, context):
        response = client.post(
            "/weatherforecast",
            json={"date": "", "temperatureC": "hot", "summary": "  "},
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert set(error["details"]["errors"]) == {"date", "temperatureC", "summary"}
        assert len(context.weather_forecasts) == 0

    @pytest.mark.parametrize("temperature", ["1e308", 10**400, -274])
    def test_create_rejects_out_of_range_temperature(self, client, context, temperature):
        response = client.post("/weatherforecast", json={**WARM, "temperatureC": temperature})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert len(context.weather_forecasts) == 0
        assert client.get("/weatherforecast").status_code == 200

    def test_create_rejects_boolean_temperature(self, client, context):
        response = client.post("/weatherforecast", json={**WARM, "temperatureC": True})

        assert response.status_code == 400
        assert response.json()["error"]["details"]["errors"] == {
            "temperatureC": "Temperature must be a number"
        }
        assert len(context.weather_forecasts) == 0

    def test_create_rejects_compact_date(self, client, context):
        response = client.post("/weatherforecast", json={**WARM, "date": "20240101"})

        assert response.status_code == 400
        assert "date" in response.json()["error"]["details"]["errors"]
        assert len(context.weather_forecasts) == 0

    def test_list_preserves_order(self, client):
        client.post("/weatherforecast", json={**WARM, "date": "2024-01-05"})
        client.post("/weatherforecast", json=WARM)

        dates = [f["date"] for f in client.get("/weatherforecast").json()]
        assert dates == ["2024-01-05", "2024-01-01"]

    def test_update_inserts_when_absent(self, client, context):
        response = client.put("/weatherforecast", json=WARM)

        assert response.status_code == 200
        assert len(context.weather_forecasts) == 1

    def test_update_overwrites_existing(self, client, context):
        context.weather_forecasts.add(ForecastRecord(TODAY, 15, "Cool"))

        response = client.put("/weatherforecast", json=WARM)

        assert response.status_code == 200
        assert response.json()["summary"] == "Warm"
        assert [f["summary"] for f in client.get("/weatherforecast").json()] == ["Warm"]

    def test_update_validation_error(self, client, context):
        context.weather_forecasts.add(ForecastRecord(TODAY, 15, "Cool"))

        response = client.put("/weatherforecast", json={**WARM, "summary": ""})

        assert response.status_code == 400
        assert context.weather_forecasts.list()[0].summary == "Cool"

    def test_delete(self, client, context):
        context.weather_forecasts.add(ForecastRecord(TODAY, 15, "Cool"))

        response = client.delete("/weatherforecast", params={"date": "2024-01-01"})

        assert response.status_code == 200
        assert response.content == b""
        assert len(context.weather_forecasts) == 0

    def test_delete_not_found(self, client, context):
        context.weather_forecasts.add(ForecastRecord(TODAY, 15, "Cool"))

        response = client.delete("/weatherforecast", params={"date": "2024-06-01"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"
        assert len(context.weather_forecasts) == 1

    @pytest.mark.parametrize("params", [{}, {"date": "not-a-date"}])
    def test_delete_bad_date(self, client, params):
        response = client.delete("/weatherforecast", params=params)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "date" in error["details"]["errors"]

    def test_generate_default_count(self, client, context):
        response = client.patch("/weatherforecast")

        assert response.status_code == 200
        batch = response.json()
        assert len(batch) == 5
        assert all(date.fromisoformat(f["date"]) > TODAY for f in batch)
        assert len(context.weather_forecasts) == 5

    def test_generate_count(self, client, context):
        batch = client.patch("/weatherforecast", params={"count": 7}).json()

        assert [f["date"] for f in batch] == [f"2024-01-0{d}" for d in range(2, 9)]
        assert len(context.weather_forecasts) == 7

    def test_generate_zero_count(self, client, context):
        response = client.patch("/weatherforecast", params={"count": 0})

        assert response.status_code == 200
        assert response.json() == []
        assert len(context.weather_forecasts) == 0

    @pytest.mark.parametrize("count", [-1, 101])
    def test_generate_rejects_bad_count(self, client, context, count):
        response = client.patch("/weatherforecast", params={"count": count})

        assert response.status_code == 400
        assert "count" in response.json()["error"]["details"]["errors"]
        assert len(context.weather_forecasts) == 0


class TestSecondSource:
    """The second store behaves the same and is independent."""

    def test_stores_are_independent(self, client, context):
        client.post("/second", json=WARM)

        assert client.get("/weatherforecast").json() == []
        assert len(client.get("/second").json()) == 1
        assert len(context.second_source_forecasts) == 1

    def test_update_and_delete(self, client):
        client.put("/second", json=WARM)
        client.put("/second", json={**WARM, "temperatureC": -5, "summary": "Bracing"})

        assert client.get("/second").json() == [
            {"date": "2024-01-01", "temperatureC": -5, "temperatureF": 24, "summary": "Bracing"}
        ]
        assert client.delete("/second", params={"date": "2024-01-01"}).status_code == 200
        assert client.delete("/second", params={"date": "2024-01-01"}).status_code == 404

    def test_feature_flag_disables_store(self, client, monkeypatch):
        monkeypatch.setenv("FEATURE_SECOND_SOURCE", "false")
        get_settings.cache_clear()

        response = client.get("/second")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "FEATURE_DISABLED"
        assert client.get("/weatherforecast").status_code == 200
