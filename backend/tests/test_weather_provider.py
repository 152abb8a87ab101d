"""
Tests for the Visual Crossing weather history client.
"""

from datetime import date

import httpx
import pytest

from app.services.weather_provider import (
    BASE_URL,
    RateLimitError,
    VisualCrossingClient,
    WeatherProviderError,
    _subtract_years,
    parse_days,
)

TODAY = date(2024, 6, 15)

SAMPLE_RESPONSE = {
    "latitude": 30.2672,
    "longitude": -97.7431,
    "resolvedAddress": "Austin, TX, United States",
    "days": [
        {"datetime": "2023-01-01", "tempmax": 60.1, "tempmin": 40.2, "temp": 50.0,
         "humidity": 65.0, "solarenergy": 10.8},
        {"datetime": "not-a-date", "tempmax": 99.0},
        {"datetime": "2023-07-01", "tempmax": 98.0, "tempmin": 76.0, "temp": 87.0,
         "humidity": None, "solarenergy": "n/a"},
    ],
}


def make_client(handler) -> VisualCrossingClient:
    transport = httpx.MockTransport(handler)
    return VisualCrossingClient("test-key", http_client=httpx.Client(transport=transport))


def respond(status_code=200, json=None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=json)
    return handler


class TestBuildUrl:
    def test_location_is_path_encoded(self):
        client = VisualCrossingClient("k")
        url = client.build_url("Austin, TX", date(2022, 6, 15), TODAY)
        assert url == f"{BASE_URL}/Austin%2C%20TX/2022-06-15/2024-06-15"

    def test_leap_day_start(self):
        assert _subtract_years(date(2024, 2, 29), 1) == date(2023, 2, 28)
        assert _subtract_years(TODAY, 2) == date(2022, 6, 15)


class TestParseDays:
    def test_skips_bad_dates_and_blanks_bad_numbers(self):
        records = parse_days(SAMPLE_RESPONSE["days"])
        assert len(records) == 2
        assert records[0].date == date(2023, 1, 1)
        assert records[0].temp_mean == 50.0
        assert records[1].humidity is None
        assert records[1].solar_energy is None

    def test_skips_rows_that_are_not_objects(self):
        records = parse_days([{"datetime": "2023-01-01", "tempmax": 50.0}, None, "2023-01-02", [1]])
        assert len(records) == 1
        assert records[0].temp_max == 50.0

    def test_accepts_datetime_strings(self):
        records = parse_days([{"datetime": "2023-03-04T00:00:00"}])
        assert records[0].date == date(2023, 3, 4)


class TestFetchHistory:
    def test_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            seen["path"] = request.url.path
            return httpx.Response(200, json=SAMPLE_RESPONSE)

        history = make_client(handler).fetch_history("Austin, TX", years=2, today=TODAY)

        assert history.latitude == 30.2672
        assert history.longitude == -97.7431
        assert history.resolved_address == "Austin, TX, United States"
        assert len(history.daily_records) == 2
        assert seen["params"]["unitGroup"] == "us"
        assert seen["params"]["include"] == "days"
        assert seen["params"]["key"] == "test-key"
        assert seen["params"]["elements"] == "datetime,tempmax,tempmin,temp,humidity,solarenergy"
        assert seen["path"].endswith("/2022-06-15/2024-06-15")

    def test_missing_resolved_address_falls_back(self):
        body = dict(SAMPLE_RESPONSE)
        del body["resolvedAddress"]
        history = make_client(respond(json=body)).fetch_history("30.27,-97.74", 1, today=TODAY)
        assert history.resolved_address == "30.27,-97.74"

    def test_rate_limited(self):
        with pytest.raises(RateLimitError, match="rate limit"):
            make_client(respond(429)).fetch_history("Austin", 2, today=TODAY)

    def test_server_error(self):
        with pytest.raises(WeatherProviderError) as exc:
            make_client(respond(500)).fetch_history("Austin", 2, today=TODAY)
        assert not isinstance(exc.value, RateLimitError)

    def test_no_days(self):
        body = dict(SAMPLE_RESPONSE, days=[])
        with pytest.raises(WeatherProviderError, match="No weather data"):
            make_client(respond(json=body)).fetch_history("Austin", 2, today=TODAY)

    def test_missing_coordinates(self):
        body = dict(SAMPLE_RESPONSE, latitude=None)
        with pytest.raises(WeatherProviderError, match="coordinates"):
            make_client(respond(json=body)).fetch_history("Austin", 2, today=TODAY)

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(WeatherProviderError, match="Could not fetch"):
            make_client(handler).fetch_history("Austin", 2, today=TODAY)

    def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>")

        with pytest.raises(WeatherProviderError, match="invalid JSON"):
            make_client(handler).fetch_history("Austin", 2, today=TODAY)
