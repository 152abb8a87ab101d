"""
Visual Crossing weather history client.

Fetches daily history (US units) for a location string and converts the
response into DailyWeatherRecord objects for the aggregator.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional
from urllib.parse import quote

import httpx

from app.models.weather import DailyWeatherRecord

logger = logging.getLogger(__name__)

BASE_URL = (
    "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
)
ELEMENTS = "datetime,tempmax,tempmin,temp,humidity,solarenergy"


class WeatherProviderError(Exception):
    """The provider could not supply usable history for a location."""


class RateLimitError(WeatherProviderError):
    """The provider rejected the request with HTTP 429."""


@dataclass(frozen=True)
class WeatherHistory:
    latitude: float
    longitude: float
    resolved_address: str
    daily_records: list[DailyWeatherRecord]


def _subtract_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # Feb 29 -> Feb 28
        return day.replace(year=day.year - years, day=28)


def _to_float(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_days(days: list[dict]) -> list[DailyWeatherRecord]:
    """Convert provider 'days' rows; rows without a usable date are skipped."""
    records = []
    for idx, day in enumerate(days):
        if not isinstance(day, dict):
            logger.warning("Skipping day %d: expected an object, got %r", idx, day)
            continue
        try:
            record_date = date.fromisoformat(str(day["datetime"])[:10])
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping day %d with unusable date %r: %s", idx, day.get("datetime"), e)
            continue

        records.append(DailyWeatherRecord(
            date=record_date,
            temp_max=_to_float(day.get("tempmax")),
            temp_min=_to_float(day.get("tempmin")),
            temp_mean=_to_float(day.get("temp")),
            humidity=_to_float(day.get("humidity")),
            solar_energy=_to_float(day.get("solarenergy")),
        ))
    return records


class VisualCrossingClient:
    """Synchronous client for the Visual Crossing timeline API."""

    def __init__(
        self,
        api_key: str,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.http = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self.http.close()

    def build_url(self, api_location: str, start: date, end: date) -> str:
        return f"{BASE_URL}/{quote(api_location, safe='')}/{start.isoformat()}/{end.isoformat()}"

    def fetch_history(
        self,
        api_location: str,
        years: int,
        today: Optional[date] = None,
    ) -> WeatherHistory:
        """
        Fetch ``years`` of daily history ending today.

        Raises:
            RateLimitError: provider returned 429
            WeatherProviderError: any other failure or an unusable response
        """
        end = today or datetime.now(timezone.utc).date()
        start = _subtract_years(end, years)
        url = self.build_url(api_location, start, end)
        params = {
            "unitGroup": "us",
            "include": "days",
            "key": self.api_key,
            "elements": ELEMENTS,
        }

        try:
            response = self.http.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("Weather request for %r failed: %s", api_location, e)
            raise WeatherProviderError("Could not fetch weather data for this location") from e

        if response.status_code == 429:
            raise RateLimitError("API rate limit exceeded. Please try again later.")
        if response.is_error:
            logger.warning(
                "Weather provider returned %d for %r", response.status_code, api_location
            )
            raise WeatherProviderError("Could not fetch weather data for this location")

        try:
            data = response.json()
        except ValueError as e:
            raise WeatherProviderError("Weather provider returned invalid JSON") from e
        if not isinstance(data, dict):
            raise WeatherProviderError("Weather provider returned an unexpected payload")

        days = data.get("days") or []
        if not days:
            raise WeatherProviderError("No weather data available for this location")

        latitude = _to_float(data.get("latitude"))
        longitude = _to_float(data.get("longitude"))
        if latitude is None or longitude is None:
            raise WeatherProviderError("Invalid location coordinates received from API")

        records = parse_days(days)
        logger.info(
            "Fetched %d days (%s to %s) for %r", len(records), start, end, api_location
        )
        return WeatherHistory(
            latitude=latitude,
            longitude=longitude,
            resolved_address=data.get("resolvedAddress") or api_location,
            daily_records=records,
        )
