"""
Assembles the yearly energy profile for a location.

Composes the monthly weather summaries with the per-month solar scenarios,
rounds the coordinates and stamps the computation time.
"""

from datetime import datetime, timezone
from typing import Optional

from app.config import COORDINATE_DECIMALS
from app.engine.solar_geometry import horizontal_psh, monthly_solar_profile
from app.engine.utils import round_half_away
from app.engine.validation import validate_fixed_tilt, validate_latitude, validate_longitude
from app.engine.weather_aggregator import aggregate_monthly_weather, monthly_solar_energy
from app.models.location import LocationEnergyProfile
from app.models.weather import DailyWeatherRecord


def build_location_profile(
    resolved_address: str,
    latitude: float,
    longitude: float,
    daily_records: list[DailyWeatherRecord],
    years_of_data: int,
    fixed_tilt: Optional[float] = None,
    computed_at: Optional[datetime] = None,
) -> LocationEnergyProfile:
    """
    Build a LocationEnergyProfile from daily weather history.

    Inputs are validated before any computation, so an invalid request never
    yields a partial profile.

    Args:
        resolved_address: Human-readable name of the location
        latitude: Site latitude (-90 to 90)
        longitude: Site longitude (-180 to 180)
        daily_records: Daily weather observations, any order, any number of years
        years_of_data: Years of history requested from the provider (>= 1)
        fixed_tilt: Year-round tilt; defaults to round(|latitude|)
        computed_at: Timestamp to record; defaults to now (UTC)

    Returns:
        LocationEnergyProfile with 12 weather and 12 solar entries.
    """
    latitude = validate_latitude(latitude)
    longitude = validate_longitude(longitude)
    if fixed_tilt is not None:
        fixed_tilt = validate_fixed_tilt(fixed_tilt)
    if years_of_data < 1:
        raise ValueError(f"Years of data must be at least 1, got {years_of_data}")

    weather = aggregate_monthly_weather(daily_records)
    solar = [
        monthly_solar_profile(latitude, idx + 1, horizontal_psh(energy_mj), fixed_tilt)
        for idx, energy_mj in enumerate(monthly_solar_energy(daily_records))
    ]

    return LocationEnergyProfile(
        location=resolved_address,
        latitude=round_half_away(latitude, COORDINATE_DECIMALS),
        longitude=round_half_away(longitude, COORDINATE_DECIMALS),
        weather=weather,
        solar=solar,
        years_of_data=years_of_data,
        computed_at=computed_at or datetime.now(timezone.utc),
    )
