"""
Pydantic models for location data requests and the yearly energy profile.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.engine.utils import coordinate_pair
from app.engine.validation import (
    sanitize_location,
    validate_fixed_tilt,
    validate_latitude,
    validate_longitude,
)
from app.models.solar import MonthlySolarProfile
from app.models.weather import DailyWeatherRecord, MonthlyWeatherSummary


class LocationDataRequest(BaseModel):
    """Request a profile for a place name, optionally pinned to coordinates."""
    location: str = Field(..., description="Free-text location, e.g. 'Austin, TX'")
    lat: Optional[float] = None
    lon: Optional[float] = None

    @field_validator("location", mode="before")
    @classmethod
    def _clean_location(cls, value):
        return sanitize_location(value)

    @field_validator("lat")
    @classmethod
    def _check_lat(cls, value):
        return None if value is None else validate_latitude(value)

    @field_validator("lon")
    @classmethod
    def _check_lon(cls, value):
        return None if value is None else validate_longitude(value)

    @property
    def api_location(self) -> str:
        """The query sent to the weather provider."""
        if self.lat is not None and self.lon is not None:
            return coordinate_pair(self.lat, self.lon)
        return self.location


class ProfileComputeInput(BaseModel):
    """Compute a profile directly from caller-supplied daily records."""
    latitude: float
    longitude: float
    daily_records: list[DailyWeatherRecord]
    fixed_tilt_degrees: Optional[float] = Field(
        default=None,
        description="Tilt held all year. Defaults to round(|latitude|).",
    )
    location: Optional[str] = None
    years_of_data: int = Field(default=1, ge=1)

    @field_validator("latitude")
    @classmethod
    def _check_latitude(cls, value):
        return validate_latitude(value)

    @field_validator("longitude")
    @classmethod
    def _check_longitude(cls, value):
        return validate_longitude(value)

    @field_validator("fixed_tilt_degrees")
    @classmethod
    def _check_fixed_tilt(cls, value):
        return None if value is None else validate_fixed_tilt(value)


class LocationEnergyProfile(BaseModel):
    """Monthly weather and solar yield for one location."""
    location: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    weather: list[MonthlyWeatherSummary]
    solar: list[MonthlySolarProfile]
    years_of_data: int = Field(..., ge=1)
    computed_at: datetime
    cached: bool = False
