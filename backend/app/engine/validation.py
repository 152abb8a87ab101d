"""
Input validation for locations, coordinates and tilt angles.

Everything here raises ValueError, which the API layer reports as 422.
"""

import math
import re

from app.config import (
    MAX_LATITUDE,
    MAX_LOCATION_LENGTH,
    MAX_LONGITUDE,
    MAX_TILT_DEGREES,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)

_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")


def sanitize_location(location) -> str:
    """Trim a free-text location and strip control characters."""
    if location is None or location == "":
        raise ValueError("Location is required")
    if not isinstance(location, str):
        raise ValueError("Location must be a string")

    trimmed = location.strip()
    if not trimmed:
        raise ValueError("Location cannot be empty or whitespace only")
    if len(trimmed) > MAX_LOCATION_LENGTH:
        raise ValueError(f"Location must be {MAX_LOCATION_LENGTH} characters or less")

    sanitized = _CONTROL_CHARS.sub("", trimmed)
    if not sanitized:
        raise ValueError("Location contains only invalid characters")
    return sanitized


def _validate_bounded(value, name: str, lo: float, hi: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a valid finite number")
    if value < lo or value > hi:
        raise ValueError(f"{name} must be between {lo:g} and {hi:g}")
    return float(value)


def validate_latitude(lat) -> float:
    return _validate_bounded(lat, "Latitude", MIN_LATITUDE, MAX_LATITUDE)


def validate_longitude(lon) -> float:
    return _validate_bounded(lon, "Longitude", MIN_LONGITUDE, MAX_LONGITUDE)


def validate_fixed_tilt(tilt) -> float:
    return _validate_bounded(tilt, "Fixed tilt", 0.0, MAX_TILT_DEGREES)


def validate_panel_watts(watts) -> float:
    if isinstance(watts, bool) or not isinstance(watts, (int, float)):
        raise ValueError("Panel watts must be a number")
    if not math.isfinite(watts) or watts <= 0:
        raise ValueError(f"Panel watts must be a finite value > 0, got {watts}")
    return float(watts)
