"""
API routes for location energy profiles.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_cache, get_geocoder, get_weather_client, require_auth
from app.config import Settings, get_settings
from app.engine.result_assembler import build_location_profile
from app.engine.utils import coordinate_pair
from app.models.location import LocationDataRequest, LocationEnergyProfile, ProfileComputeInput
from app.services.cache import CacheCoordinator
from app.services.geocoding import NominatimClient, enhance_resolved_address
from app.services.weather_provider import (
    RateLimitError,
    VisualCrossingClient,
    WeatherProviderError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["location-data"], dependencies=[Depends(require_auth)])


@router.post("/data", response_model=LocationEnergyProfile)
def get_location_data(
    body: LocationDataRequest,
    settings: Settings = Depends(get_settings),
    cache: CacheCoordinator = Depends(get_cache),
    weather_client: VisualCrossingClient = Depends(get_weather_client),
    geocoder: NominatimClient = Depends(get_geocoder),
):
    """
    Fetch weather history for a location and return its monthly solar profile.

    Served from the cache when a profile for the same location is still live.
    """
    api_location = body.api_location

    cached = cache.get_profile(api_location)
    if cached is not None:
        return cached.model_copy(update={"cached": True})

    if not settings.visual_crossing_api_key:
        raise HTTPException(status_code=500, detail="API key not configured")

    try:
        history = weather_client.fetch_history(api_location, settings.years_of_data)
    except RateLimitError as e:
        raise HTTPException(status_code=429, detail=str(e))
    except WeatherProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))

    resolved = enhance_resolved_address(
        history.resolved_address, history.latitude, history.longitude, geocoder
    )

    try:
        profile = build_location_profile(
            resolved_address=resolved,
            latitude=history.latitude,
            longitude=history.longitude,
            daily_records=history.daily_records,
            years_of_data=settings.years_of_data,
        )
    except ValueError as e:
        logger.warning("Could not build profile for %r: %s", api_location, e)
        raise HTTPException(status_code=422, detail=str(e))

    cache.put_profile(api_location, profile)
    return profile


@router.post("/profile", response_model=LocationEnergyProfile)
def compute_profile(body: ProfileComputeInput):
    """Compute a profile from caller-supplied daily records (no fetch, no cache)."""
    try:
        return build_location_profile(
            resolved_address=body.location or coordinate_pair(body.latitude, body.longitude),
            latitude=body.latitude,
            longitude=body.longitude,
            daily_records=body.daily_records,
            years_of_data=body.years_of_data,
            fixed_tilt=body.fixed_tilt_degrees,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
