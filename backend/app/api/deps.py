"""
Shared FastAPI dependencies: settings, collaborators, and the auth guard.

Tests swap any of these out through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from app.config import Settings, get_settings
from app.services.auth import AuthError, check_bearer
from app.services.cache import CacheCoordinator, InMemoryKeyValueStore
from app.services.geocoding import NominatimClient
from app.services.weather_provider import VisualCrossingClient


@lru_cache(maxsize=1)
def _cache_coordinator(ttl_seconds: int) -> CacheCoordinator:
    return CacheCoordinator(InMemoryKeyValueStore(), ttl_seconds)


def get_cache(settings: Settings = Depends(get_settings)) -> CacheCoordinator:
    return _cache_coordinator(settings.cache_ttl)


def get_weather_client(settings: Settings = Depends(get_settings)):
    client = VisualCrossingClient(settings.visual_crossing_api_key, timeout=settings.http_timeout)
    try:
        yield client
    finally:
        client.close()


@lru_cache(maxsize=1)
def get_geocoder() -> NominatimClient:
    return NominatimClient()


def require_auth(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    try:
        check_bearer(authorization, settings.site_password)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
