"""
Nominatim (OpenStreetMap) geocoding.

Reverse geocoding names locations the weather provider only resolved to bare
coordinates; forward search backs the autocomplete endpoint. Both degrade to
"no answer" on failure and log why.
"""

import logging
from typing import Optional

import httpx

from app.models.geocoding import AutocompleteSuggestion
from app.services.cache import looks_like_coordinates

logger = logging.getLogger(__name__)

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
USER_AGENT = "Solar-Planner/1.0"
AUTOCOMPLETE_LIMIT = 8
MIN_QUERY_LENGTH = 2


def _first(address: dict, *fields: str) -> Optional[str]:
    for field in fields:
        if address.get(field):
            return address[field]
    return None


def build_display_name(item: dict) -> str:
    """Short 'neighbourhood, city, county, state, country' label, duplicates dropped."""
    address = item.get("address") or {}
    candidates = [
        _first(address, "neighbourhood", "suburb", "hamlet", "residential", "quarter"),
        _first(address, "city", "town", "village", "municipality", "county"),
        address.get("county"),
        _first(address, "state", "province", "region"),
        address.get("country"),
    ]
    parts = []
    for part in candidates:
        if part and part not in parts:
            parts.append(part)
    return ", ".join(parts) if parts else item.get("display_name", "")


class NominatimClient:
    def __init__(
        self,
        http_client: Optional[httpx.Client] = None,
        user_agent: str = USER_AGENT,
        timeout: float = 10.0,
    ):
        self.http = http_client or httpx.Client(timeout=timeout)
        self.headers = {"User-Agent": user_agent}

    def reverse(self, latitude: float, longitude: float) -> Optional[str]:
        """Display name for a coordinate pair, or None if it can't be resolved."""
        try:
            response = self.http.get(
                f"{NOMINATIM_BASE_URL}/reverse",
                params={"format": "json", "lat": latitude, "lon": longitude},
                headers=self.headers,
            )
        except httpx.HTTPError:
            logger.exception("Reverse geocoding failed for (%s, %s)", latitude, longitude)
            return None

        if response.is_error:
            logger.warning(
                "Nominatim reverse geocoding returned %d for (%s, %s)",
                response.status_code, latitude, longitude,
            )
            return None
        try:
            return response.json().get("display_name") or None
        except (ValueError, AttributeError):
            logger.warning("Nominatim reverse geocoding returned an unreadable body")
            return None

    def search(self, query: str, limit: int = AUTOCOMPLETE_LIMIT) -> list[AutocompleteSuggestion]:
        """Place-name suggestions for a partial query."""
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        try:
            response = self.http.get(
                f"{NOMINATIM_BASE_URL}/search",
                params={
                    "format": "json",
                    "q": query,
                    "limit": limit,
                    "addressdetails": 1,
                    "extratags": 1,
                },
                headers=self.headers,
            )
        except httpx.HTTPError:
            logger.exception("Nominatim search failed for %r", query)
            return []

        if response.is_error:
            logger.warning("Nominatim search returned %d for %r", response.status_code, query)
            return []

        try:
            items = response.json()
        except ValueError:
            logger.warning("Nominatim search returned an unreadable body for %r", query)
            return []

        suggestions = []
        for item in items:
            try:
                lat = float(item["lat"])
                lon = float(item["lon"])
            except (KeyError, TypeError, ValueError):
                continue
            suggestions.append(AutocompleteSuggestion(
                display=build_display_name(item),
                value=item.get("display_name", ""),
                api_location=f"{lat},{lon}",
                lat=lat,
                lon=lon,
            ))
        return suggestions


def enhance_resolved_address(
    resolved_address: str,
    latitude: float,
    longitude: float,
    geocoder: NominatimClient,
) -> str:
    """Swap a coordinates-only address for a reverse-geocoded place name."""
    if not looks_like_coordinates(resolved_address):
        return resolved_address
    return geocoder.reverse(latitude, longitude) or resolved_address
