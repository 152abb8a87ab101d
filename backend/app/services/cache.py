"""
Location profile cache.

Normalizes location strings into cache keys and stores computed profiles in a
key-value store with a time-to-live. Two concurrent misses for the same key
both recompute and both write; recomputation is deterministic, so the last
write simply wins.
"""

import logging
import re
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import ValidationError

from app.config import CACHE_KEY_PREFIX
from app.models.cache import CachedLocation
from app.models.location import LocationEnergyProfile

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_COORDINATES = re.compile(r"^-?\d+\.?\d*,\s*-?\d+\.?\d*$")


def normalize_cache_key(location: str) -> str:
    """'  Austin,  TX ' -> 'location:austin,_tx'"""
    return CACHE_KEY_PREFIX + _WHITESPACE.sub("_", location.strip().lower())


def looks_like_coordinates(text: Optional[str]) -> bool:
    """True for strings like '30.27,-97.74' that carry no place name."""
    if not text:
        return False
    return bool(_COORDINATES.match(text.strip()))


class KeyValueStore(ABC):
    """Minimal JSON key-value store with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None if absent or expired."""
        ...

    @abstractmethod
    def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        ...

    @abstractmethod
    def list(self, prefix: str = "") -> list[str]:
        """Keys of live entries starting with ``prefix``."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Entries are lost on restart."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def _expired(self, expires_at: float) -> bool:
        return self._clock() >= expires_at

    def _purge_expired(self) -> None:
        # caller holds the lock
        stale = [key for key, (expires_at, _) in self._entries.items() if self._expired(expires_at)]
        for key in stale:
            del self._entries[key]

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._expired(expires_at):
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        with self._lock:
            self._purge_expired()
            self._entries[key] = (self._clock() + ttl_seconds, value)

    def list(self, prefix: str = "") -> list[str]:
        with self._lock:
            self._purge_expired()
            return [key for key in self._entries if key.startswith(prefix)]

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)


class CacheCoordinator:
    """Get/put LocationEnergyProfile objects keyed by normalized location."""

    def __init__(self, store: KeyValueStore, ttl_seconds: int):
        self.store = store
        self.ttl_seconds = ttl_seconds

    def get_profile(self, location: str) -> Optional[LocationEnergyProfile]:
        key = normalize_cache_key(location)
        data = self.store.get(key)
        if data is None:
            return None
        try:
            return LocationEnergyProfile.model_validate(data)
        except ValidationError as e:
            logger.warning("Discarding unreadable cache entry %s: %s", key, e)
            self.store.delete(key)
            return None

    def put_profile(self, location: str, profile: LocationEnergyProfile) -> None:
        key = normalize_cache_key(location)
        data = profile.model_dump(mode="json", exclude={"cached"})
        self.store.put(key, data, self.ttl_seconds)
        logger.info("Cached profile for %s (ttl=%ds)", key, self.ttl_seconds)

    def list_locations(self) -> list[CachedLocation]:
        """Cached entries with a real place name, newest first."""
        locations = []
        for key in self.store.list(CACHE_KEY_PREFIX):
            data = self.store.get(key)
            if not data:
                continue
            name = data.get("location")
            if (
                not name
                or looks_like_coordinates(name)
                or data.get("latitude") is None
                or data.get("longitude") is None
            ):
                continue
            locations.append(CachedLocation(
                key=key,
                location=name,
                original_search=key[len(CACHE_KEY_PREFIX):].replace("_", " "),
                latitude=data["latitude"],
                longitude=data["longitude"],
                cached_at=data["computed_at"],
            ))

        locations.sort(key=lambda loc: loc.cached_at, reverse=True)
        return locations

    def clear(self, location: Optional[str] = None) -> int:
        """Delete one location's entry, or every location entry. Returns the count."""
        if location:
            self.store.delete(normalize_cache_key(location))
            return 1

        keys = self.store.list(CACHE_KEY_PREFIX)
        for key in keys:
            self.store.delete(key)
        logger.info("Cleared %d cached locations", len(keys))
        return len(keys)
