"""
Pydantic models for cache management endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CachedLocation(BaseModel):
    """A previously computed location still held in the cache."""
    key: str
    location: str
    original_search: str
    latitude: float
    longitude: float
    cached_at: datetime


class CacheListOutput(BaseModel):
    locations: list[CachedLocation]


class CacheClearInput(BaseModel):
    location: Optional[str] = None  # None = clear every location entry


class CacheClearOutput(BaseModel):
    success: bool
    message: str
    deleted_count: int
