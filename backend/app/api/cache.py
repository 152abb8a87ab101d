"""
API routes for inspecting and clearing cached location profiles.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_cache, require_auth
from app.models.cache import CacheClearInput, CacheClearOutput, CacheListOutput
from app.services.cache import CacheCoordinator

router = APIRouter(prefix="/api/v1", tags=["cache"], dependencies=[Depends(require_auth)])


@router.get("/cache/list", response_model=CacheListOutput)
def list_cache(cache: CacheCoordinator = Depends(get_cache)):
    """Cached locations with a place name, most recent first."""
    return CacheListOutput(locations=cache.list_locations())


@router.post("/cache/clear", response_model=CacheClearOutput)
def clear_cache(
    body: Optional[CacheClearInput] = Body(None),
    cache: CacheCoordinator = Depends(get_cache),
):
    """Clear one location (when given) or every cached location."""
    location = (body.location or "").strip() if body else ""
    deleted = cache.clear(location or None)
    return CacheClearOutput(
        success=True,
        message=f"Cache cleared for location: {location}" if location else "All cache entries cleared",
        deleted_count=deleted,
    )
