"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from app.api.auth import router as auth_router
from app.api.location_data import router as location_data_router
from app.api.autocomplete import router as autocomplete_router
from app.api.cache import router as cache_router
from app.api.power import router as power_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(location_data_router)
router.include_router(autocomplete_router)
router.include_router(cache_router)
router.include_router(power_router)
