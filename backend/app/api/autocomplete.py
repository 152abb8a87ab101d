"""
API route for place-name autocomplete.
"""

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_geocoder, require_auth
from app.models.geocoding import AutocompleteOutput
from app.services.geocoding import NominatimClient

router = APIRouter(prefix="/api/v1", tags=["autocomplete"], dependencies=[Depends(require_auth)])


@router.get("/autocomplete", response_model=AutocompleteOutput)
def autocomplete(
    q: str = Query("", description="Partial place name"),
    geocoder: NominatimClient = Depends(get_geocoder),
):
    """Suggest places matching a partial query. Short queries return nothing."""
    return AutocompleteOutput(suggestions=geocoder.search(q))
