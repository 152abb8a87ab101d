"""
Pydantic models for place-name autocomplete.
"""

from pydantic import BaseModel


class AutocompleteSuggestion(BaseModel):
    """A geocoded place the user can pick instead of typing a free-text location."""
    display: str
    value: str
    api_location: str   # "lat,lon" when coordinates are known
    lat: float
    lon: float


class AutocompleteOutput(BaseModel):
    suggestions: list[AutocompleteSuggestion]
