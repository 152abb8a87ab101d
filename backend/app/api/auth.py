"""
API route for exchanging the site password for a bearer token.
"""

from fastapi import APIRouter, Depends, HTTPException

from app.config import Settings, get_settings
from app.models.auth import LoginInput, LoginOutput
from app.services.auth import AuthError, issue_token

router = APIRouter(prefix="/api/v1", tags=["auth"])


@router.post("/login", response_model=LoginOutput)
def login(body: LoginInput, settings: Settings = Depends(get_settings)):
    """Return a signed token valid for the configured number of hours."""
    try:
        return issue_token(body.password, settings)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
