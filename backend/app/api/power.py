"""
API route for panel power generation estimates.
"""

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import require_auth
from app.engine.power_generation import estimate_power
from app.models.power import PowerEstimate, PowerEstimateInput

router = APIRouter(prefix="/api/v1", tags=["power"], dependencies=[Depends(require_auth)])


@router.post("/power", response_model=PowerEstimate)
def estimate_panel_power(body: PowerEstimateInput):
    """Daily, monthly, annual and hourly kWh for a panel at a profiled location."""
    try:
        return estimate_power(
            latitude=body.latitude,
            solar=body.solar,
            panel_watts=body.panel_watts,
            tilt_method=body.tilt_method,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
