"""
Pydantic models for the tilt scenarios compared each month.
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.config import CompassDirection


class TiltScenario(BaseModel):
    """A mounting angle and the peak sun hours it is expected to capture."""
    tilt: str                                   # display label, e.g. "7° S"
    tilt_degrees: float = Field(..., ge=0, le=90)
    direction: Optional[CompassDirection] = None  # None for a flat panel
    psh: float = Field(..., ge=0, description="Peak sun hours (kWh/m²/day)")


class MonthlySolarProfile(BaseModel):
    """Monthly-optimal, yearly-fixed and flat scenarios for one month."""
    month_index: int = Field(..., ge=0, le=11)
    month: str
    monthly_optimal: TiltScenario
    yearly_fixed: TiltScenario
    flat: TiltScenario
