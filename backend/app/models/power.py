"""
Pydantic models for panel power generation estimates.
"""

from pydantic import BaseModel, Field, field_validator

from app.config import TiltMethod
from app.engine.validation import validate_latitude
from app.models.solar import MonthlySolarProfile


class DaylightWindow(BaseModel):
    """Sunrise and sunset in local solar time (hours, noon = 12)."""
    sunrise: float = Field(..., ge=0, le=24)
    sunset: float = Field(..., ge=0, le=24)
    daylight_hours: float = Field(..., ge=0, le=24)


class MethodEnergy(BaseModel):
    """Energy from one tilt method over a typical day and the whole month."""
    daily_kwh: float = Field(..., ge=0)
    monthly_kwh: float = Field(..., ge=0)


class MonthlyPowerEstimate(BaseModel):
    month_index: int = Field(..., ge=0, le=11)
    month: str
    days: int
    monthly_optimal: MethodEnergy
    yearly_fixed: MethodEnergy
    flat: MethodEnergy
    daylight: DaylightWindow                   # mid-month day
    hourly_kwh: list[float]                    # 24 values for the selected tilt method


class AnnualEnergy(BaseModel):
    monthly_optimal: float
    yearly_fixed: float
    flat: float


class PowerEstimateInput(BaseModel):
    """Estimate generation for a panel from an already-computed solar profile."""
    latitude: float
    solar: list[MonthlySolarProfile] = Field(..., min_length=12, max_length=12)
    panel_watts: float = Field(..., gt=0, description="Rated panel output (W)")
    tilt_method: TiltMethod = TiltMethod.MONTHLY_OPTIMAL

    @field_validator("latitude")
    @classmethod
    def _check_latitude(cls, value):
        return validate_latitude(value)


class PowerEstimate(BaseModel):
    panel_watts: float
    tilt_method: TiltMethod
    months: list[MonthlyPowerEstimate]
    annual_kwh: AnnualEnergy
