"""
Pydantic models for daily weather input and monthly weather summaries.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DailyWeatherRecord(BaseModel):
    """One day of observed weather. Missing fields are left as None."""
    date: datetime.date
    temp_max: Optional[float] = None     # °F
    temp_min: Optional[float] = None     # °F
    temp_mean: Optional[float] = None    # °F
    humidity: Optional[float] = None     # %
    solar_energy: Optional[float] = None  # MJ/m²/day


class MonthlyWeatherSummary(BaseModel):
    """Calendar-month averages across every year of history supplied."""
    month_index: int = Field(..., ge=0, le=11)
    month: str
    high_f: float
    low_f: float
    mean_f: float
    humidity: float
