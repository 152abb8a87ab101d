"""
Panel power generation from monthly peak sun hours.

  Daily energy:   E_day = PSH × W / 1000                     (kWh)
  Monthly energy: E_month = round(E_day, 2) × days_in_month  (non-leap year)

Daylight uses the standard day-length relation on the mid-month day:

  δ = 23.45 × sin(2π/365 × (doy − 81))
  cos(ω) = −tan(φ) × tan(δ)
  daylight = 2ω / 15 hours, centred on solar noon

cos(ω) < −1 is polar day (24 h), cos(ω) > 1 is polar night (0 h). The hourly
profile spreads E_day over daylight hours as sin(π × progress), sampled at
each hour's midpoint and rescaled to sum to E_day.
"""

import math

from app.config import (
    DAYS_IN_MONTHS,
    ENERGY_DECIMALS,
    HOURLY_DECIMALS,
    MID_MONTH_DAY_OF_YEAR,
    TiltMethod,
)
from app.engine.utils import round_half_away
from app.engine.validation import validate_latitude, validate_panel_watts
from app.models.power import (
    AnnualEnergy,
    DaylightWindow,
    MethodEnergy,
    MonthlyPowerEstimate,
    PowerEstimate,
)
from app.models.solar import MonthlySolarProfile

# Axial tilt used by the day-length approximation
_AXIAL_TILT = 23.45
_HOURS_PER_DAY = 24


def daily_energy_kwh(psh: float, panel_watts: float) -> float:
    """Energy from one panel over a day with ``psh`` peak sun hours."""
    return psh * (panel_watts / 1000)


def psh_for_method(month: MonthlySolarProfile, method: TiltMethod) -> float:
    if method == TiltMethod.YEARLY_FIXED:
        return month.yearly_fixed.psh
    if method == TiltMethod.FLAT:
        return month.flat.psh
    return month.monthly_optimal.psh


def daylight_window(day_of_year: int, latitude: float) -> DaylightWindow:
    """Sunrise, sunset and day length (solar time) for one day at ``latitude``."""
    declination = _AXIAL_TILT * math.sin(2 * math.pi / 365 * (day_of_year - 81))
    cos_hour_angle = -math.tan(math.radians(latitude)) * math.tan(math.radians(declination))

    if cos_hour_angle < -1:
        return DaylightWindow(sunrise=0.0, sunset=24.0, daylight_hours=24.0)
    if cos_hour_angle > 1:
        return DaylightWindow(sunrise=12.0, sunset=12.0, daylight_hours=0.0)

    daylight = 2 * math.degrees(math.acos(cos_hour_angle)) / 15
    return DaylightWindow(
        sunrise=12 - daylight / 2,
        sunset=12 + daylight / 2,
        daylight_hours=daylight,
    )


def hourly_energy_profile(daily_kwh: float, month_index: int, latitude: float) -> list[float]:
    """
    Split a day's energy across 24 clock hours of the mid-month day.

    Returns 24 zeros during polar night, or when no hour midpoint falls inside
    a very short day.
    """
    window = daylight_window(MID_MONTH_DAY_OF_YEAR[month_index], latitude)
    if window.daylight_hours == 0:
        return [0.0] * _HOURS_PER_DAY

    raw = []
    for hour in range(_HOURS_PER_DAY):
        midpoint = hour + 0.5
        if midpoint < window.sunrise or midpoint > window.sunset:
            raw.append(0.0)
        else:
            progress = (midpoint - window.sunrise) / window.daylight_hours
            raw.append(max(0.0, math.sin(math.pi * progress)))

    total = sum(raw)
    scale = daily_kwh / total if total > 0 else 0.0
    return [round_half_away(value * scale, HOURLY_DECIMALS) for value in raw]


def _method_energy(psh: float, panel_watts: float, days: int) -> MethodEnergy:
    daily = round_half_away(daily_energy_kwh(psh, panel_watts), ENERGY_DECIMALS)
    return MethodEnergy(
        daily_kwh=daily,
        monthly_kwh=round_half_away(daily * days, ENERGY_DECIMALS),
    )


def estimate_power(
    latitude: float,
    solar: list[MonthlySolarProfile],
    panel_watts: float,
    tilt_method: TiltMethod = TiltMethod.MONTHLY_OPTIMAL,
) -> PowerEstimate:
    """
    Estimate a panel's generation for each month of a solar profile.

    Args:
        latitude: Site latitude (-90 to 90), used for day length
        solar: Twelve monthly profiles, January first
        panel_watts: Rated panel output in watts (> 0)
        tilt_method: Tilt method whose energy drives the hourly profile

    Returns:
        PowerEstimate with daily and monthly kWh for every tilt method, the
        hourly profile for ``tilt_method`` and annual totals.
    """
    latitude = validate_latitude(latitude)
    panel_watts = validate_panel_watts(panel_watts)
    if [m.month_index for m in solar] != list(range(12)):
        raise ValueError("Solar profile must contain 12 months in calendar order")

    months = []
    for month in solar:
        idx = month.month_index
        days = DAYS_IN_MONTHS[idx]
        selected_daily = daily_energy_kwh(psh_for_method(month, tilt_method), panel_watts)
        months.append(MonthlyPowerEstimate(
            month_index=idx,
            month=month.month,
            days=days,
            monthly_optimal=_method_energy(month.monthly_optimal.psh, panel_watts, days),
            yearly_fixed=_method_energy(month.yearly_fixed.psh, panel_watts, days),
            flat=_method_energy(month.flat.psh, panel_watts, days),
            daylight=daylight_window(MID_MONTH_DAY_OF_YEAR[idx], latitude),
            hourly_kwh=hourly_energy_profile(selected_daily, idx, latitude),
        ))

    def annual(method: TiltMethod) -> float:
        return round_half_away(
            sum(getattr(m, method.value).monthly_kwh for m in months), ENERGY_DECIMALS
        )

    return PowerEstimate(
        panel_watts=panel_watts,
        tilt_method=tilt_method,
        months=months,
        annual_kwh=AnnualEnergy(
            monthly_optimal=annual(TiltMethod.MONTHLY_OPTIMAL),
            yearly_fixed=annual(TiltMethod.YEARLY_FIXED),
            flat=annual(TiltMethod.FLAT),
        ),
    )
