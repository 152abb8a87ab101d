"""
Solar geometry model for panel tilt and tilt gain.

A deliberately simple declination-based approximation, not an ephemeris:

  Optimal tilt:  tilt = clamp(round(|lat − δ|), 0, 90), facing the sun
                 ("N" when δ > lat, otherwise "S")
  Max gain:      G_max = G_lo + (G_hi − G_lo) × tilt / 90
                 with [G_lo, G_hi] chosen by latitude band
  Fixed tilt:    eff = cos(|fixed − tilt|)^1.5
                 G_fixed = clamp(1 + (G_max − 1) × eff, 1, G_max)

Peak sun hours for each strategy are the horizontal PSH (daily MJ/m² ÷ 3.6)
scaled by the strategy's gain, which keeps monthly ≥ fixed ≥ flat.
"""

import math
from functools import lru_cache
from typing import NamedTuple, Optional

from app.config import (
    MAX_TILT_DEGREES,
    MJ_PER_KWH,
    MONTH_NAMES,
    PSH_DECIMALS,
    CompassDirection,
)
from app.engine.utils import clamp, round_half_away
from app.models.solar import MonthlySolarProfile, TiltScenario

# Mean solar declination by month, Jan..Dec (degrees, positive = sun north of equator)
SOLAR_DECLINATIONS = (-20.9, -13.0, -2.4, 9.4, 18.8, 23.1, 21.2, 13.5, 2.2, -9.6, -18.9, -23.0)


class LatitudeBand(NamedTuple):
    name: str
    upper: float      # exclusive upper bound on |latitude|
    min_gain: float
    max_gain: float


LATITUDE_BANDS = (
    LatitudeBand("equatorial", 20.0, 1.03, 1.15),
    LatitudeBand("mid_latitude", 45.0, 1.05, 1.40),
    LatitudeBand("high_latitude", 60.0, 1.15, 1.80),
    LatitudeBand("polar", math.inf, 1.20, 2.20),
)

# Steeper than plain cosine: penalizes deviation from the monthly optimum
_TILT_PENALTY_EXPONENT = 1.5


def solar_declination(month: int) -> float:
    """Mean declination for a calendar month (1-12)."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return SOLAR_DECLINATIONS[month - 1]


def monthly_optimal_tilt(latitude: float, month: int) -> tuple[int, CompassDirection]:
    """Return (tilt in whole degrees, facing direction) for one month."""
    declination = solar_declination(month)
    direction = CompassDirection.NORTH if declination > latitude else CompassDirection.SOUTH
    tilt = round_half_away(abs(latitude - declination), 0)
    return int(clamp(tilt, 0, MAX_TILT_DEGREES)), direction


def latitude_gain_range(latitude: float) -> tuple[float, float]:
    """(min_gain, max_gain) for the band containing |latitude|."""
    abs_lat = abs(latitude)
    for band in LATITUDE_BANDS:
        if abs_lat < band.upper:
            return band.min_gain, band.max_gain
    # unreachable for finite input; the polar band is unbounded
    return LATITUDE_BANDS[-1].min_gain, LATITUDE_BANDS[-1].max_gain


@lru_cache(maxsize=4096)
def max_tilt_gain(latitude: float, month: int) -> float:
    """
    Gain achieved by re-tilting to the monthly optimum.

    The lower the noon sun sits (steeper optimal tilt), the more a tilted panel
    gains over a flat one.
    """
    optimal_tilt, _ = monthly_optimal_tilt(latitude, month)
    noon_elevation = 90.0 - optimal_tilt
    elevation_factor = 1.0 - noon_elevation / 90.0

    min_gain, max_gain = latitude_gain_range(latitude)
    gain = min_gain + (max_gain - min_gain) * elevation_factor
    return clamp(gain, min_gain, max_gain)


def fixed_tilt_efficiency(fixed_tilt: float, optimal_tilt: float) -> float:
    """Share of the monthly-optimal tilt benefit kept at a fixed angle (0-1)."""
    diff = abs(fixed_tilt - optimal_tilt)
    cosine = max(0.0, math.cos(math.radians(diff)))
    return cosine ** _TILT_PENALTY_EXPONENT


@lru_cache(maxsize=4096)
def fixed_tilt_gain(latitude: float, fixed_tilt: float, month: int) -> float:
    """Gain of a panel held at ``fixed_tilt`` all year, for one month."""
    if fixed_tilt == 0:
        # A flat panel gains nothing over horizontal
        return 1.0

    optimal_tilt, _ = monthly_optimal_tilt(latitude, month)
    max_gain = max_tilt_gain(latitude, month)
    efficiency = fixed_tilt_efficiency(fixed_tilt, optimal_tilt)
    gain = 1.0 + (max_gain - 1.0) * efficiency
    return clamp(gain, 1.0, max_gain)


def horizontal_psh(solar_energy_mj: float) -> float:
    """Convert daily horizontal irradiation (MJ/m²) to peak sun hours."""
    return solar_energy_mj / MJ_PER_KWH


def default_fixed_tilt(latitude: float) -> int:
    """Year-round tilt used when the caller doesn't pick one: |latitude|."""
    return int(round_half_away(abs(latitude), 0))


def format_tilt(degrees: float, direction: Optional[CompassDirection]) -> str:
    label = f"{degrees:g}°"
    if direction is not None and degrees != 0:
        label = f"{label} {direction.value}"
    return label


def _scenario(degrees: float, direction: Optional[CompassDirection], psh: float) -> TiltScenario:
    if degrees == 0:
        direction = None
    return TiltScenario(
        tilt=format_tilt(degrees, direction),
        tilt_degrees=degrees,
        direction=direction,
        psh=round_half_away(psh, PSH_DECIMALS),
    )


def monthly_solar_profile(
    latitude: float,
    month: int,
    horizontal: float,
    fixed_tilt: Optional[float] = None,
) -> MonthlySolarProfile:
    """
    Compare the three mounting strategies for one month.

    Args:
        latitude: Site latitude in degrees (-90 to 90)
        month: Calendar month, 1-12
        horizontal: Mean horizontal peak sun hours for the month (kWh/m²/day)
        fixed_tilt: Year-round tilt in degrees; defaults to round(|latitude|)

    Returns:
        MonthlySolarProfile with monthly-optimal, yearly-fixed and flat scenarios.
    """
    if horizontal < 0 or not math.isfinite(horizontal):
        raise ValueError(f"Horizontal PSH must be a finite value >= 0, got {horizontal}")
    if fixed_tilt is None:
        fixed_tilt = default_fixed_tilt(latitude)

    optimal_tilt, optimal_direction = monthly_optimal_tilt(latitude, month)
    max_gain = max_tilt_gain(latitude, month)
    fixed_gain = fixed_tilt_gain(latitude, fixed_tilt, month)

    monthly_psh = horizontal * max_gain
    # min() keeps fixed <= monthly even if float error nudges fixed_gain up
    fixed_psh = horizontal * min(fixed_gain, max_gain)
    yearly_direction = CompassDirection.SOUTH if latitude >= 0 else CompassDirection.NORTH

    return MonthlySolarProfile(
        month_index=month - 1,
        month=MONTH_NAMES[month - 1],
        monthly_optimal=_scenario(optimal_tilt, optimal_direction, monthly_psh),
        yearly_fixed=_scenario(fixed_tilt, yearly_direction, fixed_psh),
        flat=_scenario(0, None, horizontal),
    )
