"""
Shared numeric helpers for the weather aggregator and solar model.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

import numpy as np


def round_half_away(value: Optional[float], decimals: int = 1) -> float:
    """
    Round to ``decimals`` places, halves away from zero.

    Works on the shortest decimal repr of the float, so 2.675 rounds to 2.68
    rather than the binary-float 2.67. None and non-finite values give 0.0.
    """
    if value is None or not math.isfinite(value):
        return 0.0
    if abs(value) >= 1e15:
        # already coarser than any quantum we round to
        return float(value)
    quantum = Decimal(1).scaleb(-decimals)
    # ROUND_HALF_UP in decimal means "away from zero"
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def mean_of_finite(values: Iterable[Optional[float]]) -> float:
    """Arithmetic mean of the present, finite values; 0.0 when there are none."""
    arr = np.array(
        [np.nan if v is None else v for v in values],
        dtype=float,
    )
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        return 0.0
    return float(finite.mean())


def format_coordinate(value: float) -> str:
    """30.0 -> '30', 30.27 -> '30.27'; shortest form, no trailing '.0'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def coordinate_pair(latitude: float, longitude: float) -> str:
    """'lat,lon' as sent to the weather provider and used for cache keys."""
    return f"{format_coordinate(latitude)},{format_coordinate(longitude)}"
