"""
Monthly weather aggregation.

Groups daily weather records by calendar month, ignoring the year, so that
several years of history collapse into twelve month-level averages. Each field
is averaged independently over only the values actually present in that month;
a month with no samples yields zeros rather than failing the whole profile.
"""

import logging

from app.config import MONTH_NAMES, WEATHER_DECIMALS
from app.engine.utils import mean_of_finite, round_half_away
from app.models.weather import DailyWeatherRecord, MonthlyWeatherSummary

logger = logging.getLogger(__name__)

# Summary field -> DailyWeatherRecord attribute
_SUMMARY_FIELDS = {
    "high_f": "temp_max",
    "low_f": "temp_min",
    "mean_f": "temp_mean",
    "humidity": "humidity",
}


def bucket_by_month(
    records: list[DailyWeatherRecord],
) -> list[list[DailyWeatherRecord]]:
    """Split records into 12 lists indexed by calendar month (0 = January)."""
    buckets: list[list[DailyWeatherRecord]] = [[] for _ in range(12)]
    for rec in records:
        buckets[rec.date.month - 1].append(rec)
    return buckets


def field_mean(records: list[DailyWeatherRecord], field: str) -> float:
    """Mean of one field over the records that carry a finite value for it."""
    return mean_of_finite(getattr(rec, field) for rec in records)


def aggregate_monthly_weather(
    records: list[DailyWeatherRecord],
) -> list[MonthlyWeatherSummary]:
    """
    Produce exactly 12 monthly weather summaries from daily records.

    Args:
        records: Daily records in any order, spanning one or more years.

    Returns:
        One MonthlyWeatherSummary per calendar month, every value rounded to
        one decimal place. Months with no data report 0.0 throughout.
    """
    buckets = bucket_by_month(records)
    summaries = []

    for idx, bucket in enumerate(buckets):
        if not bucket:
            logger.debug("No daily records for %s; reporting zeros", MONTH_NAMES[idx])

        values = {
            out_field: round_half_away(field_mean(bucket, rec_field), WEATHER_DECIMALS)
            for out_field, rec_field in _SUMMARY_FIELDS.items()
        }
        summaries.append(MonthlyWeatherSummary(
            month_index=idx,
            month=MONTH_NAMES[idx],
            **values,
        ))

    return summaries


def monthly_solar_energy(records: list[DailyWeatherRecord]) -> list[float]:
    """Unrounded mean daily solar energy (MJ/m²) for each calendar month."""
    return [field_mean(bucket, "solar_energy") for bucket in bucket_by_month(records)]
