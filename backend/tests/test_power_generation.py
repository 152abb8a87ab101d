"""
Tests for panel power generation: daily/monthly energy, day length and hourly profiles.
"""

import pytest

from app.config import DAYS_IN_MONTHS, TiltMethod
from app.engine.power_generation import (
    daily_energy_kwh,
    daylight_window,
    estimate_power,
    hourly_energy_profile,
    psh_for_method,
)
from app.engine.solar_geometry import monthly_solar_profile

JUNE, DECEMBER = 5, 11
MID_JUNE, MID_DECEMBER = 166, 349


def make_solar(latitude=30.27, horizontal=5.0):
    return [monthly_solar_profile(latitude, m, horizontal) for m in range(1, 13)]


class TestDailyEnergy:
    def test_kwh(self):
        assert daily_energy_kwh(5.0, 400) == pytest.approx(2.0)
        assert daily_energy_kwh(0.0, 400) == 0.0

    def test_psh_for_method(self):
        june = make_solar()[JUNE]
        assert psh_for_method(june, TiltMethod.MONTHLY_OPTIMAL) == june.monthly_optimal.psh
        assert psh_for_method(june, TiltMethod.YEARLY_FIXED) == june.yearly_fixed.psh
        assert psh_for_method(june, TiltMethod.FLAT) == june.flat.psh == 5.0


class TestDaylightWindow:
    def test_equator_is_twelve_hours(self):
        window = daylight_window(MID_JUNE, 0.0)
        assert window.daylight_hours == pytest.approx(12.0)
        assert window.sunrise == pytest.approx(6.0)
        assert window.sunset == pytest.approx(18.0)

    def test_longer_days_in_local_summer(self):
        assert daylight_window(MID_JUNE, 45.0).daylight_hours > 15
        assert daylight_window(MID_DECEMBER, 45.0).daylight_hours < 9

    def test_hemispheres_mirror(self):
        north = daylight_window(MID_JUNE, 40.0).daylight_hours
        south = daylight_window(MID_JUNE, -40.0).daylight_hours
        assert north + south == pytest.approx(24.0)

    @pytest.mark.parametrize("day, latitude", [(MID_JUNE, 80.0), (MID_DECEMBER, -80.0), (MID_JUNE, 90.0)])
    def test_polar_day(self, day, latitude):
        window = daylight_window(day, latitude)
        assert (window.sunrise, window.sunset, window.daylight_hours) == (0.0, 24.0, 24.0)

    @pytest.mark.parametrize("day, latitude", [(MID_DECEMBER, 80.0), (MID_JUNE, -80.0), (MID_DECEMBER, 90.0)])
    def test_polar_night(self, day, latitude):
        window = daylight_window(day, latitude)
        assert (window.sunrise, window.sunset, window.daylight_hours) == (12.0, 12.0, 0.0)


class TestHourlyProfile:
    def test_equator_shape(self):
        hourly = hourly_energy_profile(2.0, JUNE, 0.0)
        assert len(hourly) == 24
        assert all(v == 0.0 for v in hourly[:6] + hourly[18:])
        assert all(v > 0 for v in hourly[6:18])
        assert sum(hourly) == pytest.approx(2.0, abs=0.01)
        # peak around solar noon, symmetric
        assert max(hourly) in (hourly[11], hourly[12])
        assert hourly[6] == pytest.approx(hourly[17], abs=1e-3)

    def test_polar_night_is_all_zero(self):
        assert hourly_energy_profile(2.0, DECEMBER, 85.0) == [0.0] * 24

    def test_polar_day_spreads_over_all_hours(self):
        hourly = hourly_energy_profile(2.4, JUNE, 85.0)
        assert all(v > 0 for v in hourly)
        assert sum(hourly) == pytest.approx(2.4, abs=0.02)

    def test_values_rounded_to_three_decimals(self):
        for value in hourly_energy_profile(1.2345, JUNE, 30.0):
            assert value == round(value, 3)


class TestEstimatePower:
    def test_flat_totals(self):
        estimate = estimate_power(30.27, make_solar(), 400, TiltMethod.FLAT)
        assert len(estimate.months) == 12
        jan, feb = estimate.months[0], estimate.months[1]
        assert jan.flat.daily_kwh == 2.0
        assert jan.flat.monthly_kwh == 62.0
        assert feb.days == 28
        assert feb.flat.monthly_kwh == 56.0
        assert estimate.annual_kwh.flat == 730.0

    def test_monthly_uses_rounded_daily(self):
        estimate = estimate_power(30.27, make_solar(horizontal=4.33), 333)
        for month in estimate.months:
            daily = month.flat.daily_kwh
            assert daily == round(daily, 2)
            assert month.flat.monthly_kwh == pytest.approx(daily * DAYS_IN_MONTHS[month.month_index])

    def test_method_ordering(self):
        estimate = estimate_power(30.27, make_solar(), 400)
        annual = estimate.annual_kwh
        assert annual.monthly_optimal >= annual.yearly_fixed >= annual.flat
        for month in estimate.months:
            assert month.monthly_optimal.daily_kwh >= month.yearly_fixed.daily_kwh >= month.flat.daily_kwh

    def test_annual_is_sum_of_months(self):
        estimate = estimate_power(30.27, make_solar(horizontal=4.87), 370)
        total = sum(m.yearly_fixed.monthly_kwh for m in estimate.months)
        assert estimate.annual_kwh.yearly_fixed == pytest.approx(total, abs=0.006)

    def test_hourly_follows_selected_method(self):
        solar = make_solar()
        flat = estimate_power(30.27, solar, 400, TiltMethod.FLAT)
        best = estimate_power(30.27, solar, 400, TiltMethod.MONTHLY_OPTIMAL)
        assert sum(flat.months[JUNE].hourly_kwh) == pytest.approx(2.0, abs=0.02)
        assert sum(best.months[JUNE].hourly_kwh) > sum(flat.months[JUNE].hourly_kwh)
        assert best.tilt_method == TiltMethod.MONTHLY_OPTIMAL

    def test_polar_winter_keeps_daily_energy(self):
        estimate = estimate_power(85.0, make_solar(latitude=85.0, horizontal=1.0), 1000, TiltMethod.FLAT)
        december = estimate.months[DECEMBER]
        assert december.daylight.daylight_hours == 0.0
        assert december.hourly_kwh == [0.0] * 24
        assert december.flat.daily_kwh == 1.0

    def test_polar_summer_daylight(self):
        estimate = estimate_power(-85.0, make_solar(latitude=-85.0), 400)
        assert estimate.months[DECEMBER].daylight.daylight_hours == 24.0
        assert estimate.months[JUNE].daylight.daylight_hours == 0.0

    @pytest.mark.parametrize("watts", [0, -100, float("nan"), float("inf"), True])
    def test_invalid_watts(self, watts):
        with pytest.raises(ValueError):
            estimate_power(30.27, make_solar(), watts)

    def test_invalid_latitude(self):
        with pytest.raises(ValueError, match="Latitude"):
            estimate_power(91, make_solar(), 400)

    def test_months_out_of_order(self):
        solar = make_solar()
        solar[0], solar[1] = solar[1], solar[0]
        with pytest.raises(ValueError, match="calendar order"):
            estimate_power(30.27, solar, 400)
