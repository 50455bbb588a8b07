"""
Solar estimator tests

Covers the progressive tariff, sizing and finance figures for a reference
Cairo household, the 25-year degradation series, and location/sector
fallbacks.
"""

import logging

import pytest

from models import Location, Sector, SolarInput
from solar import (
    DEFAULT_PRODUCTION_FACTOR,
    PROJECTION_YEARS,
    calculate_solar,
    calculate_weighted_tariff,
    cost_per_kwp,
    maintenance_factor,
    monthly_production_split,
    production_factor,
    yearly_frame,
)


# ==================== FIXTURES ====================

@pytest.fixture
def cairo_home():
    return SolarInput(
        monthly_consumption_kwh=1200,
        available_area_m2=150,
        coverage_percent=60,
        location=Location.CAIRO,
        sector=Sector.RESIDENTIAL,
    )


@pytest.fixture
def cairo_result(cairo_home):
    return calculate_solar(cairo_home)


# ==================== TARIFF ====================

class TestWeightedTariff:

    def test_first_band_only(self):
        assert calculate_weighted_tariff("residential", 50) == 0.68

    def test_spills_into_second_band(self):
        assert calculate_weighted_tariff("residential", 100) == (50 * 0.68 + 50 * 0.78) / 100

    def test_reaches_open_top_band(self):
        expected = (
            50 * 0.68 + 50 * 0.78 + 100 * 0.95 + 150 * 1.55
            + 300 * 1.95 + 350 * 2.10 + 200 * 2.23
        ) / 1200
        assert calculate_weighted_tariff(Sector.RESIDENTIAL, 1200) == pytest.approx(expected)

    def test_commercial_bands(self):
        expected = (100 * 0.65 + 150 * 1.36 + 50 * 1.50) / 300
        assert calculate_weighted_tariff("commercial", 300) == pytest.approx(expected)

    def test_industrial_is_flat(self):
        assert calculate_weighted_tariff("industrial", 10) == 1.70
        assert calculate_weighted_tariff("industrial", 100_000) == 1.70

    def test_unknown_sector_is_flat(self):
        assert calculate_weighted_tariff("agricultural", 500) == 1.70


# ==================== LOOKUPS ====================

class TestLookups:

    def test_known_location(self):
        assert production_factor(Location.ASWAN) == 2200
        assert production_factor("Alexandria") == 1800

    def test_unknown_location_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="solar"):
            assert production_factor("Atlantis") == DEFAULT_PRODUCTION_FACTOR
        assert "Atlantis" in caplog.text

    def test_unknown_sector_uses_industrial_costs(self):
        assert cost_per_kwp("agricultural") == 14000
        assert maintenance_factor("agricultural") == 0.04

    def test_sector_costs(self):
        assert cost_per_kwp(Sector.RESIDENTIAL) == 12000
        assert maintenance_factor("commercial") == 0.03


# ==================== ESTIMATE ====================

class TestCalculateSolar:

    def test_system_sizing(self, cairo_result):
        assert cairo_result.system_size_kwp == 4.55
        assert cairo_result.required_area == 31.8
        assert cairo_result.area_warning is False
        assert cairo_result.available_area == 150

    def test_required_area_is_seven_m2_per_kwp(self, cairo_result):
        raw_size = 1200 * 12 * 0.6 / 1900
        assert cairo_result.required_area == pytest.approx(raw_size * 7, abs=0.05)

    def test_costs(self, cairo_result):
        assert cairo_result.installation_cost == 54568
        assert cairo_result.annual_maintenance_cost == 1091

    def test_production_matches_coverage(self, cairo_result):
        assert cairo_result.annual_production == 8640

    def test_bills(self, cairo_result):
        # 2166.5 EGP a month before solar
        assert cairo_result.current_bill == 25998
        # 480 kWh/month left: 400.5 + 130 * 1.95 = 654 EGP
        assert cairo_result.new_bill == 7848
        assert cairo_result.weighted_tariff == 1.81

    def test_savings_priced_at_pre_solar_rate(self, cairo_result):
        assert cairo_result.annual_savings == 15599
        assert cairo_result.net_savings == 14507
        # Not the bill difference
        assert cairo_result.annual_savings != cairo_result.current_bill - cairo_result.new_bill

    def test_payback_and_roi(self, cairo_result):
        cost = 1200 * 12 * 0.6 / 1900 * 12000
        net = 8640 * (2166.5 / 1200) - cost * 0.02
        assert cairo_result.payback_years == pytest.approx(cost / net, abs=0.05)
        assert cairo_result.roi == pytest.approx((net * 25 - cost) / cost * 100, abs=0.05)

    def test_environment(self, cairo_result):
        assert cairo_result.co2_saving_tons == 4.32
        assert cairo_result.trees_equivalent == 196

    def test_small_roof_flags_warning_but_still_computes(self):
        result = calculate_solar(SolarInput(1200, 10, 60, "Cairo", "residential"))
        assert result.area_warning is True
        assert result.required_area > 10
        assert result.installation_cost > 0

    def test_full_coverage_leaves_no_bill(self):
        result = calculate_solar(SolarInput(1200, 150, 100, "Cairo", "residential"))
        assert result.new_bill == 0

    def test_full_coverage_finance(self):
        result = calculate_solar(SolarInput(1200, 150, 100, "Cairo", "residential"))
        cost = 1200 * 12 / 1900 * 12000
        net = 14400 * (2166.5 / 1200) - cost * 0.02
        assert result.annual_production == 14400
        assert result.payback_years == pytest.approx(cost / net, abs=0.05)
        assert result.roi == pytest.approx((net * 25 - cost) / cost * 100, abs=0.05)

    def test_zero_coverage_has_no_payback(self):
        result = calculate_solar(SolarInput(1200, 150, 0, "Cairo", "residential"))
        assert result.system_size_kwp == 0
        assert result.installation_cost == 0
        assert result.net_savings == 0
        assert result.payback_years is None
        assert result.roi == 0.0
        assert result.new_bill == result.current_bill
        assert all(y.production == 0 for y in result.yearly_data)

    def test_unknown_location_uses_default_factor(self):
        result = calculate_solar(SolarInput(1000, 100, 60, "Atlantis", "residential"))
        assert result.production_factor == DEFAULT_PRODUCTION_FACTOR

    def test_deterministic(self, cairo_home):
        assert calculate_solar(cairo_home) == calculate_solar(cairo_home)

    def test_to_dict(self, cairo_result):
        d = cairo_result.to_dict()
        assert d["system_size_kwp"] == 4.55
        assert len(d["yearly_data"]) == PROJECTION_YEARS


# ==================== PROJECTION ====================

class TestYearlyProjection:

    def test_twenty_five_years(self, cairo_result):
        years = [y.year for y in cairo_result.yearly_data]
        assert years == list(range(1, 26))

    def test_production_degrades_one_percent(self, cairo_result):
        first = cairo_result.yearly_data[0].production
        for i, y in enumerate(cairo_result.yearly_data):
            assert abs(y.production - first * 0.99 ** i) <= 1

    def test_cumulative_savings_grow(self, cairo_result):
        cumulative = [y.cumulative_savings for y in cairo_result.yearly_data]
        assert cumulative == sorted(cumulative)
        assert cumulative[-1] == pytest.approx(sum(y.savings for y in cairo_result.yearly_data), abs=25)

    def test_co2_per_year(self, cairo_result):
        assert cairo_result.yearly_data[0].co2_saved == 4.3

    def test_frame_relabels_years(self, cairo_result):
        df = yearly_frame(cairo_result, 2025)
        assert df["year"].iloc[0] == 2025
        assert df["year"].iloc[-1] == 2049
        assert df["investment"].iloc[0] == -cairo_result.installation_cost
        assert (df["investment"].iloc[1:] == 0).all()

    def test_frame_without_base_year(self, cairo_result):
        df = yearly_frame(cairo_result)
        assert df["year"].iloc[0] == 1

    def test_monthly_split_sums_to_annual(self):
        df = monthly_production_split(1000)
        assert len(df) == 12
        assert df["production"].sum() == pytest.approx(1000)
