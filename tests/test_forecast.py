"""Forecast simulator tests."""

import pytest

from forecast import ForecastParameters, irradiance_factor, simulate_forecast, yearly_rows


@pytest.fixture
def default_forecast():
    return simulate_forecast(ForecastParameters())


class TestIrradiance:

    @pytest.mark.parametrize("location,factor", [
        ("Cairo, Egypt", 1.0),
        ("Alexandria, Egypt", 0.95),
        ("Aswan", 1.1),
        ("Hurghada", 1.0),
    ])
    def test_lookup(self, location, factor):
        assert irradiance_factor(location) == factor


class TestSimulateForecast:

    def test_capacity(self, default_forecast):
        assert default_forecast.system_capacity_kw == pytest.approx(33.0)

    def test_daily_curve(self, default_forecast):
        hourly = default_forecast.hourly
        assert len(hourly) == 24
        assert hourly["production"].iloc[0] == 0
        assert hourly["production"].iloc[6] == 0
        assert hourly["production"].iloc[23] == 0
        assert default_forecast.peak_production == pytest.approx(148.5)
        assert hourly["production"].idxmax() == 12

    def test_seasonal_months(self, default_forecast):
        monthly = default_forecast.monthly
        assert list(monthly["month"])[:2] == ["Jan", "Feb"]
        assert monthly["production"].iloc[0] == 3683
        assert monthly["production"].iloc[5] > monthly["production"].iloc[0]
        assert default_forecast.total_production == monthly["production"].sum()

    def test_yearly_degradation(self, default_forecast):
        yearly = default_forecast.yearly
        assert len(yearly) == 25
        assert yearly["year"].iloc[0] == 2025
        assert yearly["production"].iloc[0] == default_forecast.total_production
        assert yearly["production"].is_monotonic_decreasing
        assert default_forecast.degradation["efficiency"].iloc[0] == 100.0
        assert default_forecast.degradation["efficiency"].iloc[1] == 99.5

    def test_tariff_rises(self, default_forecast):
        costs = default_forecast.cost_trends["cost"]
        assert costs.iloc[0] == 1.5
        assert costs.is_monotonic_increasing

    def test_summary_figures(self, default_forecast):
        total = default_forecast.total_production
        assert default_forecast.co2_reduction == pytest.approx(total * 0.5, abs=0.5)
        assert default_forecast.payback_years == pytest.approx(500000 / (total * 1.5), abs=0.05)
        assert default_forecast.average_daily_production == pytest.approx(total / 365, abs=0.5)

    def test_panel_type_scales_output(self, default_forecast):
        poly = simulate_forecast(ForecastParameters(panel_type="polycrystalline"))
        assert poly.factors["efficiency"] == 0.9
        assert poly.total_production < default_forecast.total_production

    def test_empty_array_has_no_payback(self):
        result = simulate_forecast(ForecastParameters(panel_count=0))
        assert result.total_production == 0
        assert result.payback_years is None

    def test_base_year(self):
        result = simulate_forecast(ForecastParameters(base_year=2030))
        assert result.yearly["year"].iloc[-1] == 2054

    def test_yearly_rows(self, default_forecast):
        rows = yearly_rows(default_forecast)
        assert rows[0] == {"year": 2025, "production": default_forecast.total_production}
        assert len(rows) == 25
