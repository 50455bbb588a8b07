# forecast.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from conversions import round_half_up, round_int

log = logging.getLogger(__name__)

# ---------------- Defaults / constants ----------------

PANEL_EFFICIENCY = {"monocrystalline": 1.0, "polycrystalline": 0.9, "bifacial": 1.15}
INSTALLATION_FACTORS = {"rooftop": 1.0, "ground-mounted": 1.05}
GRID_FACTORS = {"grid": 1.0, "off-grid": 0.85}

# Substring of the location text -> irradiance factor
IRRADIANCE_FACTORS = [("Cairo", 1.0), ("Alexandria", 0.95), ("Aswan", 1.1)]

PEAK_SUN_HOURS = 4.5            # kWh per kW per day
PANEL_DEGRADATION = 0.005       # per year
TARIFF_EGP_PER_KWH = 1.5
TARIFF_INFLATION = 0.03
CO2_KG_PER_KWH = 0.5
FORECAST_YEARS = 25

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
DAYS_IN_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
# Summer (May-Sep) boost, winter (Nov-Feb) dip
SEASONAL_FACTORS = [0.8, 0.8, 1.0, 1.0, 1.2, 1.2, 1.2, 1.2, 1.2, 1.0, 0.8, 0.8]


@dataclass
class ForecastParameters:
    location: str = "Cairo, Egypt"
    panel_size_w: float = 330
    panel_count: int = 100
    investment: float = 500000  # EGP
    panel_type: str = "monocrystalline"
    installation_type: str = "rooftop"
    grid_connection: str = "grid"
    base_year: int = 2025


@dataclass
class ForecastResult:
    system_capacity_kw: float
    hourly: pd.DataFrame
    monthly: pd.DataFrame
    yearly: pd.DataFrame
    cost_trends: pd.DataFrame
    degradation: pd.DataFrame
    total_production: int
    average_daily_production: int
    peak_production: float
    co2_reduction: int
    payback_years: Optional[float]
    factors: Dict[str, float] = field(default_factory=dict)


def irradiance_factor(location: str) -> float:
    for needle, factor in IRRADIANCE_FACTORS:
        if needle in location:
            return factor
    return 1.0


def simulate_forecast(params: ForecastParameters) -> ForecastResult:
    """
    Rough production forecast for a panel array.

    Daily output follows a bell curve between 06:00 and 18:00 peaking at
    noon; months scale by season; years degrade by 0.5 % a year.
    """
    capacity_kw = (params.panel_size_w * params.panel_count) / 1000
    factors = {
        "efficiency": PANEL_EFFICIENCY.get(params.panel_type, 1.0),
        "irradiance": irradiance_factor(params.location),
        "installation": INSTALLATION_FACTORS.get(params.installation_type, 1.05),
        "grid": GRID_FACTORS.get(params.grid_connection, 0.85),
    }
    base = PEAK_SUN_HOURS * factors["efficiency"] * factors["irradiance"] * factors["installation"] * factors["grid"]
    log.debug("Forecast: %.2f kW at %.3f kWh/kW/day (%s)", capacity_kw, base, params.location)

    hours = np.arange(24)
    hour_factor = np.where((hours >= 6) & (hours <= 18), 1 - np.abs(hours - 12) / 6, 0.0)
    hourly_kwh = capacity_kw * base * hour_factor * hour_factor
    hourly = pd.DataFrame({
        "hour": hours,
        "production": [round_half_up(float(v), 2) for v in hourly_kwh],
    })

    monthly_kwh = capacity_kw * base * np.array(SEASONAL_FACTORS) * np.array(DAYS_IN_MONTH)
    monthly = pd.DataFrame({
        "month": MONTHS,
        "production": [round_int(float(v)) for v in monthly_kwh],
    })
    total_production = int(monthly["production"].sum())

    offsets = np.arange(FORECAST_YEARS)
    years = params.base_year + offsets
    retained = np.power(1 - PANEL_DEGRADATION, offsets)
    yearly = pd.DataFrame({
        "year": years,
        "production": [round_int(total_production * float(r)) for r in retained],
    })
    cost_trends = pd.DataFrame({
        "year": years,
        "cost": [
            round_half_up(TARIFF_EGP_PER_KWH * float(f), 2)
            for f in np.power(1 + TARIFF_INFLATION, offsets)
        ],
    })
    degradation = pd.DataFrame({
        "year": years,
        "efficiency": [round_half_up(100 * float(r), 2) for r in retained],
    })

    annual_savings = total_production * TARIFF_EGP_PER_KWH
    payback = round_half_up(params.investment / annual_savings, 1) if annual_savings > 0 else None

    return ForecastResult(
        system_capacity_kw=capacity_kw,
        hourly=hourly,
        monthly=monthly,
        yearly=yearly,
        cost_trends=cost_trends,
        degradation=degradation,
        total_production=total_production,
        average_daily_production=round_int(total_production / 365),
        peak_production=max(float(hourly["production"].max()), 0.0),
        co2_reduction=round_int(total_production * CO2_KG_PER_KWH),
        payback_years=payback,
        factors=factors,
    )


def yearly_rows(result: ForecastResult) -> List[Dict[str, int]]:
    return [{"year": int(y), "production": int(p)} for y, p in zip(result.yearly["year"], result.yearly["production"])]
