# solar.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import pandas as pd

from conversions import convert_value, round_half_up, round_int
from models import Location, Sector, SolarInput, SolarResult, SolarYear, enum_value

log = logging.getLogger(__name__)

# ---------------- Defaults / constants ----------------

# kWh produced per kWp installed per year
PRODUCTION_FACTORS: Dict[str, float] = {
    Location.CAIRO.value: 1900, Location.GIZA.value: 1900,
    Location.ALEXANDRIA.value: 1800, Location.ASWAN.value: 2200,
    Location.LUXOR.value: 2150, Location.QENA.value: 2100,
    Location.SOHAG.value: 2050, Location.ASSIUT.value: 2000,
    Location.MINYA.value: 1975, Location.BENI_SUEF.value: 1950,
    Location.FAYOUM.value: 1930, Location.RED_SEA.value: 2150,
    Location.MATROUH.value: 1850, Location.NORTH_SINAI.value: 2000,
    Location.SOUTH_SINAI.value: 2200, Location.NEW_VALLEY.value: 2250,
    Location.ISMAILIA.value: 1925, Location.SUEZ.value: 1950,
    Location.PORT_SAID.value: 1800, Location.DAMIETTA.value: 1800,
    Location.DAKAHLIA.value: 1825, Location.GHARBIA.value: 1850,
    Location.MONUFIA.value: 1850, Location.QALYUBIA.value: 1900,
    Location.SHARQIA.value: 1850, Location.KAFR_EL_SHEIKH.value: 1800,
    Location.BEHEIRA.value: 1800,
}
DEFAULT_PRODUCTION_FACTOR = 1900.0

COST_PER_KWP: Dict[str, float] = {
    Sector.RESIDENTIAL.value: 12000,
    Sector.COMMERCIAL.value: 13000,
    Sector.INDUSTRIAL.value: 14000,
}
MAINTENANCE_FACTORS: Dict[str, float] = {
    Sector.RESIDENTIAL.value: 0.02,
    Sector.COMMERCIAL.value: 0.03,
    Sector.INDUSTRIAL.value: 0.04,
}
DEFAULT_COST_PER_KWP = COST_PER_KWP[Sector.INDUSTRIAL.value]
DEFAULT_MAINTENANCE_FACTOR = MAINTENANCE_FACTORS[Sector.INDUSTRIAL.value]

# Progressive monthly billing bands: (band width in kWh, rate per kWh).
# A width of None is the open-ended top band.
TARIFF_BANDS: Dict[str, List[Tuple[Optional[float], float]]] = {
    Sector.RESIDENTIAL.value: [
        (50, 0.68),
        (50, 0.78),
        (100, 0.95),
        (150, 1.55),
        (300, 1.95),
        (350, 2.10),
        (None, 2.23),
    ],
    Sector.COMMERCIAL.value: [
        (100, 0.65),
        (150, 1.36),
        (350, 1.50),
        (400, 1.65),
        (None, 1.80),
    ],
}
FLAT_TARIFF = 1.70

AREA_PER_KWP_M2 = 7.0
CO2_KG_PER_KWH = 0.5
CO2_KG_PER_TREE_YEAR = 22.0
DEGRADATION_RATE = 0.01
PROJECTION_YEARS = 25

# Share of annual production per calendar month (Jan..Dec)
MONTHLY_SHARES: List[Tuple[str, float]] = [
    ("Jan", 0.07), ("Feb", 0.08), ("Mar", 0.09), ("Apr", 0.09),
    ("May", 0.10), ("Jun", 0.10), ("Jul", 0.10), ("Aug", 0.09),
    ("Sep", 0.08), ("Oct", 0.08), ("Nov", 0.07), ("Dec", 0.05),
]


# ---------------- Lookups ----------------

def production_factor(location: Location | str) -> float:
    key = enum_value(location)
    if key not in PRODUCTION_FACTORS:
        log.warning("Unknown location %r, using %s kWh/kWp/yr", key, DEFAULT_PRODUCTION_FACTOR)
        return DEFAULT_PRODUCTION_FACTOR
    return PRODUCTION_FACTORS[key]


def cost_per_kwp(sector: Sector | str) -> float:
    return COST_PER_KWP.get(enum_value(sector), DEFAULT_COST_PER_KWP)


def maintenance_factor(sector: Sector | str) -> float:
    return MAINTENANCE_FACTORS.get(enum_value(sector), DEFAULT_MAINTENANCE_FACTOR)


def calculate_weighted_tariff(sector: Sector | str, monthly_consumption: float) -> float:
    """
    Average price per kWh for a month's consumption under the sector's tariff.

    Consumption fills each band completely before spilling into the next one,
    so the result is the blended rate (total bill / kWh). Industrial and any
    unrecognised sector pay the flat rate.
    """
    bands = TARIFF_BANDS.get(enum_value(sector))
    if bands is None:
        return FLAT_TARIFF

    total_cost = 0.0
    remaining = monthly_consumption
    for width, rate in bands:
        if remaining <= 0:
            break
        used = remaining if width is None else min(remaining, width)
        total_cost += used * rate
        remaining -= used

    return total_cost / monthly_consumption


# ---------------- Main estimator ----------------

def calculate_solar(inp: SolarInput) -> SolarResult:
    monthly_consumption = float(inp.monthly_consumption_kwh)
    available_area = float(inp.available_area_m2)
    coverage = float(inp.coverage_percent)
    sector = inp.sector

    log.debug(
        "Solar estimate: %.1f kWh/month, %.1f m², %.0f%% coverage, %s, %s",
        monthly_consumption, available_area, coverage,
        enum_value(inp.location), enum_value(sector),
    )

    annual_consumption = monthly_consumption * 12
    solar_needed_kwh_year = annual_consumption * (coverage / 100)
    factor = production_factor(inp.location)
    system_size_kwp = solar_needed_kwh_year / factor
    required_area = system_size_kwp * AREA_PER_KWP_M2
    area_warning = available_area < required_area
    installation_cost = system_size_kwp * cost_per_kwp(sector)
    annual_production = system_size_kwp * factor

    weighted_tariff = calculate_weighted_tariff(sector, monthly_consumption)
    annual_current_bill = monthly_consumption * weighted_tariff * 12
    # Savings are priced at the pre-solar blended rate; the new bill below is
    # re-tariffed on what is left, so the two figures are not reciprocal.
    annual_savings = annual_production * weighted_tariff
    annual_maintenance_cost = installation_cost * maintenance_factor(sector)
    net_savings = annual_savings - annual_maintenance_cost

    remaining_monthly = max(0.0, annual_consumption - annual_production) / 12
    new_tariff = calculate_weighted_tariff(sector, remaining_monthly) if remaining_monthly > 0 else 0.0
    annual_new_bill = remaining_monthly * new_tariff * 12

    # A system that never nets a saving (0 % coverage included) has no payback
    payback_years: Optional[float] = None
    if net_savings > 0:
        payback_years = installation_cost / net_savings
    roi = 0.0
    if installation_cost > 0:
        roi = ((net_savings * PROJECTION_YEARS - installation_cost) / installation_cost) * 100
    co2_saving_tons = convert_value(annual_production * CO2_KG_PER_KWH, "kg", "t")
    trees_equivalent = convert_value(co2_saving_tons, "t", "kg") / CO2_KG_PER_TREE_YEAR

    yearly_data: List[SolarYear] = []
    cumulative_savings = 0.0
    production = annual_production
    for year in range(1, PROJECTION_YEARS + 1):
        year_savings = production * weighted_tariff - annual_maintenance_cost
        cumulative_savings += year_savings
        yearly_data.append(SolarYear(
            year=year,
            production=round_int(production),
            savings=round_int(year_savings),
            cumulative_savings=round_int(cumulative_savings),
            co2_saved=round_half_up(convert_value(production * CO2_KG_PER_KWH, "kg", "t"), 1),
        ))
        production *= (1 - DEGRADATION_RATE)

    return SolarResult(
        system_size_kwp=round_half_up(system_size_kwp, 2),
        required_area=round_half_up(required_area, 1),
        available_area=available_area,
        area_warning=area_warning,
        installation_cost=round_int(installation_cost),
        annual_production=round_int(annual_production),
        current_bill=round_int(annual_current_bill),
        new_bill=round_int(annual_new_bill),
        annual_savings=round_int(annual_savings),
        annual_maintenance_cost=round_int(annual_maintenance_cost),
        net_savings=round_int(net_savings),
        payback_years=None if payback_years is None else round_half_up(payback_years, 1),
        roi=round_half_up(roi, 1),
        co2_saving_tons=round_half_up(co2_saving_tons, 2),
        trees_equivalent=round_int(trees_equivalent),
        yearly_data=yearly_data,
        production_factor=factor,
        solar_coverage_percent=coverage,
        weighted_tariff=round_half_up(weighted_tariff, 2),
    )


# ---------------- Dashboard helpers ----------------

def monthly_production_split(annual_production: float) -> pd.DataFrame:
    """Seasonal monthly profile of one year's production."""
    return pd.DataFrame(
        [{"month": m, "production": annual_production * share} for m, share in MONTHLY_SHARES]
    )


def yearly_frame(result: SolarResult, base_year: Optional[int] = None) -> pd.DataFrame:
    """
    25-year series as a DataFrame.

    With base_year the projection years are relabelled onto the calendar
    (year 1 -> base_year).
    """
    df = pd.DataFrame([vars(y) for y in result.yearly_data])
    if base_year is not None:
        df["year"] = df["year"] + (base_year - 1)
    df["investment"] = 0
    df.loc[df.index[0], "investment"] = -result.installation_cost
    return df
