# landscape.py
from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from conversions import convert_value, round_half_up, round_int
from models import (
    Equivalencies,
    LandscapeInput,
    LandscapeResult,
    LandscapeYear,
    PlantType,
    WaterSource,
    enum_value,
)

log = logging.getLogger(__name__)

# Per plant type (conservative, evidence-based):
#   co2   kg CO₂ / m² / yr
#   o2    L O₂ / m² / yr
#   water L / m² / yr (min, max)
#   cost  USD / m² (min, max)
LANDSCAPE_FACTORS: Dict[str, Dict] = {
    PlantType.SHADE_TREE.value: {
        "co2": 1.0,
        "o2": 36500,
        "water": (200, 600),
        "cost": (5, 30),
        "description": "Urban canopy trees with high CO₂ sequestration",
    },
    PlantType.GRASS_TURF.value: {
        "co2": 0.05,
        "o2": 1800,
        "water": (800, 1100),
        "cost": (2, 10),
        "description": "Lawn grass suitable for hot/dry climate",
    },
    PlantType.DECORATIVE_PLANTS.value: {
        "co2": 0.08,
        "o2": 900,
        "water": (200, 500),
        "cost": (3, 15),
        "description": "Ornamental plants and shrubs",
    },
    PlantType.DESERT_PLANTS.value: {
        "co2": 0.035,  # mid-point of 0.02-0.05
        "o2": 350,
        "water": (50, 250),
        "cost": (1, 6),
        "description": "Native xerophytes with minimal water needs",
    },
}

WATER_SOURCE_FACTORS: Dict[str, float] = {
    WaterSource.DRINKING_WATER.value: 1.0,
    WaterSource.TREATED_WATER.value: 0.8,
    WaterSource.RAINWATER.value: 0.6,
}
DEFAULT_WATER_SOURCE_FACTOR = 1.0

# EPA equivalency factors
CO2_KG_PER_KM_DRIVEN = 0.404
CO2_KG_PER_TREE_YEAR = 21.77
O2_L_PER_PERSON_YEAR = 230000

MAINTENANCE_SHARE = 0.15
MAX_WATER_USE_PER_M2 = 1100  # grass turf upper bound
CO2_PER_M2_CEILING = 1.2
O2_PER_M2_CEILING = 40000
SCORE_WEIGHTS = {"co2": 0.45, "o2": 0.25, "water": 0.30}

MATURITY_RATE = 0.05
MATURITY_YEAR = 10
PROJECTION_YEARS = 25
GRASS_HIGH_WATER_L = 90000
LARGE_AREA_M2 = 500

# (minimum score, category, color), checked top-down
SCORE_CATEGORIES: List[Tuple[float, str, str]] = [
    (75, "Excellent", "#10b981"),
    (60, "Good", "#3b82f6"),
    (40, "Moderate", "#f59e0b"),
    (float("-inf"), "Poor", "#ef4444"),
]


def plant_factors(plant_type: PlantType | str) -> Dict:
    key = enum_value(plant_type)
    if key not in LANDSCAPE_FACTORS:
        raise ValueError("Invalid plant type selected")
    return LANDSCAPE_FACTORS[key]


def water_source_factor(source: WaterSource | str) -> float:
    return WATER_SOURCE_FACTORS.get(enum_value(source), DEFAULT_WATER_SOURCE_FACTOR)


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def environmental_score(co2_kg: float, o2_l: float, water_use_per_m2: float, area_m2: float) -> float:
    """0–100 blend of CO₂ uptake, O₂ output and water thrift per m²."""
    co2_n = _clamp01((co2_kg / area_m2) / CO2_PER_M2_CEILING)
    o2_n = _clamp01((o2_l / area_m2) / O2_PER_M2_CEILING)
    water_n = _clamp01(1 - (water_use_per_m2 / MAX_WATER_USE_PER_M2))

    score = (
        co2_n * SCORE_WEIGHTS["co2"]
        + o2_n * SCORE_WEIGHTS["o2"]
        + water_n * SCORE_WEIGHTS["water"]
    ) * 100
    return round_half_up(max(0.0, min(100.0, score)), 1)


def score_category(score: float) -> Tuple[str, str]:
    for minimum, category, color in SCORE_CATEGORIES:
        if score >= minimum:
            return category, color
    return SCORE_CATEGORIES[-1][1], SCORE_CATEGORIES[-1][2]


def landscape_recommendations(
    plant_type: str, water_source: str, water_consumption_l: float, area_m2: float
) -> List[str]:
    recs: List[str] = []

    if water_source == WaterSource.DRINKING_WATER.value:
        recs.append("Consider switching to treated water or rainwater harvesting to conserve drinking water.")

    if plant_type == PlantType.GRASS_TURF.value and water_consumption_l > GRASS_HIGH_WATER_L:
        recs.append(
            "Grass turf requires significant water. Consider replacing portions with desert plants "
            "to reduce water consumption."
        )

    if plant_type == PlantType.SHADE_TREE.value:
        recs.append("Space trees 5-8 meters apart for optimal canopy development and CO₂ sequestration.")

    if plant_type == PlantType.DESERT_PLANTS.value:
        recs.append("Excellent choice for water conservation. Use drip irrigation and mulch to maximize efficiency.")

    if area_m2 > LARGE_AREA_M2:
        recs.append(
            "For large areas, consider a mixed planting approach combining trees, shrubs, and ground cover "
            "for optimal environmental benefits."
        )

    recs.append("Install soil moisture sensors to optimize irrigation scheduling and reduce water waste.")
    recs.append("Apply organic mulch (5-10 cm depth) to reduce evaporation and maintain soil moisture.")
    return recs


def calculate_landscape(inp: LandscapeInput) -> LandscapeResult:
    area_m2 = float(inp.area_m2)
    plant_type = enum_value(inp.plant_type)
    water_source = enum_value(inp.water_source)
    maintenance_years = inp.maintenance_years or 1

    factors = plant_factors(plant_type)
    log.debug("Landscape estimate: %.1f m² of %s on %s", area_m2, plant_type, water_source)

    co2_kg_year = area_m2 * factors["co2"]
    o2_l_year = area_m2 * factors["o2"]

    water_min, water_max = factors["water"]
    water_use_per_m2 = (water_min + water_max) / 2
    water_l_year = area_m2 * water_use_per_m2 * water_source_factor(water_source)

    cost_min, cost_max = factors["cost"]
    avg_cost_per_m2 = inp.cost_per_m2 or (cost_min + cost_max) / 2
    planting_cost = area_m2 * avg_cost_per_m2
    annual_maintenance_cost = planting_cost * MAINTENANCE_SHARE
    total_cost = planting_cost + annual_maintenance_cost * maintenance_years

    env_score = environmental_score(co2_kg_year, o2_l_year, water_use_per_m2, area_m2)
    category, color = score_category(env_score)

    yearly_data: List[LandscapeYear] = []
    cumulative_co2 = 0.0
    annual_co2 = co2_kg_year
    annual_o2 = o2_l_year
    for year in range(1, PROJECTION_YEARS + 1):
        # Trees keep adding canopy until maturity, then plateau
        if plant_type == PlantType.SHADE_TREE.value and year <= MATURITY_YEAR:
            annual_co2 *= (1 + MATURITY_RATE)
            annual_o2 *= (1 + MATURITY_RATE)
        cumulative_co2 += annual_co2
        yearly_data.append(LandscapeYear(
            year=year,
            co2_reduction=round_half_up(annual_co2, 1),
            cumulative_co2=round_half_up(cumulative_co2, 1),
            o2_production=round_int(annual_o2),
            water_use=round_int(water_l_year),
        ))

    return LandscapeResult(
        area_m2=round_half_up(area_m2, 1),
        plant_type=plant_type,
        plant_description=factors["description"],
        water_source=water_source,
        co2_reduction_kg_per_year=round_half_up(co2_kg_year, 1),
        co2_reduction_tons_per_year=round_half_up(convert_value(co2_kg_year, "kg", "t"), 2),
        o2_production_l_per_year=round_int(o2_l_year),
        o2_production_m3_per_year=round_half_up(convert_value(o2_l_year, "L", "m3"), 1),
        water_consumption_l_per_year=round_int(water_l_year),
        water_consumption_m3_per_year=round_half_up(convert_value(water_l_year, "L", "m3"), 1),
        planting_cost=round_int(planting_cost),
        annual_maintenance_cost=round_int(annual_maintenance_cost),
        total_cost=round_int(total_cost),
        maintenance_years=maintenance_years,
        env_score=env_score,
        score_category=category,
        score_color=color,
        equivalencies=Equivalencies(
            car_km_equivalent=round_int(co2_kg_year / CO2_KG_PER_KM_DRIVEN),
            trees_equivalent=round_half_up(co2_kg_year / CO2_KG_PER_TREE_YEAR, 1),
            people_o2_equivalent=round_half_up(o2_l_year / O2_L_PER_PERSON_YEAR, 1),
        ),
        recommendations=landscape_recommendations(plant_type, water_source, water_l_year, area_m2),
        yearly_data=yearly_data,
        factors={
            "co2_factor_per_m2": factors["co2"],
            "o2_factor_per_m2": factors["o2"],
            "water_use_per_m2": round_int(water_use_per_m2),
            "cost_per_m2": round_half_up(avg_cost_per_m2, 2),
        },
    )
