# models.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Location(str, Enum):
    """Egyptian governorates offered by the solar form."""

    CAIRO = "Cairo"
    GIZA = "Giza"
    ALEXANDRIA = "Alexandria"
    ASWAN = "Aswan"
    LUXOR = "Luxor"
    QENA = "Qena"
    SOHAG = "Sohag"
    ASSIUT = "Assiut"
    MINYA = "Minya"
    BENI_SUEF = "Beni Suef"
    FAYOUM = "Fayoum"
    RED_SEA = "Red Sea"
    MATROUH = "Matrouh"
    NORTH_SINAI = "North Sinai"
    SOUTH_SINAI = "South Sinai"
    NEW_VALLEY = "New Valley"
    ISMAILIA = "Ismailia"
    SUEZ = "Suez"
    PORT_SAID = "Port Said"
    DAMIETTA = "Damietta"
    DAKAHLIA = "Dakahlia"
    GHARBIA = "Gharbia"
    MONUFIA = "Monufia"
    QALYUBIA = "Qalyubia"
    SHARQIA = "Sharqia"
    KAFR_EL_SHEIKH = "Kafr El Sheikh"
    BEHEIRA = "Beheira"


class Sector(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"


class WaterSector(str, Enum):
    DOMESTIC = "domestic"
    AGRICULTURE = "agriculture"
    INDUSTRIAL = "industrial"


class PlantType(str, Enum):
    SHADE_TREE = "ShadeTree"
    GRASS_TURF = "GrassTurf"
    DECORATIVE_PLANTS = "DecorativePlants"
    DESERT_PLANTS = "DesertPlants"


class WaterSource(str, Enum):
    DRINKING_WATER = "DrinkingWater"
    TREATED_WATER = "TreatedWater"
    RAINWATER = "Rainwater"


def enum_value(value: Any) -> str:
    """Plain string key for an enum member or a raw form value."""
    return value.value if isinstance(value, Enum) else str(value)


# ---------------- Solar ----------------

@dataclass
class SolarInput:
    monthly_consumption_kwh: float
    available_area_m2: float
    coverage_percent: float = 60.0
    location: Location | str = Location.CAIRO
    sector: Sector | str = Sector.RESIDENTIAL


@dataclass
class SolarYear:
    year: int
    production: int
    savings: int
    cumulative_savings: int
    co2_saved: float


@dataclass
class SolarResult:
    system_size_kwp: float
    required_area: float
    available_area: float
    area_warning: bool
    installation_cost: int
    annual_production: int
    current_bill: int
    new_bill: int
    annual_savings: int
    annual_maintenance_cost: int
    net_savings: int
    payback_years: Optional[float]
    roi: float
    co2_saving_tons: float
    trees_equivalent: int
    yearly_data: List[SolarYear]
    production_factor: float
    solar_coverage_percent: float
    weighted_tariff: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------- Water ----------------

@dataclass
class WaterInput:
    pH: float
    dissolved_oxygen: float
    TDS: float
    turbidity: float
    nitrate: float
    BOD: float
    sector: WaterSector | str = WaterSector.DOMESTIC


@dataclass
class WaterReading(WaterInput):
    """A WaterInput taken at a named monitoring point."""

    location: str = ""
    date: Optional[str] = None


@dataclass
class ParameterIndex:
    value: float
    standard: str
    index: Optional[float] = None


@dataclass
class WaterResult:
    wqi: float
    status: str
    color: str
    description: str
    recommendations: List[str]
    parameters: Dict[str, ParameterIndex]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------- Landscape ----------------

@dataclass
class LandscapeInput:
    area_m2: float
    plant_type: PlantType | str
    water_source: WaterSource | str = WaterSource.DRINKING_WATER
    cost_per_m2: Optional[float] = None
    maintenance_years: Optional[int] = None
    location: Optional[str] = None


@dataclass
class LandscapeYear:
    year: int
    co2_reduction: float
    cumulative_co2: float
    o2_production: int
    water_use: int


@dataclass
class Equivalencies:
    car_km_equivalent: int
    trees_equivalent: float
    people_o2_equivalent: float


@dataclass
class LandscapeResult:
    area_m2: float
    plant_type: str
    plant_description: str
    water_source: str
    co2_reduction_kg_per_year: float
    co2_reduction_tons_per_year: float
    o2_production_l_per_year: int
    o2_production_m3_per_year: float
    water_consumption_l_per_year: int
    water_consumption_m3_per_year: float
    planting_cost: int
    annual_maintenance_cost: int
    total_cost: int
    maintenance_years: int
    env_score: float
    score_category: str
    score_color: str
    equivalencies: Equivalencies
    recommendations: List[str]
    yearly_data: List[LandscapeYear]
    factors: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
