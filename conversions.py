# conversions.py
from __future__ import annotations

import math
from typing import Dict, List

# Base units for the quantities the dashboards report
UNITS: Dict[str, float] = {
    "g": 1e-3,
    "kg": 1.0,
    "t": 1e3,
    "L": 1e-3,
    "m3": 1.0,
    "Wh": 1e-3,
    "kWh": 1.0,
    "MWh": 1e3,
}

# Units are only convertible inside the same family
FAMILIES: Dict[str, str] = {
    "g": "mass",
    "kg": "mass",
    "t": "mass",
    "L": "volume",
    "m3": "volume",
    "Wh": "energy",
    "kWh": "energy",
    "MWh": "energy",
}


def convert_value(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit not in UNITS or to_unit not in UNITS:
        raise ValueError("Unit not supported")
    if FAMILIES[from_unit] != FAMILIES[to_unit]:
        raise ValueError(f"Cannot convert {from_unit} to {to_unit}")
    return value * (UNITS[from_unit] / UNITS[to_unit])


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like the dashboards display numbers (0.5 goes up, not to even)."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def round_int(value: float) -> int:
    return int(math.floor(value + 0.5))


def conversion_quicktips() -> List[str]:
    return [
        "1 t CO₂ = 1,000 kg CO₂",
        "1 m³ water = 1,000 L",
        "1 MWh = 1,000 kWh",
        "1 kWp in Cairo ≈ 1,900 kWh / year",
    ]
