# validation.py
from __future__ import annotations

from typing import Dict, Mapping, Optional

from models import LandscapeInput, SolarInput, WaterInput

OBJECTIVES = ("solar", "water", "landscape")

WATER_FIELDS = ("turbidity", "pH", "dissolvedOxygen", "TDS", "nitrate", "BOD")

# Every key the analyze form can carry; used to tell "nothing entered" apart
# from "partly filled".
FORM_KEYS = (
    "billAmount", "location", "sectorType", "consumption", "space", "area_m2",
    "plantType", "waterSource", "cost_per_m2",
) + WATER_FIELDS


def _optional(val) -> Optional[str]:
    """Treat empty strings as None."""
    if val is None:
        return None
    s = str(val).strip()
    return s or None


def _safe_float(val) -> Optional[float]:
    s = _optional(val)
    if s is None:
        return None
    try:
        return float(s)
    except ValueError:
        return None


def _positive(val) -> bool:
    x = _safe_float(val)
    return x is not None and x > 0


def validate_form(objective: Optional[str], form: Mapping[str, object]) -> Dict[str, str]:
    """
    Field name -> message for everything that blocks a calculation.

    An empty dict means the form can be handed to the matching builder.
    """
    errors: Dict[str, str] = {}
    objective = _optional(objective)

    if not objective:
        errors["objective"] = "Choose a path to begin your story."
        return errors

    if objective == "solar":
        if not _optional(form.get("location")):
            errors["location"] = "Where in Egypt is your site located?"
        if not _optional(form.get("sectorType")):
            errors["sectorType"] = "What kind of place is it?"
        if not _positive(form.get("consumption")):
            errors["consumption"] = "Tell us your monthly consumption (kWh)."
        if not _positive(form.get("space")):
            errors["space"] = "How much roof can host your solar? (m²)"

    elif objective == "water":
        if not _optional(form.get("location")):
            errors["location"] = "Where are we testing water?"
        if not _optional(form.get("sectorType")):
            errors["sectorType"] = "Which sector best fits your use?"
        for f in WATER_FIELDS:
            if _safe_float(form.get(f)) is None:
                errors[f] = "Add a value so the index makes sense."
        if "dissolvedOxygen" not in errors and not _positive(form.get("dissolvedOxygen")):
            errors["dissolvedOxygen"] = "Dissolved oxygen must be above zero."

    elif objective == "landscape":
        if not _optional(form.get("location")):
            errors["location"] = "Where will your green space live?"
        if not _positive(form.get("area_m2")):
            errors["area_m2"] = "How large is the area (m²)?"
        if not _optional(form.get("plantType")):
            errors["plantType"] = "Choose your planting style."
        if not _optional(form.get("waterSource")):
            errors["waterSource"] = "Choose a water source to plan sustainably."

    else:
        errors["objective"] = "This path is not ready yet. Pick Solar, Water, or Landscape."

    return errors


def form_notice(objective: Optional[str], form: Mapping[str, object]) -> str:
    """Banner shown above the form after a blocked submit."""
    nothing_entered = not _optional(objective) and all(_optional(form.get(k)) is None for k in FORM_KEYS)
    if nothing_entered:
        return "No data yet — share a few details to unlock your personalized dashboard."
    if _optional(objective) and objective not in OBJECTIVES:
        return "There is nothing to analyze. Please enter your details to begin."
    return "Almost there — complete the highlighted fields to reveal your insights."


# ---------------- Builders (call only on a validated form) ----------------

def build_solar_input(form: Mapping[str, object]) -> SolarInput:
    coverage = _safe_float(form.get("coverage"))
    return SolarInput(
        monthly_consumption_kwh=float(form["consumption"]),
        available_area_m2=float(form["space"]),
        coverage_percent=60.0 if coverage is None else coverage,
        location=str(form["location"]).strip(),
        sector=str(form["sectorType"]).strip(),
    )


def build_water_input(form: Mapping[str, object]) -> WaterInput:
    return WaterInput(
        pH=float(form["pH"]),
        dissolved_oxygen=float(form["dissolvedOxygen"]),
        TDS=float(form["TDS"]),
        turbidity=float(form["turbidity"]),
        nitrate=float(form["nitrate"]),
        BOD=float(form["BOD"]),
        sector=str(form["sectorType"]).strip(),
    )


def build_landscape_input(form: Mapping[str, object]) -> LandscapeInput:
    years = _safe_float(form.get("maintenance_years"))
    return LandscapeInput(
        area_m2=float(form["area_m2"]),
        plant_type=str(form["plantType"]).strip(),
        water_source=str(form["waterSource"]).strip(),
        cost_per_m2=_safe_float(form.get("cost_per_m2")),
        maintenance_years=None if years is None else int(years),
        location=_optional(form.get("location")),
    )
