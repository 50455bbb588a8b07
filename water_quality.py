# water_quality.py
from __future__ import annotations

import datetime as dt
import logging
from typing import IO, Any, Dict, Iterable, List, Union

import pandas as pd

from conversions import round_half_up
from models import ParameterIndex, WaterInput, WaterReading, WaterResult, WaterSector, enum_value

log = logging.getLogger(__name__)

# ---------------- Standards (WHO/EPA) ----------------

PH_MIN = 6.5
PH_MAX = 8.5
DO_MIN = 5.0
TURBIDITY_MAX = 5.0
NITRATE_MAX = 50.0
BOD_MAX = 3.0

TDS_STANDARDS: Dict[str, float] = {
    WaterSector.DOMESTIC.value: 500,
    WaterSector.AGRICULTURE.value: 2000,
    WaterSector.INDUSTRIAL.value: 2000,
}
DEFAULT_TDS_STANDARD = 2000.0

PARAMETER_WEIGHTS: Dict[str, float] = {
    "dissolvedOxygen": 0.3,
    "pH": 0.2,
    "TDS": 0.2,
    "turbidity": 0.15,
    "nitrate": 0.15,
}

# (upper bound inclusive, status, color, description); first match wins
WQI_CLASSIFICATION = [
    (25.0, "Excellent", "#10b981", "Water is of excellent quality"),
    (50.0, "Good", "#3b82f6", "Water is generally safe for use"),
    (75.0, "Poor", "#f59e0b", "Water requires treatment"),
    (100.0, "Very Poor", "#ef4444", "Water is highly polluted"),
    (float("inf"), "Unsuitable", "#991b1b", "Water is unsuitable for use"),
]
STATUSES = [status for _, status, _, _ in WQI_CLASSIFICATION]

REQUIRED_COLUMNS = ["location", "pH", "dissolvedOxygen", "TDS", "turbidity", "nitrate", "BOD", "sectorType"]


def tds_standard(sector: WaterSector | str) -> float:
    return TDS_STANDARDS.get(enum_value(sector), DEFAULT_TDS_STANDARD)


def classify_wqi(wqi: float) -> Dict[str, str]:
    for upper, status, color, description in WQI_CLASSIFICATION:
        if wqi <= upper:
            return {"status": status, "color": color, "description": description}
    # NaN compares false against every bound
    _, status, color, description = WQI_CLASSIFICATION[-1]
    return {"status": status, "color": color, "description": description}


def _recommendations(inp: WaterInput, tds_limit: float) -> List[str]:
    recs: List[str] = []

    if inp.pH < PH_MIN:
        recs.append("pH is too low (acidic). Consider adding alkaline treatment or lime.")
    elif inp.pH > PH_MAX:
        recs.append("pH is too high (alkaline). Consider acidification treatment.")

    if inp.dissolved_oxygen < DO_MIN:
        recs.append("Dissolved oxygen is below required level. Aeration or oxygenation is needed.")

    if inp.TDS > tds_limit:
        recs.append(
            f"Total dissolved solids exceed {enum_value(inp.sector)} standards. "
            "Reverse osmosis or distillation recommended."
        )

    if inp.turbidity > TURBIDITY_MAX:
        recs.append("Turbidity is high. Filtration and sedimentation treatment required.")

    if inp.nitrate > NITRATE_MAX:
        recs.append("Nitrate levels are high. Ion exchange or biological treatment needed.")

    if inp.BOD > BOD_MAX:
        recs.append("Biological oxygen demand is high. Biological treatment or disinfection required.")

    if not recs:
        recs.append("Water quality is within acceptable standards. Regular monitoring recommended.")
    return recs


def _fmt(x: float) -> str:
    return f"{x:g}"


def calculate_wqi(inp: WaterInput) -> WaterResult:
    """
    Weighted Water Quality Index (lower is better).

    Each sub-index is the reading as a percentage of its standard. Dissolved
    oxygen is inverted because more oxygen is better. Sub-indices are not
    clamped, so very polluted samples can push the WQI past 100.
    """
    tds_limit = tds_standard(inp.sector)

    q_ph = (inp.pH / PH_MAX) * 100
    q_do = (DO_MIN / inp.dissolved_oxygen) * 100
    q_tds = (inp.TDS / tds_limit) * 100
    q_turbidity = (inp.turbidity / TURBIDITY_MAX) * 100
    q_nitrate = (inp.nitrate / NITRATE_MAX) * 100

    w = PARAMETER_WEIGHTS
    total_weight = sum(w.values())
    wqi = (
        q_do * w["dissolvedOxygen"]
        + q_ph * w["pH"]
        + q_tds * w["TDS"]
        + q_turbidity * w["turbidity"]
        + q_nitrate * w["nitrate"]
    ) / total_weight

    classification = classify_wqi(wqi)
    log.debug("WQI %.2f -> %s", wqi, classification["status"])

    parameters = {
        "pH": ParameterIndex(inp.pH, f"{_fmt(PH_MIN)}-{_fmt(PH_MAX)}", round_half_up(q_ph, 1)),
        "dissolvedOxygen": ParameterIndex(
            inp.dissolved_oxygen, f"≥{_fmt(DO_MIN)} mg/L", round_half_up(q_do, 1)
        ),
        "TDS": ParameterIndex(inp.TDS, f"≤{_fmt(tds_limit)} mg/L", round_half_up(q_tds, 1)),
        "turbidity": ParameterIndex(
            inp.turbidity, f"≤{_fmt(TURBIDITY_MAX)} NTU", round_half_up(q_turbidity, 1)
        ),
        "nitrate": ParameterIndex(inp.nitrate, f"≤{_fmt(NITRATE_MAX)} mg/L", round_half_up(q_nitrate, 1)),
        "BOD": ParameterIndex(inp.BOD, f"≤{_fmt(BOD_MAX)} mg/L"),
    }

    return WaterResult(
        wqi=round_half_up(wqi, 1),
        status=classification["status"],
        color=classification["color"],
        description=classification["description"],
        recommendations=_recommendations(inp, tds_limit),
        parameters=parameters,
    )


# ---------------- Batch monitoring ----------------

def process_water_quality_data(readings: Iterable[WaterReading]) -> Dict[str, Any]:
    """
    Score every monitoring point and aggregate per location.

    Returns {"results": DataFrame, "location_stats": DataFrame, "summary": dict}.
    """
    rows = []
    for r in readings:
        res = calculate_wqi(r)
        rows.append({
            "location": r.location,
            "date": r.date or dt.date.today().isoformat(),
            "wqi": res.wqi,
            "status": res.status,
            "color": res.color,
            "description": res.description,
            "recommendations": res.recommendations,
        })

    if not rows:
        raise ValueError("No monitoring points to analyse.")

    results = pd.DataFrame(rows)

    stats = results.groupby("location", sort=False)["wqi"].agg(["mean", "min", "max", "count"])
    stats = stats.rename(columns={"mean": "average"})
    for col in ("average", "min", "max"):
        stats[col] = stats[col].map(lambda v: round_half_up(float(v), 1))

    counts = results["status"].value_counts()
    summary = {
        "total_points": int(len(results)),
        "average_wqi": round_half_up(float(results["wqi"].mean()), 1),
    }
    for status in STATUSES:
        summary[f"{status.lower().replace(' ', '_')}_count"] = int(counts.get(status, 0))

    return {"results": results, "location_stats": stats, "summary": summary}


def load_water_readings(source: Union[str, IO[Any]], filename: str | None = None) -> List[WaterReading]:
    """
    Parse a monitoring sheet (path or uploaded file) into readings.

    Excel workbooks are read from their first sheet; anything else is
    treated as CSV.
    """
    name = (filename or (source if isinstance(source, str) else getattr(source, "name", ""))).lower()
    if name.endswith((".xlsx", ".xls")):
        df = pd.read_excel(source)
    else:
        df = pd.read_csv(source)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {', '.join(missing)}")

    numeric = ["pH", "dissolvedOxygen", "TDS", "turbidity", "nitrate", "BOD"]
    df[numeric] = df[numeric].apply(pd.to_numeric, errors="coerce")
    bad = df[df[numeric].isna().any(axis=1)]
    if not bad.empty:
        raise ValueError(f"Non-numeric readings in rows: {', '.join(str(i + 2) for i in bad.index)}")

    # The DO sub-index divides by the reading
    no_oxygen = df[df["dissolvedOxygen"] <= 0]
    if not no_oxygen.empty:
        raise ValueError(
            f"Dissolved oxygen must be above zero in rows: {', '.join(str(i + 2) for i in no_oxygen.index)}"
        )

    has_date = "date" in df.columns
    readings: List[WaterReading] = []
    for rec in df.to_dict(orient="records"):
        date = rec.get("date") if has_date else None
        readings.append(WaterReading(
            pH=float(rec["pH"]),
            dissolved_oxygen=float(rec["dissolvedOxygen"]),
            TDS=float(rec["TDS"]),
            turbidity=float(rec["turbidity"]),
            nitrate=float(rec["nitrate"]),
            BOD=float(rec["BOD"]),
            sector=str(rec["sectorType"]).strip(),
            location=str(rec["location"]).strip(),
            date=None if date is None or pd.isna(date) else str(date),
        ))
    log.info("Loaded %d water readings", len(readings))
    return readings
