# export.py
from __future__ import annotations

import io
from typing import Any, Iterable

import pandas as pd

CSV_COLUMNS = ["Year", "AnnualProduction(kWh)"]


def _year_and_production(row: Any) -> tuple:
    if isinstance(row, dict):
        return int(row["year"]), int(row["production"])
    return int(row.year), int(row.production)


def yearly_production_frame(rows: Iterable[Any]) -> pd.DataFrame:
    """Rows may be SolarYear records or {"year", "production"} dicts."""
    data = [_year_and_production(r) for r in rows]
    if not data:
        raise ValueError("No results to export yet.")
    return pd.DataFrame(data, columns=CSV_COLUMNS)


def yearly_production_csv(rows: Iterable[Any]) -> str:
    """Header line plus one line per projected year, no trailing newline."""
    df = yearly_production_frame(rows)
    return df.to_csv(index=False, lineterminator="\n").rstrip("\n")


def water_batch_excel(batch: dict) -> bytes:
    """Workbook with the per-point results and per-location statistics."""
    results = batch["results"].copy()
    results["recommendations"] = results["recommendations"].map(" | ".join)
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="xlsxwriter") as writer:
        results.to_excel(writer, sheet_name="Monitoring points", index=False)
        batch["location_stats"].to_excel(writer, sheet_name="By location")
        pd.DataFrame([batch["summary"]]).to_excel(writer, sheet_name="Summary", index=False)
    return buf.getvalue()
