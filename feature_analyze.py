# feature_analyze.py
from __future__ import annotations

import logging
import time

import streamlit as st

from config import base_year, loading_delay
from dashboards import (
    render_landscape_dashboard,
    render_solar_dashboard,
    render_water_batch,
    render_water_dashboard,
)
from landscape import calculate_landscape
from models import Location, PlantType, Sector, WaterSector, WaterSource
from solar import calculate_solar
from ui_components import field_error
from validation import (
    build_landscape_input,
    build_solar_input,
    build_water_input,
    form_notice,
    validate_form,
)
from water_quality import calculate_wqi, load_water_readings, process_water_quality_data

log = logging.getLogger(__name__)

OBJECTIVE_LABELS = {
    "": "Select a path",
    "solar": "☀️ Solar energy",
    "water": "💧 Water quality",
    "landscape": "🌳 Green landscaping",
    "waste": "♻️ Waste (coming soon)",
}

PLANT_LABELS = {
    PlantType.SHADE_TREE.value: "Shade Tree",
    PlantType.GRASS_TURF.value: "Grass Turf",
    PlantType.DECORATIVE_PLANTS.value: "Decorative Plants",
    PlantType.DESERT_PLANTS.value: "Desert Plants",
}
SOURCE_LABELS = {
    WaterSource.DRINKING_WATER.value: "Drinking Water",
    WaterSource.TREATED_WATER.value: "Treated Water",
    WaterSource.RAINWATER.value: "Rainwater",
}


def _select(label: str, options: list, key: str, fmt=None) -> str:
    return st.selectbox(label, [""] + options, key=key,
                        format_func=lambda v: "Select…" if v == "" else (fmt(v) if fmt else v))


def _solar_fields(errors: dict) -> dict:
    c1, c2 = st.columns(2)
    with c1:
        consumption = st.text_input("Monthly consumption (kWh)", key="an_consumption")
        field_error(errors, "consumption")
        location = _select("Location", [loc.value for loc in Location], "an_solar_location")
        field_error(errors, "location")
    with c2:
        sector = _select("Sector", [s.value for s in Sector], "an_solar_sector", str.capitalize)
        field_error(errors, "sectorType")
        space = st.text_input("Available roof area (m²)", key="an_space")
        field_error(errors, "space")
    coverage = st.slider("Solar coverage (%)", 0, 100, 60, key="an_coverage")
    return {"consumption": consumption, "location": location, "sectorType": sector,
            "space": space, "coverage": coverage}


def _water_fields(errors: dict) -> dict:
    c1, c2 = st.columns(2)
    with c1:
        location = st.text_input("Sampling location", key="an_water_location")
        field_error(errors, "location")
    with c2:
        sector = _select("Sector", [s.value for s in WaterSector], "an_water_sector", str.capitalize)
        field_error(errors, "sectorType")

    form = {"location": location, "sectorType": sector}
    labels = [
        ("pH", "pH"),
        ("dissolvedOxygen", "Dissolved oxygen (mg/L)"),
        ("TDS", "Total dissolved solids (mg/L)"),
        ("turbidity", "Turbidity (NTU)"),
        ("nitrate", "Nitrate (mg/L)"),
        ("BOD", "BOD (mg/L)"),
    ]
    cols = st.columns(3)
    for i, (key, label) in enumerate(labels):
        with cols[i % 3]:
            form[key] = st.text_input(label, key=f"an_{key}")
            field_error(errors, key)
    return form


def _landscape_fields(errors: dict) -> dict:
    c1, c2 = st.columns(2)
    with c1:
        location = st.text_input("Location", key="an_land_location")
        field_error(errors, "location")
        area = st.text_input("Area (m²)", key="an_area")
        field_error(errors, "area_m2")
        cost = st.text_input("Cost per m² (optional, USD)", key="an_cost")
    with c2:
        plant = _select("Plant type", list(PLANT_LABELS), "an_plant", PLANT_LABELS.get)
        field_error(errors, "plantType")
        source = _select("Water source", list(SOURCE_LABELS), "an_source", SOURCE_LABELS.get)
        field_error(errors, "waterSource")
        years = st.number_input("Maintenance years", min_value=1, max_value=50, value=10, key="an_years")
    return {"location": location, "area_m2": area, "plantType": plant, "waterSource": source,
            "cost_per_m2": cost, "maintenance_years": years}


def _simulate_loading():
    delay = loading_delay()
    if delay:
        with st.spinner("Crunching the numbers..."):
            time.sleep(delay)


def _analyze(objective: str, form: dict):
    """Run the engine for a validated form; returns the stored result record."""
    if objective == "solar":
        inp = build_solar_input(form)
        return {"objective": "solar", "result": calculate_solar(inp),
                "location": form["location"], "sector": form["sectorType"]}
    if objective == "water":
        inp = build_water_input(form)
        return {"objective": "water", "result": calculate_wqi(inp),
                "location": form["location"], "sector": form["sectorType"]}
    inp = build_landscape_input(form)
    return {"objective": "landscape", "result": calculate_landscape(inp), "location": form["location"]}


def _render(stored: dict):
    objective = stored["objective"]
    if objective == "solar":
        render_solar_dashboard(stored["result"], stored["location"], stored["sector"], base_year())
    elif objective == "water":
        render_water_dashboard(stored["result"], stored["location"], stored["sector"])
    else:
        render_landscape_dashboard(stored["result"], stored.get("location"))


def _water_upload():
    with st.expander("Upload CSV/Excel with several monitoring points (optional)"):
        st.caption(
            "Columns: location, pH, dissolvedOxygen, TDS, turbidity, nitrate, BOD, sectorType, "
            "and optionally date."
        )
        uploaded = st.file_uploader("Upload .csv/.xlsx", type=["csv", "xlsx", "xls"], key="an_water_upload")
        if uploaded is None:
            return
        try:
            readings = load_water_readings(uploaded, uploaded.name)
            batch = process_water_quality_data(readings)
        except ValueError as e:
            st.error(f"Could not read monitoring file: {e}")
            return
        render_water_batch(batch)


def page_analyze():
    st.header("Analyze Your Site")

    stored = st.session_state.get("analysis")
    if stored is not None:
        _render(stored)
        st.markdown("---")
        if st.button("🔁 Analyze Again", key="an_again"):
            st.session_state["analysis"] = None
            st.session_state["analysis_errors"] = {}
            st.rerun()
        return

    errors = st.session_state.get("analysis_errors", {})
    notice = st.session_state.get("analysis_notice")
    if notice:
        st.warning(notice)

    objective = st.selectbox(
        "What would you like to explore?",
        list(OBJECTIVE_LABELS),
        format_func=OBJECTIVE_LABELS.get,
        index=list(OBJECTIVE_LABELS).index(st.session_state.get("analysis_objective", "")),
        key="an_objective",
    )
    field_error(errors, "objective")

    if objective == "solar":
        form = _solar_fields(errors)
    elif objective == "water":
        form = _water_fields(errors)
    elif objective == "landscape":
        form = _landscape_fields(errors)
    else:
        form = {}

    if st.button("Analyze", type="primary", key="an_submit"):
        errors = validate_form(objective, form)
        if errors:
            st.session_state["analysis_errors"] = errors
            st.session_state["analysis_notice"] = form_notice(objective, form)
            st.rerun()

        try:
            stored = _analyze(objective, form)
        except ValueError as e:
            log.error("Analysis failed for %s: %s", objective, e)
            st.error(str(e))
            return

        _simulate_loading()
        st.session_state["analysis"] = stored
        st.session_state["analysis_errors"] = {}
        st.session_state["analysis_notice"] = None
        st.rerun()

    if objective == "water":
        _water_upload()
