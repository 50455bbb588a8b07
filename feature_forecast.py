# feature_forecast.py
from __future__ import annotations

import logging
import time

import plotly.express as px
import streamlit as st

from config import base_year, loading_delay
from export import yearly_production_csv
from forecast import ForecastParameters, simulate_forecast, yearly_rows

log = logging.getLogger(__name__)

PROGRESS_STEP = 5


def _progress_label(pct: int) -> str:
    if pct < 30:
        return "Analyzing location data..."
    if pct < 60:
        return "Calculating solar production..."
    if pct < 90:
        return "Generating financial projections..."
    return "Finalizing results..."


def _run_with_progress(params: ForecastParameters):
    """Advance a capped progress bar over the configured delay, then compute."""
    delay = loading_delay()
    bar = st.progress(0, text=_progress_label(0))
    steps = 100 // PROGRESS_STEP
    for i in range(1, steps + 1):
        pct = min(i * PROGRESS_STEP, 100)
        if delay:
            time.sleep(delay / steps)
        bar.progress(pct, text=_progress_label(pct))
    result = simulate_forecast(params)
    bar.empty()
    return result


def page_forecast_simulator():
    st.header("Forecast Simulator")
    st.caption(
        "Play with panel size, count and type to see a rough daily, monthly and 25-year "
        "production forecast. Simplified model — good for comparing options, not for design."
    )

    with st.form("forecast_form"):
        location = st.text_input("Location", value="Cairo, Egypt", key="fc_location")
        c1, c2, c3 = st.columns(3)
        with c1:
            panel_size = st.number_input("Panel size (W)", min_value=50, max_value=1000, value=330, step=10)
            panel_count = st.number_input("Panel count", min_value=1, max_value=100_000, value=100, step=1)
        with c2:
            panel_type = st.selectbox("Panel type", ["monocrystalline", "polycrystalline", "bifacial"])
            installation = st.selectbox("Installation", ["rooftop", "ground-mounted"])
        with c3:
            grid = st.selectbox("Grid connection", ["grid", "off-grid"])
            investment = st.number_input("Investment (EGP)", min_value=0, value=500_000, step=10_000)
        submitted = st.form_submit_button("Run simulation")

    if submitted:
        params = ForecastParameters(
            location=location,
            panel_size_w=float(panel_size),
            panel_count=int(panel_count),
            investment=float(investment),
            panel_type=panel_type,
            installation_type=installation,
            grid_connection=grid,
            base_year=base_year(),
        )
        st.session_state["forecast_result"] = _run_with_progress(params)

    result = st.session_state.get("forecast_result")
    if result is None:
        st.info("Set your parameters and run the simulation.")
        return

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Annual production", f"{result.total_production:,} kWh")
    c2.metric("Avg daily", f"{result.average_daily_production:,} kWh")
    c3.metric("CO₂ avoided", f"{result.co2_reduction:,} kg/yr")
    c4.metric("Payback", "—" if result.payback_years is None else f"{result.payback_years} yrs")

    tabs = st.tabs(["Daily curve", "Monthly", "25 years", "Tariff trend", "Panel efficiency"])
    with tabs[0]:
        st.plotly_chart(px.line(result.hourly, x="hour", y="production", labels={"production": "kWh"}),
                        width="stretch")
    with tabs[1]:
        st.plotly_chart(px.bar(result.monthly, x="month", y="production", labels={"production": "kWh"}),
                        width="stretch")
    with tabs[2]:
        st.plotly_chart(px.line(result.yearly, x="year", y="production", labels={"production": "kWh"}),
                        width="stretch")
    with tabs[3]:
        st.plotly_chart(px.line(result.cost_trends, x="year", y="cost", labels={"cost": "EGP/kWh"}),
                        width="stretch")
    with tabs[4]:
        st.plotly_chart(px.line(result.degradation, x="year", y="efficiency", labels={"efficiency": "%"}),
                        width="stretch")

    st.download_button(
        "Export report (CSV)",
        data=yearly_production_csv(yearly_rows(result)).encode("utf-8"),
        file_name="solar_yearly_production.csv",
        mime="text/csv",
        key="forecast_csv",
    )
