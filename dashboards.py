# dashboards.py
from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from export import water_batch_excel, yearly_production_csv
from landscape import SCORE_CATEGORIES
from models import LandscapeResult, SolarResult, WaterResult
from solar import monthly_production_split, yearly_frame
from ui_components import kpi_row, recommendation_list, status_badge
from water_quality import WQI_CLASSIFICATION

GREEN = "#5c986a"
TEAL = "#1a5059"
GOLD = "#dda853"


# ---------------- Solar ----------------

def render_solar_dashboard(result: SolarResult, location: str, sector: str, base_year: int | None = None):
    st.subheader("☀️ Solar Energy Dashboard")
    st.caption(f"{location} • {sector.capitalize()}")

    if result.area_warning:
        st.warning(
            f"Insufficient space — required area: {result.required_area} m² | "
            f"available: {result.available_area:g} m²"
        )

    kpi_row([
        ("System size", f"{result.system_size_kwp} kWp", f"Production factor {result.production_factor:g} kWh/kWp/yr"),
        ("Installation cost", f"EGP {result.installation_cost:,}", None),
        ("Payback", "—" if result.payback_years is None else f"{result.payback_years} years", None),
        ("25-year ROI", f"{result.roi}%", None),
    ])
    kpi_row([
        ("Current bill", f"EGP {result.current_bill:,}/yr", f"Blended tariff {result.weighted_tariff} EGP/kWh"),
        ("New bill", f"EGP {result.new_bill:,}/yr", None),
        ("Net savings", f"EGP {result.net_savings:,}/yr", f"Maintenance EGP {result.annual_maintenance_cost:,}/yr"),
        ("CO₂ avoided", f"{result.co2_saving_tons} t/yr", f"≈ {result.trees_equivalent:,} trees"),
    ])

    df = yearly_frame(result, base_year)

    tab_fin, tab_prod, tab_month = st.tabs(["Financial projection", "Production & CO₂", "Monthly profile"])
    with tab_fin:
        fig = go.Figure()
        fig.add_bar(x=df["year"], y=df["savings"], name="Annual savings", marker_color=GREEN)
        fig.add_scatter(x=df["year"], y=df["cumulative_savings"], name="Cumulative savings", line={"color": TEAL})
        fig.add_hline(y=result.installation_cost, line_dash="dot", line_color=GOLD,
                      annotation_text="Installation cost")
        fig.update_layout(xaxis_title="Year", yaxis_title="EGP")
        st.plotly_chart(fig, width="stretch")
    with tab_prod:
        fig = px.area(df, x="year", y="production", labels={"production": "kWh", "year": "Year"},
                      title="Production with 1%/yr panel degradation")
        st.plotly_chart(fig, width="stretch")
        fig_co2 = px.line(df, x="year", y="co2_saved", labels={"co2_saved": "t CO₂", "year": "Year"})
        st.plotly_chart(fig_co2, width="stretch")
    with tab_month:
        fig = px.bar(monthly_production_split(result.annual_production), x="month", y="production",
                     labels={"production": "kWh"}, color_discrete_sequence=[GREEN])
        st.plotly_chart(fig, width="stretch")

    rows = df[["year", "production"]].to_dict(orient="records")
    st.download_button(
        "Download yearly production (CSV)",
        data=yearly_production_csv(rows).encode("utf-8"),
        file_name="solar_yearly_production.csv",
        mime="text/csv",
        key="solar_csv",
    )


# ---------------- Water ----------------

def render_water_dashboard(result: WaterResult, location: str, sector: str):
    st.subheader("💧 Water Quality Dashboard")
    st.caption(f"{location} • {sector.capitalize()}")

    top = max(125.0, result.wqi)
    steps, lo = [], 0.0
    for hi, _, color, _ in WQI_CLASSIFICATION:
        steps.append({"range": [lo, min(hi, top)], "color": f"{color}33"})
        if hi >= top:
            break
        lo = hi

    c1, c2 = st.columns([1, 2])
    with c1:
        fig = go.Figure(
            go.Indicator(
                mode="gauge+number",
                value=result.wqi,
                title={"text": "Water Quality Index"},
                gauge={
                    "axis": {"range": [0, top]},
                    "bar": {"color": result.color, "thickness": 0.3},
                    "steps": steps,
                },
            )
        )
        st.plotly_chart(fig, width="stretch")
    with c2:
        status_badge(result.status, result.color, result.description)
        st.caption("Lower is better: 0–25 Excellent · 26–50 Good · 51–75 Poor · 76–100 Very Poor · >100 Unsuitable")

    params = pd.DataFrame([
        {"parameter": name, "value": p.value, "index": p.index, "standard": p.standard}
        for name, p in result.parameters.items()
    ])
    indexed = params.dropna(subset=["index"])
    fig = px.bar(indexed, x="parameter", y="index", text="index",
                 labels={"index": "Sub-index (% of standard)"}, color_discrete_sequence=[TEAL])
    fig.add_hline(y=100, line_dash="dot", line_color="#ef4444", annotation_text="Standard")
    st.plotly_chart(fig, width="stretch")

    radar = go.Figure(go.Scatterpolar(r=indexed["index"], theta=indexed["parameter"], fill="toself",
                                      line={"color": GREEN}))
    radar.update_layout(polar={"radialaxis": {"visible": True}}, showlegend=False)
    st.plotly_chart(radar, width="stretch")

    st.dataframe(params, width="stretch", hide_index=True)
    recommendation_list("Treatment recommendations", result.recommendations)


def render_water_batch(batch: dict):
    summary = batch["summary"]
    kpi_row([
        ("Monitoring points", str(summary["total_points"]), None),
        ("Average WQI", f"{summary['average_wqi']}", None),
        ("Excellent / Good", f"{summary['excellent_count']} / {summary['good_count']}", None),
        ("Poor or worse", str(summary["poor_count"] + summary["very_poor_count"] + summary["unsuitable_count"]), None),
    ])
    stats = batch["location_stats"].reset_index()
    fig = px.bar(stats, x="location", y="average", error_y=stats["max"] - stats["average"],
                 error_y_minus=stats["average"] - stats["min"], labels={"average": "Average WQI"},
                 color_discrete_sequence=[TEAL])
    st.plotly_chart(fig, width="stretch")
    st.dataframe(batch["results"].drop(columns=["recommendations", "color"]), width="stretch", hide_index=True)
    st.download_button(
        "Download monitoring report (Excel)",
        data=water_batch_excel(batch),
        file_name="water_quality_report.xlsx",
        key="water_batch_xlsx",
    )


# ---------------- Landscape ----------------

def render_landscape_dashboard(result: LandscapeResult, location: str | None = None):
    st.subheader("🌳 Landscape Impact Dashboard")
    st.caption(f"{location or ''} • {result.plant_description}")

    c1, c2 = st.columns([1, 2])
    with c1:
        fig = go.Figure(
            go.Indicator(
                mode="gauge+number",
                value=result.env_score,
                title={"text": f"Environmental score: {result.score_category}"},
                gauge={
                    "axis": {"range": [0, 100]},
                    "bar": {"color": result.score_color, "thickness": 0.3},
                    "steps": [
                        {"range": [0, 40], "color": "#ffb3b3"},
                        {"range": [40, 60], "color": "#ffe9b3"},
                        {"range": [60, 75], "color": "#b3d9ff"},
                        {"range": [75, 100], "color": "#b3ffd6"},
                    ],
                },
            )
        )
        st.plotly_chart(fig, width="stretch")
        st.caption(" · ".join(f"≥{m:g} {c}" for m, c, _ in SCORE_CATEGORIES[:-1]) + " · else Poor")
    with c2:
        kpi_row([
            ("CO₂ reduction", f"{result.co2_reduction_tons_per_year} t/yr", None),
            ("O₂ production", f"{result.o2_production_m3_per_year:,} m³/yr", None),
            ("Water use", f"{result.water_consumption_m3_per_year:,} m³/yr", result.water_source),
        ])
        kpi_row([
            ("Planting cost", f"${result.planting_cost:,}", None),
            ("Maintenance", f"${result.annual_maintenance_cost:,}/yr", None),
            (f"Total ({result.maintenance_years} yr)", f"${result.total_cost:,}", None),
        ])

    eq = result.equivalencies
    kpi_row([
        ("Car-km offset", f"{eq.car_km_equivalent:,} km", None),
        ("Trees equivalent", f"{eq.trees_equivalent:,}", None),
        ("People's O₂", f"{eq.people_o2_equivalent:,} people", None),
    ])

    df = pd.DataFrame([vars(y) for y in result.yearly_data])
    fig = go.Figure()
    fig.add_bar(x=df["year"], y=df["co2_reduction"], name="Annual CO₂ (kg)", marker_color=GREEN)
    fig.add_scatter(x=df["year"], y=df["cumulative_co2"], name="Cumulative CO₂ (kg)", yaxis="y2",
                    line={"color": TEAL})
    fig.update_layout(
        title="25-year CO₂ projection",
        xaxis_title="Year",
        yaxis={"title": "kg / year"},
        yaxis2={"title": "kg cumulative", "overlaying": "y", "side": "right"},
    )
    st.plotly_chart(fig, width="stretch")

    recommendation_list("Recommendations", result.recommendations)
