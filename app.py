# Project: UrbanEco — Streamlit App (Solar, Water Quality & Green Landscaping for Egyptian cities)

# app.py
from __future__ import annotations

import logging
from functools import partial

import streamlit as st

from city_builder import page_city_builder
from config import log_level
from conversions import conversion_quicktips
from feature_analyze import page_analyze
from feature_forecast import page_forecast_simulator
from guides import about_points, analysis_paths, city_actions
from ui_components import feature_card

log = logging.getLogger(__name__)

# ---------------------------------
# App State / Navigation
# ---------------------------------

PAGES = {
    "Home": "home",
    "Analyze Your Site": "analyze",
    "Forecast Simulator": "forecast",
    "City Builder (Game)": "city_builder",
    "About": "about",
}


def _init_state():
    if "page" not in st.session_state:
        st.session_state.page = "home"
    if "nav_radio" not in st.session_state:
        st.session_state["nav_radio"] = next(k for k, v in PAGES.items() if v == st.session_state.page)
    if "analysis" not in st.session_state:
        st.session_state.analysis = None


# ---------------------------------
# Shared sidebar
# ---------------------------------

def sidebar_nav():
    with st.sidebar:
        st.markdown("###  Navigate")

        # Cards elsewhere move the radio through st.session_state["nav_radio"]
        selected_label = st.radio(
            "Go to",
            list(PAGES.keys()),
            label_visibility="collapsed",
            key="nav_radio",
        )
        st.session_state.page = PAGES[selected_label]

        st.markdown("---")
        st.markdown("**Quick conversions**")
        for tip in conversion_quicktips():
            st.caption(tip)


# ---------------------------------
# Pages
# ---------------------------------

def page_home():
    st.title("🌿 UrbanEco")
    st.write(
        "Explore what solar roofs, cleaner water and smarter green spaces could do for your "
        "neighbourhood. Pick a path, enter a few numbers, and get an instant dashboard."
    )

    cols = st.columns(3)
    for col, path in zip(cols, analysis_paths()):
        with col:
            feature_card(
                path["title"],
                path["summary"],
                on_click=partial(_open_analysis, path["key"]),
                key=f"home_open_{path['key']}",
            )

    st.markdown("### Ideas for greener Egyptian cities")
    for action in city_actions():
        st.markdown(f"- **{action['title']}** — {action['summary']}")

    c1, c2 = st.columns(2)
    with c1:
        feature_card("📈 Forecast Simulator", "See hourly, monthly and 25-year production for a panel array.",
                     on_click=lambda: _set_page("forecast"), key="home_forecast")
    with c2:
        feature_card("🎮 City Builder", "Cut your block's CO₂ in half before time and budget run out.",
                     on_click=lambda: _set_page("city_builder"), key="home_game")


def page_about():
    st.header("About UrbanEco")
    st.write(
        "UrbanEco is an educational simulator for urban sustainability in Egypt. Every result is "
        "computed in your session from fixed, published factors; nothing you enter is stored or sent anywhere."
    )
    for point in about_points():
        st.markdown(f"- **{point['name']}** — {point['why']}")
    with st.expander("Key factors"):
        st.markdown(
            "- Solar: 7 m² per kWp, 0.5 kg CO₂ avoided per kWh, 1 %/yr panel degradation, "
            "1 tree ≈ 22 kg CO₂/yr.\n"
            "- Water: WQI weights DO 30 %, pH 20 %, TDS 20 %, turbidity 15 %, nitrate 15 %.\n"
            "- Landscape: maintenance 15 % of planting cost per year; car 0.404 kg CO₂/km; "
            "a person breathes ~230,000 L O₂/yr."
        )


# ---------------------------------
# Helpers
# ---------------------------------

def _set_page(name: str):
    st.session_state.page = name
    # Keep the sidebar radio in step when a page is opened from a card
    labels = {v: k for k, v in PAGES.items()}
    if name in labels:
        st.session_state["nav_radio"] = labels[name]


def _open_analysis(objective: str):
    st.session_state.analysis = None
    st.session_state["analysis_objective"] = objective
    st.session_state.pop("an_objective", None)
    _set_page("analyze")


def _route():
    page = st.session_state.page
    log.debug("Routing to %s", page)
    if page == "home":
        page_home()
    elif page == "analyze":
        page_analyze()
    elif page == "forecast":
        page_forecast_simulator()
    elif page == "city_builder":
        page_city_builder()
    elif page == "about":
        page_about()


# ---------------------------------
# Entry
# ---------------------------------

def main():
    st.set_page_config(page_title="UrbanEco", layout="wide")
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _init_state()
    sidebar_nav()
    _route()


if __name__ == "__main__":
    main()
