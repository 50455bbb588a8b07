# ui_components.py
from __future__ import annotations

import streamlit as st
from typing import Callable, Iterable, Optional, Tuple


def feature_card(title: str, body: str, on_click: Callable | None = None, key: str | None = None):
    """Reusable card with a unique button key to avoid duplicate element IDs."""
    with st.container(border=True):
        st.subheader(title)
        st.write(body)
        if on_click:
            btn_key = key or f"btn_open_{abs(hash(title))}"
            st.button("Open", on_click=on_click, key=btn_key, width="stretch")


def kpi_row(items: Iterable[Tuple[str, str, Optional[str]]]):
    """One st.metric per (label, value, help) tuple, laid out in a single row."""
    items = list(items)
    cols = st.columns(len(items))
    for col, (label, value, help_text) in zip(cols, items):
        with col:
            st.metric(label, value, help=help_text)


def recommendation_list(title: str, recs: Iterable[str]):
    with st.container(border=True):
        st.markdown(f"**{title}**")
        for rec in recs:
            st.markdown(f"- {rec}")


def field_error(errors: dict, key: str):
    msg = errors.get(key)
    if msg:
        st.caption(f":red[{msg}]")


def status_badge(status: str, color: str, description: str):
    st.markdown(
        f"<div style='padding:0.75rem 1rem;border-radius:0.75rem;background:{color}22;"
        f"border-left:6px solid {color}'><b style='color:{color}'>{status}</b> — {description}</div>",
        unsafe_allow_html=True,
    )
