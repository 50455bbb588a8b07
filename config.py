# config.py
from __future__ import annotations

import logging
import os
from typing import Any, Optional

import streamlit as st

log = logging.getLogger(__name__)

DEFAULT_LOADING_DELAY_S = 1.2
DEFAULT_BASE_YEAR = 2025
DEFAULT_LOG_LEVEL = "INFO"


def get_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Look a setting up in Streamlit secrets, then the environment.

    Secrets are optional: with no secrets.toml Streamlit raises on access,
    which we treat the same as a missing key.
    """
    value: Any = None
    try:
        value = st.secrets.get(name, None)
    except Exception:
        value = None
    if value is None:
        value = os.getenv(name)
    if value is None or value == "":
        return default
    return str(value)


def loading_delay() -> float:
    raw = get_setting("URBANECO_LOADING_DELAY")
    if raw is None:
        return DEFAULT_LOADING_DELAY_S
    try:
        return max(0.0, float(raw))
    except ValueError:
        log.warning("Ignoring non-numeric URBANECO_LOADING_DELAY=%r", raw)
        return DEFAULT_LOADING_DELAY_S


def base_year() -> int:
    raw = get_setting("URBANECO_BASE_YEAR")
    if raw is None:
        return DEFAULT_BASE_YEAR
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring non-integer URBANECO_BASE_YEAR=%r", raw)
        return DEFAULT_BASE_YEAR


def log_level() -> str:
    level = (get_setting("URBANECO_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
        return DEFAULT_LOG_LEVEL
    return level
