# guides.py
from __future__ import annotations

from typing import Dict, List

# Short blurbs for the Home & About pages


def analysis_paths() -> List[Dict[str, str]]:
    return [
        {
            "key": "solar",
            "title": "☀️ Solara – Solar Energy",
            "summary": "Size a rooftop system from your monthly bill, see payback, ROI and 25 years of savings.",
        },
        {
            "key": "water",
            "title": "💧 Aqualis – Water Quality",
            "summary": "Turn six lab readings into a Water Quality Index with treatment advice.",
        },
        {
            "key": "landscape",
            "title": "🌳 Terra – Green Landscaping",
            "summary": "Estimate CO₂ uptake, oxygen, water use and cost for a planted area.",
        },
    ]


def city_actions() -> List[Dict[str, str]]:
    return [
        {"title": "Rooftop solar on public buildings", "summary": "Egypt gets 1,800–2,250 kWh per kWp a year; schools and clinics pay back fast."},
        {"title": "Treated water for irrigation", "summary": "Cuts drinking-water use for green spaces by ~20%."},
        {"title": "Rainwater harvesting", "summary": "Where rain allows, saves ~40% versus mains irrigation."},
        {"title": "Native desert planting", "summary": "Xerophytes need a fraction of turf's water and thrive in local heat."},
        {"title": "Shade trees on streets", "summary": "Cool pavements and sequester ~1 kg CO₂ per m² each year."},
    ]


def about_points() -> List[Dict[str, str]]:
    return [
        {"name": "Transparent formulas", "why": "Every number on a dashboard comes from a fixed, documented factor."},
        {"name": "Local tariffs", "why": "Residential and commercial bills follow the progressive band schedule."},
        {"name": "Educational, not engineering", "why": "Use the results to compare options, then get a site survey."},
    ]
