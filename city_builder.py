# city_builder.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import plotly.graph_objects as go
import streamlit as st

log = logging.getLogger(__name__)

INITIAL_BUDGET = 500_000
INITIAL_CO2 = 100.0
TARGET_CO2 = 50.0
INITIAL_TIME = 30
GRID_CELLS = 16
GRID_COLUMNS = 4


@dataclass(frozen=True)
class Solution:
    id: str
    name: str
    icon: str
    cost: int
    co2_reduction: float
    color: str


SOLUTIONS: Dict[str, Solution] = {
    "solar": Solution("solar", "Solar Panels", "☀️", 80_000, 15, "#dda853"),
    "water": Solution("water", "Water Recycling", "💧", 60_000, 10, "#84f4e6"),
    "green": Solution("green", "Green Spaces", "🌳", 40_000, 8, "#5c986a"),
}


@dataclass
class CityBuilderGame:
    """
    One round of the block-greening challenge.

    Pick a solution, drop it on a free cell, and bring the block's CO₂ down to
    the target before the clock or the budget runs out.
    """

    budget: int = INITIAL_BUDGET
    current_co2: float = INITIAL_CO2
    time_left: int = INITIAL_TIME
    is_playing: bool = False
    game_over: bool = False
    placed: Dict[int, str] = field(default_factory=dict)
    achievements: List[str] = field(default_factory=list)
    selected: Optional[str] = None

    @property
    def reduction_percentage(self) -> float:
        return ((INITIAL_CO2 - self.current_co2) / INITIAL_CO2) * 100

    @property
    def co2_progress(self) -> float:
        return (self.current_co2 / INITIAL_CO2) * 100

    def start(self) -> None:
        if not self.game_over:
            self.is_playing = True

    def pause(self) -> None:
        self.is_playing = False

    def select(self, solution_id: str) -> None:
        if solution_id not in SOLUTIONS:
            raise ValueError(f"Unknown solution: {solution_id}")
        self.selected = solution_id

    def place(self, position: int) -> bool:
        """Build the selected solution on a cell; False when the move is not allowed."""
        if not 0 <= position < GRID_CELLS:
            raise ValueError(f"Grid position out of range: {position}")
        if self.selected is None or not self.is_playing or position in self.placed:
            return False

        solution = SOLUTIONS[self.selected]
        if self.budget < solution.cost:
            return False

        self.placed[position] = solution.id
        self.budget -= solution.cost
        self.current_co2 = max(0.0, self.current_co2 - solution.co2_reduction)
        self.selected = None
        log.debug("Placed %s at %d, CO₂ now %.0f t", solution.id, position, self.current_co2)

        if self.current_co2 <= TARGET_CO2:
            self.end()
        return True

    def tick(self, seconds: int = 1) -> None:
        if not self.is_playing or self.game_over:
            return
        self.time_left = max(0, self.time_left - seconds)
        if self.time_left == 0 or self.current_co2 <= TARGET_CO2:
            self.end()

    def end(self) -> None:
        self.is_playing = False
        self.game_over = True
        self.achievements = self._achievements()

    def reset(self) -> None:
        fresh = CityBuilderGame()
        self.__dict__.update(fresh.__dict__)

    def _achievements(self) -> List[str]:
        earned: List[str] = []
        if self.current_co2 <= TARGET_CO2:
            earned.append("🎯 Mission Complete!")
        if self.reduction_percentage >= 60:
            earned.append("⭐ Carbon Crusher")
        if self.budget >= INITIAL_BUDGET * 0.5:
            earned.append("💰 Budget Master")
        if len(self.placed) >= 6:
            earned.append("🏗️ Master Builder")
        return earned


def format_time(seconds: int) -> str:
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}:{secs:02d}"


# ---------------- Page ----------------

def _game() -> CityBuilderGame:
    if "city_builder_game" not in st.session_state:
        st.session_state["city_builder_game"] = CityBuilderGame()
        st.session_state["city_builder_clock"] = time.monotonic()
    return st.session_state["city_builder_game"]


def _sync_clock(game: CityBuilderGame) -> None:
    now = time.monotonic()
    last = st.session_state.get("city_builder_clock", now)
    elapsed = int(now - last)
    if game.is_playing and elapsed > 0:
        game.tick(elapsed)
        st.session_state["city_builder_clock"] = last + elapsed
    elif not game.is_playing:
        st.session_state["city_builder_clock"] = now


def page_city_builder():
    st.header("🎮 City Builder Challenge")
    st.caption("Optimize your block and reduce carbon by 50%!")

    game = _game()
    _sync_clock(game)

    with st.expander("📖 How to play"):
        st.markdown(
            "- 🌞 **Shine with Solar!** Each panel slashes CO₂ fast.\n"
            "- 💧 **Save Every Drop!** Recycling water keeps your city clean.\n"
            "- 🌳 **Green is the New Gold!** Trees absorb CO₂ and refresh the air.\n"
            "- 💰 **Spend wisely!** Balance your budget with impact.\n"
            "- ⏳ **Time is ticking…** Every second counts!\n"
            "- 🏆 **Goal:** Reduce CO₂ by 50% to win."
        )

    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Mission", "Reduce 50%")
    with c2:
        st.metric("Time left", format_time(game.time_left))
        st.progress(game.time_left / INITIAL_TIME)
    with c3:
        st.metric("Budget", f"EGP {game.budget / 1000:.0f}K")
        st.progress(game.budget / INITIAL_BUDGET)

    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=game.current_co2,
            number={"suffix": " t"},
            title={"text": f"Carbon emissions (reduced by {game.reduction_percentage:.0f}%)"},
            gauge={
                "axis": {"range": [0, INITIAL_CO2]},
                "threshold": {"line": {"color": "#5c986a", "width": 4}, "value": TARGET_CO2},
                "steps": [
                    {"range": [0, TARGET_CO2], "color": "#c5d9a9"},
                    {"range": [TARGET_CO2, INITIAL_CO2], "color": "#ffb3b3"},
                ],
            },
        )
    )
    st.plotly_chart(fig, width="stretch")
    st.progress(
        min(game.co2_progress, 100.0) / 100,
        text=f"CO₂ left: {game.co2_progress:.0f}% of the starting level (goal {TARGET_CO2 / INITIAL_CO2:.0%})",
    )

    col_sol, col_grid = st.columns([1, 2])
    with col_sol:
        st.markdown("**Solutions**")
        for sol in SOLUTIONS.values():
            label = f"{sol.icon} {sol.name} · EGP {sol.cost // 1000}K · −{sol.co2_reduction:.0f} t"
            disabled = not game.is_playing or game.budget < sol.cost
            if st.button(label, key=f"city_builder_pick_{sol.id}", disabled=disabled, width="stretch"):
                game.select(sol.id)
        if game.selected:
            st.info(f"Selected: {SOLUTIONS[game.selected].name}. Click an empty plot.")

    with col_grid:
        st.markdown("**Your block**")
        for row_start in range(0, GRID_CELLS, GRID_COLUMNS):
            cols = st.columns(GRID_COLUMNS)
            for offset, col in enumerate(cols):
                pos = row_start + offset
                placed = game.placed.get(pos)
                label = SOLUTIONS[placed].icon if placed else "⬜"
                with col:
                    if st.button(label, key=f"city_builder_cell_{pos}", width="stretch"):
                        game.place(pos)
                        st.rerun()

    st.markdown("---")
    b1, b2 = st.columns(2)
    with b1:
        if game.is_playing:
            if st.button("⏸ Pause", key="city_builder_pause"):
                game.pause()
                st.rerun()
        elif not game.game_over:
            if st.button("▶️ Start", key="city_builder_start"):
                game.start()
                st.session_state["city_builder_clock"] = time.monotonic()
                st.rerun()
    with b2:
        if st.button("🔄 Reset game", key="city_builder_reset"):
            game.reset()
            st.rerun()

    if game.game_over:
        if game.current_co2 <= TARGET_CO2:
            st.success(f"🎉 Mission complete! CO₂ down to {game.current_co2:.0f} t.")
            st.balloons()
        else:
            st.warning(f"Time's up — CO₂ is still {game.current_co2:.0f} t (target {TARGET_CO2:.0f} t).")
        if game.achievements:
            st.markdown("**Achievements:** " + " · ".join(game.achievements))
    elif game.is_playing:
        # Keep the clock moving between clicks
        time.sleep(1)
        st.rerun()
