"""Streamlit dashboard for the hotel room reservation API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd
import requests
import streamlit as st

# ==========================================
# Configuration & Constants
# ==========================================
# Point this to your local FastAPI server
API_BASE_URL = "http://127.0.0.1:8000"

st.set_page_config(
    page_title="Hotel Room Reservation",
    page_icon="🏨",
    layout="wide",
)

# ==========================================
# API Helper Functions
# ==========================================
def _error_detail(response: requests.Response) -> str:
    try:
        return str(response.json().get("detail", response.text))
    except ValueError:
        return response.text


def book_rooms(count: int) -> Optional[Dict[str, Any]]:
    """Calls the booking optimizer; shows the API error message on rejection."""
    try:
        response = requests.post(
            f"{API_BASE_URL}/book",
            json={"count": count},
            timeout=10,
        )
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return None
    if response.status_code != 200:
        st.warning(_error_detail(response))
        return None
    return response.json()


def post_action(path: str, payload: Optional[Dict[str, Any]] = None) -> bool:
    try:
        response = requests.post(f"{API_BASE_URL}{path}", json=payload, timeout=5)
        response.raise_for_status()
        return True
    except requests.exceptions.RequestException as e:
        st.error(f"Request to {path} failed: {e}")
        return False


def fetch_floor_plan() -> Optional[Dict[str, Any]]:
    try:
        response = requests.get(f"{API_BASE_URL}/floors", timeout=5)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Could not load building view: {e}")
        return None


# ==========================================
# Rendering
# ==========================================
def _cell(room: Dict[str, Any]) -> str:
    if room["selected"]:
        return f"★ {room['number']}"
    if room["occupied"]:
        return f"✖ {room['number']}"
    return f"{room['number']}"


def _highlight(value: str) -> str:
    if value.startswith("★"):
        return "background-color: #fbbf24; color: #0f172a; font-weight: bold"
    if value.startswith("✖"):
        return "background-color: #f43f5e; color: white"
    if value:
        return "background-color: #16a34a; color: white"
    return ""


def building_frame(floors: List[Dict[str, Any]]) -> pd.DataFrame:
    """One row per floor (top floor first), one column per position from the stairs."""
    width = max((len(floor["rooms"]) for floor in floors), default=0)
    rows: Dict[str, List[str]] = {}
    for floor in floors:
        cells = [_cell(room) for room in floor["rooms"]]
        rows[f"Floor {floor['floor']}"] = cells + [""] * (width - len(cells))
    return pd.DataFrame.from_dict(
        rows,
        orient="index",
        columns=[f"Pos {position}" for position in range(1, width + 1)],
    )


def render_booking_panel() -> None:
    st.subheader("Book Rooms")
    st.markdown("Enter number of rooms (1–5) and press Book.")

    count = st.number_input("Rooms", min_value=1, max_value=5, value=1, step=1)
    if st.button("Book", type="primary"):
        result = book_rooms(int(count))
        if result:
            st.success(result.get("message", ""))
            st.write("Assigned rooms:", ", ".join(str(n) for n in result.get("booked", [])))
            st.caption(f"Search strategy: {result.get('strategy')}")

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Generate Random Occupancy"):
            post_action("/randomize", {})
    with col2:
        if st.button("Reset"):
            post_action("/reset")


def render_building_view() -> None:
    st.subheader("Building View")
    st.caption("Stairs/Lift on left. ★ selected, ✖ occupied.")

    plan = fetch_floor_plan()
    if not plan:
        return
    frame = building_frame(plan.get("floors", []))
    st.dataframe(frame.style.map(_highlight), use_container_width=True, height=420)


# ==========================================
# Main App
# ==========================================
def main() -> None:
    st.title("🏨 Hotel Room Reservation")
    st.sidebar.markdown(
        "The system prefers rooms on the same floor; otherwise it finds a set "
        "which minimizes total travel time. Vertical travel costs 2 minutes per "
        "floor and horizontal travel 1 minute per adjacent room."
    )

    left, right = st.columns([1, 2])
    with left:
        render_booking_panel()
    with right:
        render_building_view()


if __name__ == "__main__":
    main()
