import streamlit as st

from dashboard.constants import MISSION_STATEMENT, PROGRAM_DAYS
from dashboard.data.loaders import load_day_count
from dashboard.metrics import program_progress
from dashboard.tabs.common import require_user


def render_home_tab(ctx):
    st.markdown(
        "<div class='small-label' style='text-align:center;'>Ghost Mode Contract</div>",
        unsafe_allow_html=True,
    )
    day_count = 1
    user_id = require_user(ctx)
    if user_id:
        day_count = load_day_count(ctx.store, user_id)

    st.markdown(
        f"<div class='day-counter'>DAY {day_count} <span>/ {PROGRAM_DAYS}</span></div>",
        unsafe_allow_html=True,
    )
    st.progress(program_progress(day_count) / 100)
    st.markdown(f"<p class='mission-line'>\"{MISSION_STATEMENT}\"</p>", unsafe_allow_html=True)
    if st.button("ENTER TODAY'S MISSION", use_container_width=True, key="home.enter"):
        st.session_state["ui.pending_tab"] = "Today's Mission"
        st.rerun()
