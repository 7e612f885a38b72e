import streamlit as st

from dashboard.constants import PROGRAM_NAME


def render_global_header(ctx):
    user = ctx.user
    cols = st.columns([3, 2])
    cols[0].markdown(f"<div class='small-label'>{PROGRAM_NAME}</div>", unsafe_allow_html=True)
    label = user.get("email") if user else "not signed in"
    cols[1].markdown(f"<div class='small-label' style='text-align:right;'>{label}</div>", unsafe_allow_html=True)
    if not ctx.get("backend_ok", True):
        st.warning("Backend not configured. Set API_BASE_URL and BACKEND_SESSION_SECRET.")
