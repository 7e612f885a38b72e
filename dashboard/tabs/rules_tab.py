import streamlit as st

from dashboard.constants import RULES
from dashboard.tabs.common import section_title


def render_rules_tab(ctx):
    section_title("THE LAW", "Non-negotiable parameters.")
    for rule in RULES:
        st.markdown(f"<div class='rule-row'>{rule}</div>", unsafe_allow_html=True)
    st.markdown(
        "<div class='small-label' style='text-align:center;margin-top:3rem;'>"
        "Status: <span class='status-locked'>LOCKED &amp; ACTIVE</span></div>",
        unsafe_allow_html=True,
    )
