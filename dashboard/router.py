import streamlit as st

from dashboard.tabs.books_tab import render_books_tab
from dashboard.tabs.daily_tab import render_daily_tab
from dashboard.tabs.exams_tab import render_exams_tab
from dashboard.tabs.home_tab import render_home_tab
from dashboard.tabs.journal_tab import render_journal_tab
from dashboard.tabs.login_tab import render_login_tab
from dashboard.tabs.rules_tab import render_rules_tab
from dashboard.tabs.stats_tab import render_stats_tab


TAB_RENDERERS = {
    "Home": render_home_tab,
    "Rules": render_rules_tab,
    "Today's Mission": render_daily_tab,
    "Books": render_books_tab,
    "Journal": render_journal_tab,
    "Stats": render_stats_tab,
    "Exams": render_exams_tab,
    "Account": render_login_tab,
}
TAB_OPTIONS = list(TAB_RENDERERS)


def render_router(ctx):
    # Sign-in gate ships disabled; every page renders with or without a session.
    if ctx.get("enforce_sign_in") and not ctx.user:
        return render_login_tab(ctx)

    pending = st.session_state.pop("ui.pending_tab", None)
    if pending in TAB_RENDERERS:
        st.session_state["ui.active_tab"] = pending
    active = st.session_state.get("ui.active_tab", TAB_OPTIONS[0])
    if active not in TAB_RENDERERS:
        active = TAB_OPTIONS[0]
    active = st.segmented_control(
        "Navigate",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=active,
        label_visibility="collapsed",
    )
    renderer = TAB_RENDERERS.get(active or TAB_OPTIONS[0])
    return _render(renderer, ctx)


@st.fragment
def _render(renderer, ctx):
    renderer(ctx)
