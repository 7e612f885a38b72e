import streamlit as st

from dashboard.auth import exam_schedule, get_secret, get_session_provider, load_local_env, sign_in_enforced
from dashboard.context import DashboardContext
from dashboard.data import api_client
from dashboard.data.repositories import RecordStore
from dashboard.header import render_global_header
from dashboard.logging_config import configure_logging
from dashboard.router import render_router
from dashboard.state import session_slices
from dashboard.theme import inject_theme_css

load_local_env()
configure_logging()
api_client.configure(get_secret)

st.set_page_config(page_title="Ghost Mode 90", page_icon="👻", layout="centered")


def _reset_page_state(event, user):
    # Cached synchronizers and trackers are bound to the previous user.
    session_slices.clear_all()


def build_context():
    return DashboardContext(
        store=RecordStore(),
        session=get_session_provider(st.session_state, on_change=_reset_page_state),
        settings={
            "backend_ok": api_client.is_enabled(),
            "enforce_sign_in": sign_in_enforced(),
            "exam_schedule": exam_schedule(),
        },
    )


def main():
    inject_theme_css()
    ctx = build_context()
    render_global_header(ctx)
    render_router(ctx)


main()
