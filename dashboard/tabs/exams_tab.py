from datetime import datetime

import streamlit as st

from dashboard.auth import exam_schedule
from dashboard.metrics import exam_plan_message
from dashboard.state import session_slices
from dashboard.state.exam_units import ExamUnitTracker
from dashboard.tabs.common import require_user, section_title


def _get_tracker(ctx, user_id):
    tracker = session_slices.get_or_create("exams", user_id, lambda: ExamUnitTracker(ctx.store, user_id))
    if not session_slices.get_value("exams", f"{user_id}.loaded"):
        tracker.load()
        session_slices.set_value("exams", f"{user_id}.loaded", True)
    return tracker


def _on_toggle(tracker, subject, index, widget_key):
    currently_done = tracker.is_done(subject, index)
    if not tracker.toggle(subject, index, currently_done):
        st.session_state[widget_key] = currently_done
        st.toast("Could not save unit progress.")


def render_exams_tab(ctx):
    section_title("SEMESTER PROTOCOL")
    plan_start, exam_start = ctx.get("exam_schedule") or exam_schedule()
    message = exam_plan_message(datetime.now(), plan_start, exam_start)
    st.markdown(
        f"<div class='objective-card'><span class='small-label'>Current objective</span><p>{message}</p></div>",
        unsafe_allow_html=True,
    )
    user_id = require_user(ctx)
    if not user_id:
        return
    tracker = _get_tracker(ctx, user_id)
    st.progress(tracker.overall_progress() / 100)

    for subject in tracker.syllabus:
        name = subject["name"]
        done, total = tracker.subject_progress(name)
        with st.container(border=True):
            st.markdown(f"**{name}** <span class='small-label'>{done}/{total}</span>", unsafe_allow_html=True)
            for index, unit_name in enumerate(subject["units"]):
                widget_key = f"exams.unit.{name}.{index}"
                st.session_state[widget_key] = tracker.is_done(name, index)
                st.checkbox(
                    unit_name,
                    key=widget_key,
                    on_change=_on_toggle,
                    args=(tracker, name, index, widget_key),
                )
