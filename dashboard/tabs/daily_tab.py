from datetime import date

import streamlit as st

from dashboard.state import session_slices
from dashboard.state.daily_tasks import DailyTaskSynchronizer
from dashboard.tabs.common import require_user, section_title


def _get_synchronizer(ctx, user_id):
    return session_slices.get_or_create(
        "daily",
        user_id,
        lambda: DailyTaskSynchronizer(ctx.store, user_id),
    )


def _on_toggle(sync, task_id, widget_key):
    task = next((item for item in sync.tasks if item.get("id") == task_id), None)
    if task is None:
        return
    if not sync.toggle(task_id, bool(task.get("completed"))):
        st.session_state[widget_key] = bool(task.get("completed"))
        st.toast("Could not save. Change reverted.")


def _on_field_commit(sync, task_id, field, widget_key):
    value = st.session_state.get(widget_key, "")
    sync.update_field(task_id, field, value)
    sync.save_field(task_id, field, value)


def render_daily_tab(ctx):
    section_title("TODAY'S MISSION")
    user_id = require_user(ctx)
    if not user_id:
        return

    sync = _get_synchronizer(ctx, user_id)
    today = date.today()
    if sync.day != today.isoformat():
        with st.spinner("INITIALIZING MISSION PROTOCOLS..."):
            sync.synchronize(today)
    if sync.last_error:
        st.warning("Could not load today's tasks. Try again in a moment.")

    st.progress(sync.progress / 100)
    status = "MISSION COMPLETE" if sync.mission_complete else "IN PROGRESS"
    cols = st.columns(2)
    cols[0].markdown(f"<div class='small-label'>Status: {status}</div>", unsafe_allow_html=True)
    cols[1].markdown(
        f"<div class='small-label' style='text-align:right;'>{sync.completed_count} / {sync.total} objectives</div>",
        unsafe_allow_html=True,
    )

    for task in sync.tasks:
        task_id = task.get("id")
        with st.container(border=True):
            done_key = f"daily.done.{task['key']}"
            st.session_state[done_key] = bool(task.get("completed"))
            st.checkbox(
                task["title"],
                key=done_key,
                disabled=task_id is None,
                on_change=_on_toggle,
                args=(sync, task_id, done_key),
            )
            st.caption(f"TARGET: {task.get('target', '')}")
            field_cols = st.columns(2 if task.get("has_time") else 1)
            if task.get("has_time"):
                time_key = f"daily.time_spent.{task['key']}"
                st.session_state[time_key] = task.get("time_spent") or ""
                field_cols[0].text_input(
                    "Time",
                    key=time_key,
                    placeholder="Time (e.g. 2h)",
                    label_visibility="collapsed",
                    disabled=task_id is None,
                    on_change=_on_field_commit,
                    args=(sync, task_id, "time_spent", time_key),
                )
            note_key = f"daily.note.{task['key']}"
            st.session_state[note_key] = task.get("note") or ""
            field_cols[-1].text_input(
                "Note",
                key=note_key,
                placeholder="Add a note...",
                label_visibility="collapsed",
                disabled=task_id is None,
                on_change=_on_field_commit,
                args=(sync, task_id, "note", note_key),
            )

    label = "MISSION ACCOMPLISHED" if sync.mission_complete else "COMPLETE ALL OBJECTIVES"
    st.button(label, disabled=not sync.mission_complete, use_container_width=True, key="daily.complete")
