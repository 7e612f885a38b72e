from datetime import date

import streamlit as st

from dashboard.constants import JOURNAL_FIELDS
from dashboard.state import session_slices
from dashboard.state.journal import JournalSaveError, JournalSession
from dashboard.tabs.common import require_user, section_title


def _get_journal(ctx, user_id, today):
    name = f"{user_id}:{today.isoformat()}"
    journal = session_slices.get_value("journal", name)
    if journal is None:
        journal = JournalSession(ctx.store, user_id)
        journal.fetch_for_today(today)
        session_slices.set_value("journal", name, journal)
    return journal


def _on_change(journal, field, widget_key):
    journal.change(field, st.session_state.get(widget_key, ""))


def render_journal_tab(ctx):
    section_title("JOURNAL", "Raw. Honest. Private.")
    st.caption(date.today().strftime("%A, %B %d").upper())
    user_id = require_user(ctx)
    if not user_id:
        return
    today = date.today()
    journal = _get_journal(ctx, user_id, today)

    for field, label in JOURNAL_FIELDS:
        widget_key = f"journal.{field}"
        st.session_state[widget_key] = journal.entry.get(field, "")
        st.text_area(
            label,
            key=widget_key,
            on_change=_on_change,
            args=(journal, field, widget_key),
        )

    if st.button("SAVE ENTRY", key="journal.save", disabled=journal.saving):
        try:
            journal.save(today)
        except JournalSaveError as exc:
            st.error(str(exc))
    if journal.saved:
        st.success("Saved")
