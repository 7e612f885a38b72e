import streamlit as st

from dashboard.data.loaders import load_stats
from dashboard.tabs.common import require_user, section_title
from dashboard.visualizations import consistency_heatmap


def render_stats_tab(ctx):
    section_title("DATA")
    user_id = require_user(ctx)
    if not user_id:
        return
    stats = load_stats(ctx.store, user_id)

    cols = st.columns(3)
    cols[0].metric("MISSIONS COMPLETED", stats.total_missions)
    cols[1].metric("BOOKS READ", stats.books_read)
    cols[2].metric("ACTIVE DAYS", stats.active_days)

    st.plotly_chart(consistency_heatmap(stats.consistency), use_container_width=True)
