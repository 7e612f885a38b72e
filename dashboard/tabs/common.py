import streamlit as st


def require_user(ctx):
    """Pages render without a session; user-scoped data is skipped until someone signs in."""
    user_id = ctx.user_id
    if not user_id:
        st.info("Sign in to load your data.")
    return user_id


def section_title(title, subtitle=None):
    st.markdown(f"<div class='section-title'>{title}</div>", unsafe_allow_html=True)
    if subtitle:
        st.markdown(f"<div class='small-label'>{subtitle}</div>", unsafe_allow_html=True)
