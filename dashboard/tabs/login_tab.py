import logging

import streamlit as st

from dashboard.constants import PROGRAM_NAME

logger = logging.getLogger(__name__)


def render_login_tab(ctx):
    st.markdown(f"<div class='section-title' style='text-align:center;'>{PROGRAM_NAME}</div>", unsafe_allow_html=True)
    user = ctx.user
    if user:
        st.caption(f"Signed in as {user.get('email')}")
        if st.button("SIGN OUT", key="login.sign_out"):
            ctx.session.sign_out()
            st.rerun()
        return

    with st.form(key="login.form"):
        email = st.text_input("Email", key="login.email")
        password = st.text_input("Password", type="password", key="login.password")
        submitted = st.form_submit_button("ENTER", use_container_width=True)
    if submitted:
        try:
            ctx.session.sign_in(email, password)
        except Exception as exc:
            logger.warning("Sign-in failed for %s: %s", email, exc)
            st.error("Sign-in failed.")
            return
        st.rerun()
