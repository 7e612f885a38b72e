import streamlit as st

THEME_PRESETS = {
    "dark": {
        "bg_main": "#050505",
        "bg_card": "rgba(10, 10, 10, 0.6)",
        "border": "#262626",
        "text_main": "#f5f5f5",
        "text_soft": "#a3a3a3",
        "text_faint": "#525252",
        "accent": "#39ff14",
        "success": "#00ff00",
        "error": "#ff3b3b",
        "plot_grid": "#1f1f1f",
        "heat_empty": "#141414",
    },
}


def ensure_theme_state():
    if "ui_theme" not in st.session_state:
        st.session_state["ui_theme"] = "dark"
    if st.session_state["ui_theme"] not in THEME_PRESETS:
        st.session_state["ui_theme"] = "dark"
    return st.session_state["ui_theme"]


def get_active_theme():
    name = ensure_theme_state()
    return name, THEME_PRESETS[name]


def inject_theme_css() -> dict:
    _, theme = get_active_theme()
    st.markdown(
        f"""
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;600;700&family=JetBrains+Mono:wght@400;500&display=swap');
:root {{
    --bg-main: {theme['bg_main']};
    --bg-card: {theme['bg_card']};
    --border: {theme['border']};
    --text-main: {theme['text_main']};
    --text-soft: {theme['text_soft']};
    --text-faint: {theme['text_faint']};
    --accent: {theme['accent']};
    --success: {theme['success']};
    --error: {theme['error']};
}}
.stApp {{ background: var(--bg-main); color: var(--text-main); font-family: 'Inter', sans-serif; }}
.section-title {{ font-weight: 600; font-size: 1.8rem; letter-spacing: -0.02em; margin-bottom: 0.5rem; }}
.small-label {{ font-family: 'JetBrains Mono', monospace; color: var(--text-soft); font-size: 0.78rem; letter-spacing: 0.15em; text-transform: uppercase; }}
.mono {{ font-family: 'JetBrains Mono', monospace; }}
.day-counter {{ font-size: 4rem; font-weight: 600; letter-spacing: -0.03em; text-align: center; }}
.day-counter span {{ font-size: 2rem; font-weight: 300; color: var(--text-soft); }}
.mission-line {{ font-size: 1.25rem; font-style: italic; color: var(--text-soft); text-align: center; }}
.rule-row {{ padding: 1rem; border-bottom: 1px solid var(--border); font-size: 1.1rem; }}
.rule-row::before {{ content: '●'; color: var(--error); margin-right: 1rem; font-size: 0.5rem; vertical-align: middle; }}
.status-locked {{ color: var(--success); }}
.objective-card {{ border: 1px solid var(--accent); background: rgba(57, 255, 20, 0.05); padding: 1rem; border-radius: 6px; }}
.objective-card p {{ margin: 0.5rem 0 0; font-weight: 600; color: var(--accent); }}
</style>
""",
        unsafe_allow_html=True,
    )
    return theme
