from __future__ import annotations

from datetime import date

from dashboard.theme import get_active_theme

WEEK_DAYS = 7


def _active_theme():
    return get_active_theme()[1]


def apply_common_plot_style(fig, title, show_xgrid=False, show_ygrid=False):
    theme = _active_theme()
    fig.update_layout(
        title=title,
        title_font=dict(color=theme["text_main"], size=14, family="JetBrains Mono"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=theme["text_main"], family="Inter"),
        margin=dict(l=20, r=20, t=40, b=20),
        xaxis=dict(
            showgrid=show_xgrid,
            gridcolor=theme["plot_grid"],
            zeroline=False,
            showticklabels=False,
        ),
        yaxis=dict(
            showgrid=show_ygrid,
            gridcolor=theme["plot_grid"],
            zeroline=False,
            showticklabels=False,
            autorange="reversed",
        ),
    )
    return fig


def build_consistency_matrix(grid):
    """Lay the trailing-day grid out in week columns, oldest day top-left."""
    import numpy as np

    columns = max(1, -(-len(grid) // WEEK_DAYS))
    z = np.full((WEEK_DAYS, columns), np.nan)
    text = [["" for _ in range(columns)] for _ in range(WEEK_DAYS)]
    for idx, cell in enumerate(grid):
        row = idx % WEEK_DAYS
        col = idx // WEEK_DAYS
        z[row, col] = cell["intensity"]
        day = date.fromisoformat(cell["date"])
        text[row][col] = f"{day.strftime('%b %d')} • {cell.get('completions', 0)} done"
    return z, text


def consistency_heatmap(grid, title="CONSISTENCY (90 DAYS)"):
    import plotly.graph_objects as go

    theme = _active_theme()
    z, text = build_consistency_matrix(grid)
    fig = go.Figure(
        data=go.Heatmap(
            z=z,
            text=text,
            hoverinfo="text",
            colorscale=[(0.0, theme["heat_empty"]), (1.0, theme["success"])],
            showscale=False,
            zmin=0,
            zmax=1,
            xgap=3,
            ygap=3,
        )
    )
    fig.update_layout(height=220)
    return apply_common_plot_style(fig, title)
