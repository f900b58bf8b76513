"""Plotly Dash application serving the browser front end for the calculator.

Run with ``python -m loancalc.dashboard.app``; pages live in ``pages/``.
"""

import logging

from dash import Dash, html, page_container

from loancalc.config import settings

NAV_COLOR = "#1a1a2e"
PAGE_WIDTH = "1100px"

app = Dash(
    __name__,
    use_pages=True,
    suppress_callback_exceptions=True,
    title="Loan Calculator",
)

app.layout = html.Div([
    html.Header(
        html.Div([
            html.H1("Loan Calculator", style={"fontSize": "1.4rem", "margin": "0"}),
            html.Span(
                "Installments, total cost and APR for a fixed-rate loan",
                style={"fontSize": "0.9rem", "opacity": "0.8"},
            ),
        ], style={"maxWidth": PAGE_WIDTH, "margin": "0 auto", "padding": "0 1rem"}),
        style={"backgroundColor": NAV_COLOR, "color": "white", "padding": "1rem 0", "marginBottom": "1.5rem"},
    ),

    html.Main(page_container, style={"maxWidth": PAGE_WIDTH, "margin": "0 auto", "padding": "0 1rem"}),
])


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    app.run(debug=settings.debug, port=8050)
