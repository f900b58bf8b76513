"""Loan progress chart: remaining balance against cumulative amount paid."""

import logging
from collections.abc import Sequence
from pathlib import Path

import plotly.graph_objects as go

from loancalc.config import settings

logger = logging.getLogger(__name__)

BALANCE_COLOR = "#e94560"
COST_COLOR = "#1a1a2e"

HTML_SUFFIXES = {".html", ".htm"}


def build_chart(summary, payments: Sequence) -> go.Figure:
    """Plot remaining balance and cumulative cost per term.

    Accepts engine dataclasses or their API response counterparts: only
    ``financed_amount``, ``planned_terms`` and the payment amounts are read.
    """
    terms = [0] + [p.period for p in payments]
    remaining = [float(summary.financed_amount)] + [float(p.balance) for p in payments]

    cost = [0.0]
    running = 0.0
    for p in payments:
        running += float(p.payment + p.extra + p.fee)
        cost.append(running)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=terms, y=remaining,
        mode="lines",
        name="Remaining Balance",
        line=dict(color=BALANCE_COLOR, width=3),
    ))
    fig.add_trace(go.Scatter(
        x=terms, y=cost,
        mode="lines",
        name="Total Paid",
        line=dict(color=COST_COLOR, width=3),
    ))

    # Label the starting balance and the final total cost
    fig.add_trace(go.Scatter(
        x=[terms[0], terms[-1]],
        y=[remaining[0], cost[-1]],
        mode="markers+text",
        text=[f"{remaining[0]:,.0f}", f"{cost[-1]:,.0f}"],
        textposition=["top right", "top left"],
        marker=dict(color=COST_COLOR, size=10),
        showlegend=False,
    ))

    if payments:
        last = payments[-1].due_date
        fig.add_annotation(
            x=terms[-1], y=remaining[-1],
            text=last.strftime("%B %Y"),
            showarrow=True,
            arrowhead=2,
            ax=-60, ay=-40,
            font=dict(color=BALANCE_COLOR, size=16),
        )

    fig.update_layout(
        title="Loan Payment Progress",
        xaxis_title="Term",
        yaxis_title="Amount",
        xaxis=dict(range=[0, summary.planned_terms]),
        hovermode="x unified",
        width=settings.chart_width,
        height=settings.chart_height,
    )
    return fig


def write_chart(summary, payments: Sequence, path: str | Path) -> Path:
    """Write the progress chart as a standalone HTML file."""
    path = Path(path)
    if path.suffix.lower() not in HTML_SUFFIXES:
        raise ValueError(f"chart output must be an .html file, got {path.name!r}")
    fig = build_chart(summary, payments)
    fig.write_html(str(path), include_plotlyjs="cdn")
    logger.info("Chart written to %s", path)
    return path
