"""Calculator page: loan inputs, progress chart and yearly breakdown."""

import dash
from dash import html, dcc, callback, Input, Output, State

from loancalc.config import settings
from loancalc.dashboard.components import calculate
from loancalc.models.loan import TermsPerYear

dash.register_page(__name__, path="/", name="Calculator")

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}

FREQUENCY_LABELS = {
    TermsPerYear.MONTHLY: "Monthly",
    TermsPerYear.BIMONTHLY: "Every 2 months",
    TermsPerYear.QUARTERLY: "Quarterly",
    TermsPerYear.TRIANNUAL: "Every 4 months",
    TermsPerYear.SEMIANNUAL: "Twice a year",
    TermsPerYear.ANNUAL: "Yearly",
}

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _field(label, component):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ], style={"flex": "1", "minWidth": "140px"})


layout = html.Div([
    html.H2("Installment Loan"),

    html.Div([
        _field("Loan", dcc.Input(id="loan-amount", type="number", value=float(settings.default_loan), style=FIELD_STYLE)),
        _field("Interest (%)", dcc.Input(id="loan-interest", type="number", value=float(settings.default_interest_pct), step=0.01, style=FIELD_STYLE)),
        _field("Years", dcc.Input(id="loan-years", type="number", value=settings.default_years, style=FIELD_STYLE)),
        _field("Payments", dcc.Dropdown(
            id="loan-terms-per-year",
            options=[{"label": label, "value": freq.value} for freq, label in FREQUENCY_LABELS.items()],
            value=settings.default_terms_per_year,
            clearable=False,
        )),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "0.75rem"}),

    html.Div([
        _field("Installment Fee", dcc.Input(id="loan-fee", type="number", value=float(settings.default_fee), style=FIELD_STYLE)),
        _field("Extra Downpayment", dcc.Input(id="extra-amount", type="number", placeholder=str(settings.default_extra_amount), style=FIELD_STYLE)),
        _field("Extra Downpayment Terms", dcc.Input(id="extra-terms", type="number", placeholder="0", style=FIELD_STYLE)),
        html.Div([
            html.Label(" ", style={"fontSize": "0.85rem", "display": "block"}),
            html.Button("Calculate", id="calculate-btn", n_clicks=0, style=BTN_STYLE),
        ], style={"flex": "0 0 auto"}),
    ], style={"display": "flex", "gap": "1rem", "alignItems": "end", "marginBottom": "1.5rem"}),

    dcc.Loading(html.Div(id="results-container"), type="circle"),
])


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------

@callback(
    Output("results-container", "children"),
    Input("calculate-btn", "n_clicks"),
    [
        State("loan-amount", "value"),
        State("loan-interest", "value"),
        State("loan-years", "value"),
        State("loan-terms-per-year", "value"),
        State("loan-fee", "value"),
        State("extra-amount", "value"),
        State("extra-terms", "value"),
    ],
)
def run_calculation(n_clicks, loan, interest, years, terms_per_year, fee, extra_amount, extra_terms):
    return calculate(loan, interest, years, terms_per_year, fee, extra_amount, extra_terms)
