"""Result rendering for the dashboard pages."""

from decimal import Decimal

from dash import html, dcc
from pydantic import ValidationError

from loancalc.api.convert import build_calculator, result_to_response
from loancalc.api.schemas import ScheduleRequest, ScheduleResponse, RecurringExtraPaymentIn
from loancalc.models.loan import InvalidLoanError
from loancalc.reporting.chart import build_chart


def _metric_card(label: str, value: str):
    return html.Div([
        html.Div(label, style={"fontSize": "0.85rem", "color": "#666"}),
        html.Div(value, style={"fontSize": "1.5rem", "fontWeight": "bold"}),
    ], style={
        "backgroundColor": "#f5f5f5",
        "padding": "1rem",
        "borderRadius": "8px",
        "minWidth": "160px",
        "flex": "1",
    })


def _money(v) -> str:
    return f"{float(v):,.0f}"


def build_results(data: ScheduleResponse) -> list:
    s = data.summary

    cards = html.Div([
        _metric_card("Installment", _money(s.periodic_payment)),
        _metric_card("Total Interest", _money(s.total_interest)),
        _metric_card("Total Cost", _money(s.total_cost)),
        _metric_card("APR", f"{float(s.annual_percentage_rate) * 100:.2f}%"),
        _metric_card("Paid Off", s.end_date.strftime("%b %Y") if s.end_date else "-"),
        _metric_card("Terms", f"{s.completed_terms} / {s.planned_terms}"),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "2rem", "flexWrap": "wrap"})

    chart = dcc.Graph(id="progress-chart", figure=build_chart(s, data.payments))

    table_header = html.Tr([
        html.Th("Year"), html.Th("Principal"), html.Th("Interest"),
        html.Th("Extra"), html.Th("Fees"), html.Th("Ending Balance"),
    ])
    table_rows = [
        html.Tr([
            html.Td(y.year),
            html.Td(_money(y.principal)),
            html.Td(_money(y.interest)),
            html.Td(_money(y.extra)),
            html.Td(_money(y.fees)),
            html.Td(_money(y.ending_balance)),
        ])
        for y in data.yearly
    ]
    table = html.Table(
        [html.Thead(table_header), html.Tbody(table_rows)],
        style={"width": "100%", "borderCollapse": "collapse", "marginTop": "1rem"},
    )

    return [cards, chart, html.H3("Yearly Summary"), table]


def build_error(message: str):
    return html.Div(message, style={
        "backgroundColor": "#fdecea",
        "color": "#e94560",
        "padding": "0.75rem 1rem",
        "borderRadius": "8px",
        "border": "1px solid #e94560",
    })


def calculate(loan, interest, years, terms_per_year, fee, extra_amount=None, extra_terms=None) -> list:
    """Run the calculator on raw dashboard input values and render the outcome."""
    if loan is None or interest is None or years is None:
        return [build_error("Loan, interest and years are required.")]

    recurring = []
    if extra_amount and extra_terms:
        recurring.append(RecurringExtraPaymentIn(
            amount=Decimal(str(extra_amount)), count=int(extra_terms),
        ))

    try:
        req = ScheduleRequest(
            loan=Decimal(str(loan)),
            interest_pct=Decimal(str(interest)),
            years=int(years),
            terms_per_year=int(terms_per_year),
            installment_fee=Decimal(str(fee or 0)),
            recurring_extra_payments=recurring,
        )
        calc = build_calculator(req)
    except (InvalidLoanError, ValidationError) as e:
        return [build_error(str(e))]

    return build_results(result_to_response(calc.compute()))
