"""Translation between API schemas and engine dataclasses.

Shared by the HTTP routes and the CLI so both build loans the same way.
"""

from datetime import date
from decimal import Decimal

from loancalc.api.schemas import (
    ScheduleRequest,
    ScheduleResponse,
    SummaryResponse,
    PaymentResponse,
    YearlySummaryResponse,
)
from loancalc.config import settings
from loancalc.engine.calculator import LoanCalculator
from loancalc.models.loan import Loan, TermsPerYear
from loancalc.models.schedule import CalculationResult

HUNDRED = Decimal("100")


def build_loan(req: ScheduleRequest) -> Loan:
    """Build the Loan record; terms default to ``settings.default_years`` years."""
    terms_per_year = TermsPerYear.parse(req.terms_per_year)
    if req.terms is not None:
        terms = req.terms
    else:
        terms = (req.years if req.years is not None else settings.default_years) * terms_per_year.value

    return Loan(
        principal=req.loan,
        annual_rate=req.interest_pct / HUNDRED,
        terms=terms,
        terms_per_year=terms_per_year,
        installment_fee=req.installment_fee,
        administration_fee=req.administration_fee,
        start_date=req.start_date or date.today(),
        due_day=req.due_day,
    )


def build_calculator(req: ScheduleRequest) -> LoanCalculator:
    """Build a calculator with every event from the request attached."""
    calc = LoanCalculator(build_loan(req))
    for extra in req.extra_payments:
        calc.add_extra_payment(extra.period, extra.amount)
    for recurring in req.recurring_extra_payments:
        calc.add_recurring_extra_payment(
            recurring.amount, recurring.count, recurring.start_period, recurring.every,
        )
    for change in req.rate_changes:
        calc.add_rate_change(change.period, change.interest_pct / HUNDRED)
    for freeze in req.repayment_freezes:
        calc.add_repayment_freeze(freeze.period, freeze.count)
    return calc


def result_to_response(result: CalculationResult) -> ScheduleResponse:
    """Convert engine CalculationResult to API response."""
    s = result.summary
    summary = SummaryResponse(
        principal=s.principal,
        financed_amount=s.financed_amount,
        periodic_payment=s.periodic_payment,
        total_interest=s.total_interest,
        total_extra=s.total_extra,
        total_fees=s.total_fees,
        total_paid=s.total_paid,
        total_cost=s.total_cost,
        cost_of_credit=s.cost_of_credit,
        completed_terms=s.completed_terms,
        planned_terms=s.planned_terms,
        start_date=s.start_date,
        first_due_date=s.first_due_date,
        end_date=s.end_date,
        nominal_rate=s.nominal_rate,
        effective_rate=s.effective_rate,
        annual_percentage_rate=s.annual_percentage_rate,
    )

    payments = [
        PaymentResponse(
            period=p.period,
            due_date=p.due_date,
            payment=p.payment,
            interest=p.interest,
            principal=p.principal,
            extra=p.extra,
            fee=p.fee,
            balance=p.balance,
            rate=p.rate,
        )
        for p in result.schedule.payments
    ]

    yearly = [
        YearlySummaryResponse(
            year=y.year,
            principal=y.principal,
            interest=y.interest,
            extra=y.extra,
            fees=y.fees,
            paid=y.paid,
            ending_balance=y.ending_balance,
            payments=y.payments,
        )
        for y in result.yearly
    ]

    return ScheduleResponse(summary=summary, payments=payments, yearly=yearly)
