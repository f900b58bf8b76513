"""Schedule routes, the primary API entry point."""

import logging

from fastapi import APIRouter, HTTPException

from loancalc.api.convert import build_calculator, build_loan, result_to_response
from loancalc.api.schemas import PaymentQuote, ScheduleRequest, ScheduleResponse
from loancalc.engine.annuity import effective_annual_rate, level_payment
from loancalc.engine.dates import due_dates
from loancalc.models.loan import InvalidLoanError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["schedule"])


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: ScheduleRequest):
    """Loan parameters and events → full amortization schedule and totals."""
    try:
        calc = build_calculator(req)
    except InvalidLoanError as e:
        logger.debug("Rejected schedule request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return result_to_response(calc.compute())


@router.post("/payment", response_model=PaymentQuote)
async def payment(req: ScheduleRequest):
    """Quote the level installment without computing the whole schedule.

    Events in the request are ignored.
    """
    try:
        loan = build_loan(req)
    except InvalidLoanError as e:
        raise HTTPException(status_code=400, detail=str(e))

    dates = due_dates(loan.start_date, loan.due_day, loan.terms, loan.terms_per_year.months_per_term)
    return PaymentQuote(
        periodic_payment=level_payment(loan.financed_amount, loan.periodic_rate, loan.terms),
        installment_fee=loan.installment_fee,
        planned_terms=loan.terms,
        nominal_rate=loan.annual_rate,
        effective_rate=effective_annual_rate(loan.annual_rate, loan.periods_per_year),
        first_due_date=dates[0],
        planned_end_date=dates[-1],
    )
