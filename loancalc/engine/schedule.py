"""Amortization schedule computation.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal, ROUND_HALF_UP

from loancalc.engine.annuity import level_payment
from loancalc.engine.dates import due_dates
from loancalc.models.loan import (
    Loan,
    LoanEvent,
    ExtraPayment,
    RecurringExtraPayment,
    RateChange,
    RepaymentFreeze,
)
from loancalc.models.schedule import AmortizationSchedule, Payment, YearlySummary

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def _extras_by_period(events: Iterable[LoanEvent]) -> dict[int, Decimal]:
    extras: dict[int, Decimal] = {}
    for event in events:
        if isinstance(event, RecurringExtraPayment):
            singles = event.expand()
        elif isinstance(event, ExtraPayment):
            singles = [event]
        else:
            continue
        for single in singles:
            extras[single.period] = extras.get(single.period, Decimal("0")) + single.amount
    return extras


def amortization_schedule(loan: Loan, events: Iterable[LoanEvent] = ()) -> AmortizationSchedule:
    """Generate the payment schedule for ``loan``.

    Each period accrues interest on the opening balance, pays the level
    installment and then applies any extra downpayment directly to the
    balance. Stops early once the balance reaches zero.
    """
    events = list(events)
    extras = _extras_by_period(events)
    rate_changes = {e.period: e.annual_rate for e in events if isinstance(e, RateChange)}
    freezes = [e for e in events if isinstance(e, RepaymentFreeze)]

    dates = due_dates(loan.start_date, loan.due_day, loan.terms, loan.terms_per_year.months_per_term)

    balance = loan.financed_amount
    rate = loan.annual_rate
    r = rate / loan.periods_per_year
    installment = level_payment(balance, r, loan.terms)
    periodic_payment = installment
    reamortize = False

    payments: list[Payment] = []
    total_interest = Decimal("0")
    total_principal = Decimal("0")
    total_extra = Decimal("0")
    total_fees = Decimal("0")

    for period in range(1, loan.terms + 1):
        if period in rate_changes:
            rate = rate_changes[period]
            r = rate / loan.periods_per_year
            reamortize = True
            logger.debug("Rate change to %s at period %d", rate, period)

        # The last term always settles the loan, even inside a freeze
        frozen = period < loan.terms and any(f.covers(period) for f in freezes)

        if reamortize and not frozen:
            installment = level_payment(balance, r, loan.terms - period + 1)
            reamortize = False

        interest = (balance * r).quantize(TWO_PLACES, ROUND_HALF_UP)

        if frozen:
            principal_paid = Decimal("0")
            fee = Decimal("0")
            reamortize = True
        else:
            principal_paid = max(Decimal("0"), installment - interest)
            # Final payment adjustment
            if period == loan.terms or principal_paid > balance:
                principal_paid = balance
            fee = loan.installment_fee

        balance -= principal_paid

        extra = min(extras.get(period, Decimal("0")), balance)
        balance -= extra

        total_interest += interest
        total_principal += principal_paid + extra
        total_extra += extra
        total_fees += fee

        payments.append(Payment(
            period=period,
            due_date=dates[period - 1],
            payment=interest + principal_paid,
            interest=interest,
            principal=principal_paid,
            extra=extra,
            fee=fee,
            balance=balance,
            rate=rate,
        ))

        if balance <= 0:
            if period < loan.terms:
                logger.info("Loan paid off at period %d of %d", period, loan.terms)
            break

    return AmortizationSchedule(
        payments=payments,
        periodic_payment=periodic_payment,
        total_interest=total_interest,
        total_principal=total_principal,
        total_extra=total_extra,
        total_fees=total_fees,
    )


def yearly_summary(schedule: AmortizationSchedule) -> list[YearlySummary]:
    """Aggregate the schedule by calendar year of the due dates."""
    yearly: list[YearlySummary] = []
    for p in schedule.payments:
        if not yearly or yearly[-1].year != p.due_date.year:
            yearly.append(YearlySummary(year=p.due_date.year))
        row = yearly[-1]
        row.principal += p.principal
        row.interest += p.interest
        row.extra += p.extra
        row.fees += p.fee
        row.paid += p.total_paid
        row.ending_balance = p.balance
        row.payments += 1
    return yearly
