"""Loan calculator: composes the engine sub-modules into a full calculation.

Pure computation. No I/O. Loan and events in, CalculationResult out.
"""

import logging
from decimal import Decimal

from loancalc.engine.annuity import effective_annual_rate
from loancalc.engine.apr import schedule_apr
from loancalc.engine.dates import first_due_date
from loancalc.engine.schedule import amortization_schedule, yearly_summary
from loancalc.models.loan import (
    InvalidLoanError,
    Loan,
    LoanEvent,
    ExtraPayment,
    RecurringExtraPayment,
    RateChange,
    RepaymentFreeze,
)
from loancalc.models.schedule import CalculationResult, LoanSummary

logger = logging.getLogger(__name__)


class LoanCalculator:
    """Holds a loan and the events scheduled over its lifetime.

    Events are validated against the loan term as they are added;
    ``compute()`` can be called any number of times.
    """

    def __init__(self, loan: Loan, events: list[LoanEvent] | None = None):
        self.loan = loan
        self._events: list[LoanEvent] = []
        for event in events or []:
            self.add_event(event)

    @property
    def events(self) -> list[LoanEvent]:
        return list(self._events)

    def add_event(self, event: LoanEvent) -> None:
        if isinstance(event, RecurringExtraPayment):
            first, last = event.start_period, event.last_period
        elif isinstance(event, RepaymentFreeze):
            first, last = event.period, event.last_period
            # The final term has to repay what is left
            if last >= self.loan.terms:
                raise InvalidLoanError(
                    f"repayment freeze must end before the last term ({self.loan.terms}), "
                    f"got periods {first}-{last}"
                )
        else:
            first = last = event.period

        if last > self.loan.terms:
            raise InvalidLoanError(
                f"event periods {first}-{last} fall outside the loan term of {self.loan.terms}"
            )
        self._events.append(event)

    def add_extra_payment(self, period: int, amount: Decimal) -> None:
        self.add_event(ExtraPayment(period=period, amount=amount))

    def add_recurring_extra_payment(
        self, amount: Decimal, count: int, start_period: int = 1, every: int = 1
    ) -> None:
        self.add_event(RecurringExtraPayment(
            amount=amount, count=count, start_period=start_period, every=every,
        ))

    def add_rate_change(self, period: int, annual_rate: Decimal) -> None:
        self.add_event(RateChange(period=period, annual_rate=annual_rate))

    def add_repayment_freeze(self, period: int, count: int) -> None:
        self.add_event(RepaymentFreeze(period=period, count=count))

    def compute(self) -> CalculationResult:
        """Compute the schedule, yearly breakdown and totals for the loan."""
        loan = self.loan
        schedule = amortization_schedule(loan, self._events)
        payments = schedule.payments

        total_paid = sum((p.payment + p.extra for p in payments), Decimal("0"))
        total_fees = schedule.total_fees + loan.administration_fee

        summary = LoanSummary(
            principal=loan.principal,
            financed_amount=loan.financed_amount,
            periodic_payment=schedule.periodic_payment,
            total_interest=schedule.total_interest,
            total_extra=schedule.total_extra,
            total_fees=total_fees,
            total_paid=total_paid,
            total_cost=total_paid + schedule.total_fees,
            cost_of_credit=schedule.total_interest + total_fees,
            completed_terms=len(payments),
            planned_terms=loan.terms,
            start_date=loan.start_date,
            first_due_date=first_due_date(loan.start_date, loan.due_day),
            end_date=payments[-1].due_date if payments else None,
            nominal_rate=loan.annual_rate,
            effective_rate=effective_annual_rate(loan.annual_rate, loan.periods_per_year),
            annual_percentage_rate=schedule_apr(loan.principal, schedule, loan.periods_per_year),
        )
        logger.debug(
            "Computed %d of %d terms, total cost %s",
            summary.completed_terms, summary.planned_terms, summary.total_cost,
        )

        return CalculationResult(
            summary=summary,
            schedule=schedule,
            yearly=yearly_summary(schedule),
        )
