"""Annual percentage rate (true cost of credit) using scipy.

Pure functions. No I/O.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

from loancalc.models.schedule import AmortizationSchedule

logger = logging.getLogger(__name__)

FOUR_PLACES = Decimal("0.0001")

# Upper bound on the periodic rate; keeps the annualized result within Decimal precision
MAX_PERIODIC_RATE = 64.0


def annual_percentage_rate(
    amount_received: Decimal,
    outflows: list[Decimal],
    terms_per_year: int,
) -> Decimal:
    """Annualized rate at which the borrower's outflows discount to the amount received.

    outflows[k] is everything paid in period k + 1 (installment, extra and fees).

    Uses Brent's method on the NPV function.
    """
    if amount_received <= 0 or not outflows or terms_per_year <= 0:
        return Decimal("0")

    received = float(amount_received)
    paid = [float(o) for o in outflows]

    def npv(rate: float) -> float:
        return sum(o * (1 + rate) ** -(k + 1) for k, o in enumerate(paid)) - received

    # NPV falls as the rate rises; at or below zero nothing was charged for the credit
    if npv(0.0) <= 0:
        return Decimal("0")

    # Double the upper bound until the NPV changes sign
    high = 1.0
    while npv(high) > 0:
        if high >= MAX_PERIODIC_RATE:
            logger.warning(
                "APR of %d payments exceeds %.0f%% per period, reporting 0",
                len(paid), MAX_PERIODIC_RATE * 100,
            )
            return Decimal("0")
        high *= 2

    periodic = brentq(npv, 0.0, high, xtol=1e-12, maxiter=1000)

    annual = (1 + periodic) ** terms_per_year - 1
    return Decimal(str(annual)).quantize(FOUR_PLACES, ROUND_HALF_UP)


def schedule_apr(amount_received: Decimal, schedule: AmortizationSchedule, terms_per_year: int) -> Decimal:
    """APR of a computed schedule."""
    return annual_percentage_rate(
        amount_received,
        [p.total_paid for p in schedule.payments],
        terms_per_year,
    )
