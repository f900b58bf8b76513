"""Annuity (level payment) math.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def level_payment(principal: Decimal, periodic_rate: Decimal, terms: int) -> Decimal:
    """Fixed installment that repays ``principal`` over ``terms`` periods."""
    if principal <= 0 or terms <= 0:
        return Decimal("0")
    if periodic_rate <= 0:
        return (principal / terms).quantize(TWO_PLACES, ROUND_HALF_UP)

    r = periodic_rate
    # A = P * r / (1 - (1 + r)^-N)
    payment = principal * r / (1 - (1 + r) ** -terms)
    return payment.quantize(TWO_PLACES, ROUND_HALF_UP)


def balance_after(principal: Decimal, periodic_rate: Decimal, terms: int, period: int) -> Decimal:
    """Closed-form remaining balance after ``period`` level payments.

    Uses the unrounded installment, so this is the reference the rounded
    schedule is compared against.
    """
    if period <= 0:
        return principal
    if period >= terms:
        return Decimal("0")
    if periodic_rate <= 0:
        return principal - principal * period / terms

    r = periodic_rate
    growth = (1 + r) ** period
    payment = principal * r / (1 - (1 + r) ** -terms)
    # B_k = P(1+r)^k - A((1+r)^k - 1)/r
    return principal * growth - payment * (growth - 1) / r


def effective_annual_rate(nominal_rate: Decimal, terms_per_year: int) -> Decimal:
    """Effective rate of a nominal rate compounded ``terms_per_year`` times."""
    if terms_per_year <= 0:
        return Decimal("0")
    rate = (1 + nominal_rate / terms_per_year) ** terms_per_year - 1
    return rate.quantize(FOUR_PLACES, ROUND_HALF_UP)
