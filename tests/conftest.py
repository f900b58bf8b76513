"""Canonical test fixtures used across all tests.

Fixture: 400K loan, 7% nominal, 30 years of monthly installments.
Small fixture: 1000 at 1% over 12 monthly terms, paid out 2021-01-10, due on the 1st.
"""

from datetime import date
from decimal import Decimal

import pytest

from loancalc.models.loan import Loan, TermsPerYear


@pytest.fixture
def standard_loan() -> Loan:
    """400K mortgage-style loan with no fees."""
    return Loan(
        principal=Decimal("400000"),
        annual_rate=Decimal("0.07"),
        terms=360,
        terms_per_year=TermsPerYear.MONTHLY,
        start_date=date(2025, 1, 10),
        due_day=20,
    )


@pytest.fixture
def small_loan() -> Loan:
    """1000 over one year, first installment due 2021-02-01."""
    return Loan(
        principal=Decimal("1000"),
        annual_rate=Decimal("0.01"),
        terms=12,
        terms_per_year=TermsPerYear.MONTHLY,
        start_date=date(2021, 1, 10),
        due_day=1,
    )


@pytest.fixture
def fee_loan() -> Loan:
    """100K over 10 years with an installment fee and an administration fee."""
    return Loan(
        principal=Decimal("100000"),
        annual_rate=Decimal("0.05"),
        terms=120,
        terms_per_year=TermsPerYear.MONTHLY,
        installment_fee=Decimal("45"),
        administration_fee=Decimal("1000"),
        start_date=date(2024, 3, 1),
        due_day=20,
    )
