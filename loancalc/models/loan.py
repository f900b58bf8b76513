from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


MAX_YEARS = 100  # Longest repayment period accepted


class InvalidLoanError(ValueError):
    """Raised when a loan or loan event is constructed from invalid input."""


class TermsPerYear(Enum):
    ANNUAL = 1
    SEMIANNUAL = 2
    TRIANNUAL = 3
    QUARTERLY = 4
    BIMONTHLY = 6
    MONTHLY = 12

    @property
    def months_per_term(self) -> int:
        return 12 // self.value

    @classmethod
    def parse(cls, value: "int | str | TermsPerYear") -> "TermsPerYear":
        if isinstance(value, cls):
            return value
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            allowed = [m.value for m in cls]
            raise InvalidLoanError(
                f"terms per year must be one of {allowed}, got {value!r}"
            ) from None


class DueDay(Enum):
    """Named days of the month an installment can fall due on."""
    FIRST = 1
    MID = 15
    END = 31  # Clamped to 28/29/30 in shorter months


def parse_due_day(value: "int | str | DueDay") -> int:
    """Turn ``first``/``mid``/``end`` or a day number into a day of month."""
    if isinstance(value, DueDay):
        return value.value
    text = str(value).strip().lower()
    named = {d.name.lower(): d.value for d in DueDay}
    if text in named:
        return named[text]
    try:
        day = int(text)
    except ValueError:
        raise InvalidLoanError(
            f"due day must be 'first', 'mid', 'end' or 1-31, got {value!r}"
        ) from None
    if not 1 <= day <= 31:
        raise InvalidLoanError(f"due day must be within 1-31, got {day}")
    return day


@dataclass(frozen=True)
class Loan:
    principal: Decimal  # Loan sum paid out
    annual_rate: Decimal  # Nominal, e.g. Decimal("0.0125") for 1.25%
    terms: int  # Number of scheduled installments
    terms_per_year: TermsPerYear = TermsPerYear.MONTHLY
    installment_fee: Decimal = Decimal("0")  # Charged with each repayment installment
    administration_fee: Decimal = Decimal("0")  # Added to the financed amount
    start_date: date = field(default_factory=date.today)  # Payout date
    due_day: int = 20

    def __post_init__(self):
        if not isinstance(self.terms_per_year, TermsPerYear):
            object.__setattr__(self, "terms_per_year", TermsPerYear.parse(self.terms_per_year))
        object.__setattr__(self, "due_day", parse_due_day(self.due_day))

        if self.principal <= 0:
            raise InvalidLoanError(f"principal must be positive, got {self.principal}")
        if not Decimal("0") < self.annual_rate < Decimal("1"):
            raise InvalidLoanError(
                f"annual rate must be positive and below 100%, got {self.annual_rate}"
            )
        if self.terms <= 0:
            raise InvalidLoanError(f"term count must be positive, got {self.terms}")
        if self.terms > MAX_YEARS * self.terms_per_year.value:
            raise InvalidLoanError(
                f"term count must not exceed {MAX_YEARS} years of payments "
                f"({MAX_YEARS * self.terms_per_year.value}), got {self.terms}"
            )
        if self.start_date.year + MAX_YEARS >= date.max.year:
            raise InvalidLoanError(f"start date is too far in the future, got {self.start_date}")
        if self.installment_fee < 0:
            raise InvalidLoanError(f"installment fee cannot be negative, got {self.installment_fee}")
        if self.administration_fee < 0:
            raise InvalidLoanError(
                f"administration fee cannot be negative, got {self.administration_fee}"
            )

    @property
    def financed_amount(self) -> Decimal:
        return self.principal + self.administration_fee

    @property
    def periods_per_year(self) -> int:
        return self.terms_per_year.value

    @property
    def periodic_rate(self) -> Decimal:
        return self.annual_rate / self.periods_per_year

    @property
    def years(self) -> Decimal:
        return Decimal(self.terms) / self.periods_per_year


# ---- Events ----

def _check_period(period: int) -> None:
    if period < 1:
        raise InvalidLoanError(f"event period must be 1 or later, got {period}")


@dataclass(frozen=True)
class ExtraPayment:
    """One-off extra downpayment applied directly to the balance."""
    period: int
    amount: Decimal

    def __post_init__(self):
        _check_period(self.period)
        if self.amount <= 0:
            raise InvalidLoanError(f"extra payment must be positive, got {self.amount}")


@dataclass(frozen=True)
class RecurringExtraPayment:
    """A series of equal extra downpayments, ``every`` periods apart."""
    amount: Decimal
    count: int
    start_period: int = 1
    every: int = 1

    def __post_init__(self):
        _check_period(self.start_period)
        if self.amount <= 0:
            raise InvalidLoanError(f"extra payment must be positive, got {self.amount}")
        if self.count < 1:
            raise InvalidLoanError(f"extra payment count must be positive, got {self.count}")
        if self.every < 1:
            raise InvalidLoanError(f"extra payment interval must be positive, got {self.every}")

    @property
    def last_period(self) -> int:
        return self.start_period + (self.count - 1) * self.every

    def expand(self) -> list[ExtraPayment]:
        return [
            ExtraPayment(period=self.start_period + i * self.every, amount=self.amount)
            for i in range(self.count)
        ]


@dataclass(frozen=True)
class RateChange:
    """New nominal rate effective from ``period``."""
    period: int
    annual_rate: Decimal

    def __post_init__(self):
        _check_period(self.period)
        if not Decimal("0") < self.annual_rate < Decimal("1"):
            raise InvalidLoanError(
                f"annual rate must be positive and below 100%, got {self.annual_rate}"
            )


@dataclass(frozen=True)
class RepaymentFreeze:
    """``count`` interest-only installments starting at ``period``."""
    period: int
    count: int

    def __post_init__(self):
        _check_period(self.period)
        if self.count < 1:
            raise InvalidLoanError(f"freeze count must be positive, got {self.count}")

    @property
    def last_period(self) -> int:
        return self.period + self.count - 1

    def covers(self, period: int) -> bool:
        return self.period <= period <= self.last_period


LoanEvent = ExtraPayment | RecurringExtraPayment | RateChange | RepaymentFreeze
