from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Payment:
    period: int
    due_date: date
    payment: Decimal  # Scheduled installment actually paid (interest + principal)
    interest: Decimal
    principal: Decimal  # Scheduled principal portion
    extra: Decimal  # Extra downpayment applied this period
    fee: Decimal
    balance: Decimal  # Remaining after this period
    rate: Decimal  # Nominal annual rate in force

    @property
    def principal_reduction(self) -> Decimal:
        return self.principal + self.extra

    @property
    def total_paid(self) -> Decimal:
        return self.payment + self.extra + self.fee


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[Payment]
    periodic_payment: Decimal  # Level installment at the start of the loan
    total_interest: Decimal
    total_principal: Decimal  # Scheduled + extra
    total_extra: Decimal
    total_fees: Decimal

    @property
    def final_balance(self) -> Decimal:
        return self.payments[-1].balance if self.payments else Decimal("0")


@dataclass
class YearlySummary:
    year: int
    principal: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    extra: Decimal = Decimal("0")
    fees: Decimal = Decimal("0")
    paid: Decimal = Decimal("0")  # Installments + extra + fees
    ending_balance: Decimal = Decimal("0")
    payments: int = 0


@dataclass
class LoanSummary:
    principal: Decimal = Decimal("0")
    financed_amount: Decimal = Decimal("0")
    periodic_payment: Decimal = Decimal("0")

    total_interest: Decimal = Decimal("0")
    total_extra: Decimal = Decimal("0")
    total_fees: Decimal = Decimal("0")  # Installment + administration fees
    total_paid: Decimal = Decimal("0")  # Installments + extra, excluding fees
    total_cost: Decimal = Decimal("0")  # Everything handed to the lender
    cost_of_credit: Decimal = Decimal("0")  # Interest + fees

    completed_terms: int = 0
    planned_terms: int = 0

    start_date: date | None = None
    first_due_date: date | None = None
    end_date: date | None = None

    nominal_rate: Decimal = Decimal("0")
    effective_rate: Decimal = Decimal("0")
    annual_percentage_rate: Decimal = Decimal("0")

    @property
    def terms_saved(self) -> int:
        return self.planned_terms - self.completed_terms


@dataclass
class CalculationResult:
    summary: LoanSummary
    schedule: AmortizationSchedule
    yearly: list[YearlySummary] = field(default_factory=list)
