"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


# ---- Request schemas ----

class ExtraPaymentIn(BaseModel):
    period: int = Field(..., description="1-based term index")
    amount: Decimal


class RecurringExtraPaymentIn(BaseModel):
    amount: Decimal
    count: int
    start_period: int = 1
    every: int = 1


class RateChangeIn(BaseModel):
    period: int
    interest_pct: Decimal = Field(..., description="New nominal annual interest in percent")


class RepaymentFreezeIn(BaseModel):
    period: int
    count: int


class ScheduleRequest(BaseModel):
    loan: Decimal = Field(..., description="Loan sum paid out")
    interest_pct: Decimal = Field(..., description="Nominal annual interest in percent, e.g. 1.25")
    terms: int | None = Field(None, description="Number of terms (conflicts with years)")
    years: int | None = Field(None, description="Years to repay (conflicts with terms)")
    terms_per_year: int = 12
    installment_fee: Decimal = Decimal("0")
    administration_fee: Decimal = Decimal("0")
    start_date: date | None = Field(None, description="Payout date, defaults to today")
    due_day: int | str = Field(20, description="'first', 'mid', 'end' or 1-31")

    extra_payments: list[ExtraPaymentIn] = Field(default_factory=list)
    recurring_extra_payments: list[RecurringExtraPaymentIn] = Field(default_factory=list)
    rate_changes: list[RateChangeIn] = Field(default_factory=list)
    repayment_freezes: list[RepaymentFreezeIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def _terms_or_years(self):
        if self.terms is not None and self.years is not None:
            raise ValueError("terms and years are mutually exclusive")
        return self


# ---- Response schemas ----

class PaymentResponse(BaseModel):
    period: int
    due_date: date
    payment: Decimal
    interest: Decimal
    principal: Decimal
    extra: Decimal
    fee: Decimal
    balance: Decimal
    rate: Decimal


class YearlySummaryResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    extra: Decimal
    fees: Decimal
    paid: Decimal
    ending_balance: Decimal
    payments: int


class SummaryResponse(BaseModel):
    principal: Decimal
    financed_amount: Decimal
    periodic_payment: Decimal
    total_interest: Decimal
    total_extra: Decimal
    total_fees: Decimal
    total_paid: Decimal
    total_cost: Decimal
    cost_of_credit: Decimal
    completed_terms: int
    planned_terms: int
    start_date: date | None = None
    first_due_date: date | None = None
    end_date: date | None = None
    nominal_rate: Decimal
    effective_rate: Decimal
    annual_percentage_rate: Decimal


class ScheduleResponse(BaseModel):
    summary: SummaryResponse
    payments: list[PaymentResponse] = []
    yearly: list[YearlySummaryResponse] = []


class PaymentQuote(BaseModel):
    periodic_payment: Decimal
    installment_fee: Decimal
    planned_terms: int
    nominal_rate: Decimal
    effective_rate: Decimal
    first_due_date: date
    planned_end_date: date
