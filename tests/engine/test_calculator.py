from datetime import date
from decimal import Decimal

import pytest

from loancalc.engine.calculator import LoanCalculator
from loancalc.models.loan import ExtraPayment, InvalidLoanError, RepaymentFreeze


class TestLoanCalculator:
    def test_initial_loan_only(self, small_loan):
        """Mirrors the single-initialization scenario: 1000 at 1% over 12 months."""
        result = LoanCalculator(small_loan).compute()
        summary = result.summary

        assert summary.principal == Decimal("1000")
        assert summary.total_interest > Decimal("5")
        assert summary.start_date == date(2021, 1, 10)
        assert summary.first_due_date == date(2021, 2, 1)
        assert summary.end_date == date(2022, 1, 1)
        assert summary.completed_terms == 12
        assert summary.planned_terms == 12
        assert summary.terms_saved == 0

    def test_extra_installment_ends_early(self, small_loan):
        calc = LoanCalculator(small_loan)
        calc.add_extra_payment(2, Decimal("100"))
        summary = calc.compute().summary

        assert summary.total_extra == Decimal("100")
        assert summary.end_date == date(2021, 12, 1)
        assert summary.terms_saved == 1

    def test_totals(self, fee_loan):
        result = LoanCalculator(fee_loan).compute()
        s = result.summary

        assert s.financed_amount == Decimal("101000")
        assert s.total_paid - s.financed_amount == s.total_interest
        assert s.total_fees == Decimal("45") * 120 + Decimal("1000")
        assert s.total_cost == s.total_paid + Decimal("45") * 120
        assert s.cost_of_credit == s.total_cost - s.principal
        assert s.effective_rate == Decimal("0.0512")
        assert s.annual_percentage_rate > s.effective_rate

    def test_yearly_included(self, fee_loan):
        result = LoanCalculator(fee_loan).compute()
        assert result.yearly[0].year == 2024
        assert sum(y.payments for y in result.yearly) == result.summary.completed_terms

    def test_compute_is_repeatable(self, small_loan):
        calc = LoanCalculator(small_loan)
        first = calc.compute().summary
        second = calc.compute().summary
        assert first == second

    def test_events_via_constructor(self, small_loan):
        calc = LoanCalculator(small_loan, [ExtraPayment(period=1, amount=Decimal("50"))])
        assert len(calc.events) == 1
        assert calc.compute().summary.total_extra == Decimal("50")

    def test_events_returns_copy(self, small_loan):
        calc = LoanCalculator(small_loan)
        calc.events.append(ExtraPayment(period=1, amount=Decimal("50")))
        assert calc.events == []

    def test_all_event_kinds(self, fee_loan):
        calc = LoanCalculator(fee_loan)
        calc.add_recurring_extra_payment(Decimal("200"), count=24, start_period=13, every=1)
        calc.add_rate_change(10, Decimal("0.04"))
        calc.add_repayment_freeze(6, 2)
        result = calc.compute()
        s = result.summary

        assert len(calc.events) == 3
        assert s.completed_terms < s.planned_terms
        assert sum(p.principal + p.extra for p in result.schedule.payments) == s.financed_amount


class TestEventValidation:
    def test_extra_outside_term(self, small_loan):
        calc = LoanCalculator(small_loan)
        with pytest.raises(InvalidLoanError, match="outside the loan term"):
            calc.add_extra_payment(13, Decimal("10"))

    def test_recurring_runs_past_term(self, small_loan):
        calc = LoanCalculator(small_loan)
        with pytest.raises(InvalidLoanError, match="outside the loan term"):
            calc.add_recurring_extra_payment(Decimal("10"), count=6, start_period=8)

    def test_rate_change_outside_term(self, small_loan):
        calc = LoanCalculator(small_loan)
        with pytest.raises(InvalidLoanError):
            calc.add_rate_change(20, Decimal("0.02"))

    def test_freeze_cannot_cover_last_term(self, small_loan):
        calc = LoanCalculator(small_loan)
        with pytest.raises(InvalidLoanError, match="before the last term"):
            calc.add_repayment_freeze(11, 2)

    def test_invalid_event_not_stored(self, small_loan):
        calc = LoanCalculator(small_loan)
        with pytest.raises(InvalidLoanError):
            calc.add_event(RepaymentFreeze(period=12, count=1))
        assert calc.events == []
