"""Command line loan calculator: computes the schedule and prints a terminal report.

Usage:
    loancalc --loan 2500000 --years 25 --interest 4.5
    loancalc --loan 1000000 --terms 120 --terms-per-year 4 --extra 8:50000 --chart progress.html
    loancalc --extra-terms 12 --extra-amount 6000 --schedule
    loancalc --remote http://localhost:8000 --json
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

import httpx
from pydantic import ValidationError

from loancalc.api.convert import build_calculator, result_to_response
from loancalc.api.schemas import (
    ScheduleRequest,
    ScheduleResponse,
    ExtraPaymentIn,
    RecurringExtraPaymentIn,
    RateChangeIn,
    RepaymentFreezeIn,
)
from loancalc.client import ScheduleClient
from loancalc.config import settings
from loancalc.models.loan import InvalidLoanError, TermsPerYear
from loancalc.reporting.chart import write_chart

logger = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format a decimal/float fraction as a percentage string."""
    return f"{float(v) * 100:.3f}%"


def _money(v) -> str:
    return f"{float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _decimal(text: str) -> Decimal:
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {text!r}") from None
    if not value.is_finite():
        raise argparse.ArgumentTypeError(f"amount must be a finite number: {text!r}")
    return value


def _period_pair(kind, value_type=_decimal):
    """argparse type for ``PERIOD:VALUE`` pairs."""
    def parse(text: str):
        period, sep, value = text.partition(":")
        expected = f"expected PERIOD:{kind.upper()}, got {text!r}"
        if not sep:
            raise argparse.ArgumentTypeError(expected)
        try:
            return int(period), value_type(value)
        except (ValueError, argparse.ArgumentTypeError):
            raise argparse.ArgumentTypeError(expected) from None
    return parse


# ── Report sections ──────────────────────────────────────────────────────────

def print_summary(data: ScheduleResponse) -> None:
    s = data.summary
    _header("Loan Summary")
    print(f"  Loan:                 {_money(s.principal)}")
    if s.financed_amount != s.principal:
        print(f"  Financed Amount:      {_money(s.financed_amount)}")
    print(f"  Nominal Interest:     {_pct(s.nominal_rate)}")
    print(f"  Effective Interest:   {_pct(s.effective_rate)}")
    print(f"  APR (incl. fees):     {_pct(s.annual_percentage_rate)}")
    print(f"  Installment:          {_money(s.periodic_payment)}")
    print(f"  Payout Date:          {s.start_date}")
    print(f"  First Installment:    {s.first_due_date}")
    print(f"  Last Installment:     {s.end_date}")
    print(f"  Terms:                {s.completed_terms} of {s.planned_terms} planned")
    print()
    print(f"  Total Interest:       {_money(s.total_interest)}")
    print(f"  Total Fees:           {_money(s.total_fees)}")
    print(f"  Extra Downpayments:   {_money(s.total_extra)}")
    print(f"  Total Paid:           {_money(s.total_paid)}")
    print(f"  Total Cost:           {_money(s.total_cost)}")
    print(f"  Cost of Credit:       {_money(s.cost_of_credit)}")


def print_yearly(data: ScheduleResponse) -> None:
    if not data.yearly:
        return
    _header("Yearly Summary")
    print(
        f"  {'Year':>4}  {'Principal':>14}  {'Interest':>12}  {'Extra':>12}  "
        f"{'Fees':>8}  {'Balance':>14}"
    )
    print(f"  {'----':>4}  {'-' * 14}  {'-' * 12}  {'-' * 12}  {'-' * 8}  {'-' * 14}")
    for y in data.yearly:
        print(
            f"  {y.year:>4}  {_money(y.principal):>14}  {_money(y.interest):>12}  "
            f"{_money(y.extra):>12}  {_money(y.fees):>8}  {_money(y.ending_balance):>14}"
        )


def print_schedule(data: ScheduleResponse) -> None:
    _header("Payment Schedule")
    print(
        f"  {'#':>4}  {'Due':>10}  {'Payment':>12}  {'Interest':>11}  {'Principal':>12}  "
        f"{'Extra':>11}  {'Fee':>6}  {'Balance':>14}"
    )
    for p in data.payments:
        print(
            f"  {p.period:>4}  {p.due_date.isoformat():>10}  {_money(p.payment):>12}  "
            f"{_money(p.interest):>11}  {_money(p.principal):>12}  {_money(p.extra):>11}  "
            f"{_money(p.fee):>6}  {_money(p.balance):>14}"
        )


# ── Entry point ──────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loancalc",
        description="Calculate an installment loan's lifespan and the costs associated with it",
    )
    parser.add_argument("--loan", type=_decimal, default=settings.default_loan,
                        help=f"Total sum of the loan (default: {settings.default_loan})")
    length = parser.add_mutually_exclusive_group()
    length.add_argument("-t", "--terms", type=int, help="Number of terms to pay back the entire loan")
    length.add_argument("-y", "--years", type=int,
                        help=f"Number of years to pay back the loan (default: {settings.default_years})")
    parser.add_argument("--terms-per-year", type=int, default=settings.default_terms_per_year,
                        choices=[t.value for t in TermsPerYear], help="Number of terms per year")
    parser.add_argument("-i", "--interest", type=_decimal, default=settings.default_interest_pct,
                        help=f"Nominal interest per year in percent (default: {settings.default_interest_pct})")
    parser.add_argument("-f", "--fee", type=_decimal, default=settings.default_fee,
                        help=f"Fee charged with each installment (default: {settings.default_fee})")
    parser.add_argument("--administration-fee", type=_decimal, default=Decimal("0"),
                        help="One-off fee added to the loan sum")
    parser.add_argument("--start-date", type=date.fromisoformat, default=None,
                        help="Payout date, YYYY-MM-DD (default: today)")
    parser.add_argument("--due-day", default=settings.default_due_day,
                        help="Day of month installments are due: first, mid, end or 1-31")

    parser.add_argument("--extra-terms", type=int, default=0,
                        help="Number of terms to make an extra downpayment on, from the first term")
    parser.add_argument("--extra-amount", type=_decimal, default=settings.default_extra_amount,
                        help="Amount of each recurring extra downpayment")
    parser.add_argument("--extra-every", type=int, default=1,
                        help="Terms between recurring extra downpayments")
    parser.add_argument("--extra", type=_period_pair("amount"), action="append", default=[],
                        metavar="PERIOD:AMOUNT", help="One-off extra downpayment (repeatable)")
    parser.add_argument("--rate-change", type=_period_pair("percent"), action="append", default=[],
                        metavar="PERIOD:PERCENT", help="Change the interest from a term (repeatable)")
    parser.add_argument("--freeze", type=_period_pair("count", int), action="append", default=[],
                        metavar="PERIOD:COUNT", help="Interest-only installments from a term (repeatable)")

    parser.add_argument("--schedule", action="store_true", help="Print every installment")
    parser.add_argument("--yearly", action="store_true", help="Print the yearly summary")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--chart", metavar="PATH", help="Write the progress chart to an HTML file")
    parser.add_argument("--remote", metavar="URL", help="Compute through a running loancalc API")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def build_request(args: argparse.Namespace) -> ScheduleRequest:
    recurring = []
    if args.extra_terms > 0:
        recurring.append(RecurringExtraPaymentIn(
            amount=args.extra_amount, count=args.extra_terms, every=args.extra_every,
        ))

    return ScheduleRequest(
        loan=args.loan,
        interest_pct=args.interest,
        terms=args.terms,
        years=args.years,
        terms_per_year=args.terms_per_year,
        installment_fee=args.fee,
        administration_fee=args.administration_fee,
        start_date=args.start_date,
        due_day=args.due_day,
        extra_payments=[ExtraPaymentIn(period=p, amount=a) for p, a in args.extra],
        recurring_extra_payments=recurring,
        rate_changes=[RateChangeIn(period=p, interest_pct=r) for p, r in args.rate_change],
        repayment_freezes=[RepaymentFreezeIn(period=p, count=c) for p, c in args.freeze],
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        req = build_request(args)
    except ValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.remote:
        try:
            with ScheduleClient(args.remote) as client:
                data = client.schedule(req)
        except httpx.HTTPStatusError as e:
            print(f"error: {e.response.status_code} {e.response.text}", file=sys.stderr)
            return 1
        except httpx.HTTPError as e:
            print(f"error: could not reach {args.remote}: {e}", file=sys.stderr)
            return 1
    else:
        try:
            calc = build_calculator(req)
        except InvalidLoanError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        data = result_to_response(calc.compute())

    if args.json:
        print(data.model_dump_json(indent=2))
    else:
        print_summary(data)
        if args.yearly:
            print_yearly(data)
        if args.schedule:
            print_schedule(data)

    if args.chart:
        try:
            path = write_chart(data.summary, data.payments, args.chart)
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        if not args.json:
            print(f"\n  Chart written to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
