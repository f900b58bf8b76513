"""Installment due date calculation."""

import calendar
from datetime import date


def _add_months(year: int, month: int, months: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def _on_day(year: int, month: int, day: int) -> date:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last))


def first_due_date(start_date: date, due_day: int) -> date:
    """First installment date after payout.

    Falls in the payout month when the due day has not passed yet,
    otherwise in the following month.
    """
    candidate = _on_day(start_date.year, start_date.month, due_day)
    if start_date.day > candidate.day:
        year, month = _add_months(start_date.year, start_date.month, 1)
        return _on_day(year, month, due_day)
    return candidate


def due_dates(start_date: date, due_day: int, terms: int, months_per_term: int) -> list[date]:
    """All ``terms`` due dates, ``months_per_term`` months apart."""
    first = first_due_date(start_date, due_day)
    dates = []
    for term in range(terms):
        year, month = _add_months(first.year, first.month, term * months_per_term)
        dates.append(_on_day(year, month, due_day))
    return dates
