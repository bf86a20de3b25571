"""
Spending aggregates.

All sums are exact Decimal arithmetic over the given records; rounding
for display happens in the report builder. An empty input always
produces zero, never an error.
"""

from decimal import Decimal
from typing import Iterable

from expense_ledger.models.expense import ExpenseCategory, ExpenseRecord
from expense_ledger.models.report import CategorySpend, ShownSummary
from expense_ledger.queries.filters import DateLike, as_date

ZERO = Decimal("0")


def total_all(records: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of every amount."""
    return sum((record.amount for record in records), ZERO)


def total_for_month(records: Iterable[ExpenseRecord], year: int, month: int) -> Decimal:
    """Sum of amounts dated in the given year and month (1-12)."""
    return sum(
        (
            record.amount for record in records
            if record.date.year == year and record.date.month == month
        ),
        ZERO,
    )


def current_month_total(records: Iterable[ExpenseRecord], reference_now: DateLike) -> Decimal:
    today = as_date(reference_now)
    return total_for_month(records, today.year, today.month)


def daily_average(records: Iterable[ExpenseRecord], reference_now: DateLike) -> Decimal:
    """
    Running average per day for the current month.

    Divides the month-to-date total by the day of the month (not by
    the number of days in the month), so day 1 divides by 1.
    """
    today = as_date(reference_now)
    return current_month_total(records, today) / today.day


def sum_for_shown_set(records: Iterable[ExpenseRecord]) -> ShownSummary:
    """Total and count for the currently shown (filtered) records."""
    total = ZERO
    count = 0
    for record in records:
        total += record.amount
        count += 1
    return ShownSummary(total=total, count=count)


def category_totals(records: Iterable[ExpenseRecord]) -> list[CategorySpend]:
    """
    Summed spend per category, for categories that have any.

    Categories appear in the order they are first seen in `records`.
    """
    totals: dict[ExpenseCategory, Decimal] = {}
    for record in records:
        totals[record.category] = totals.get(record.category, ZERO) + record.amount
    return [CategorySpend(category=category, total=total) for category, total in totals.items()]


def monthly_totals(records: Iterable[ExpenseRecord], year: int) -> list[Decimal]:
    """Twelve totals, January to December, for expenses dated in `year`."""
    totals = [ZERO] * 12
    for record in records:
        if record.date.year == year:
            totals[record.date.month - 1] += record.amount
    return totals
