"""
Trend analysis.

Trends are always computed over the full record set, independent of
whatever filters the host is showing.

Tie-breaking: a running leader is only replaced by a strictly greater
value, so on equal values the first one encountered wins.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional, Sequence

from expense_ledger.models.expense import ExpenseCategory, ExpenseRecord
from expense_ledger.models.report import CategorySpend, TrendSummary
from expense_ledger.queries.aggregates import ZERO, total_all
from expense_ledger.queries.filters import DateLike, as_date

DEFAULT_WINDOW_DAYS = 7


def top_category_by_spend(records: Sequence[ExpenseRecord]) -> Optional[CategorySpend]:
    """Category with the largest summed amount, or None without records."""
    totals: dict[ExpenseCategory, Decimal] = {}
    for record in records:
        totals[record.category] = totals.get(record.category, ZERO) + record.amount

    leader: Optional[CategorySpend] = None
    for category, total in totals.items():
        if leader is None or total > leader.total:
            leader = CategorySpend(category=category, total=total)
    return leader


def most_expensive_single(records: Sequence[ExpenseRecord]) -> Optional[ExpenseRecord]:
    """The record with the largest amount; first in stored order on ties."""
    most: Optional[ExpenseRecord] = None
    for record in records:
        if most is None or record.amount > most.amount:
            most = record
    return most


def average_per_record(records: Sequence[ExpenseRecord]) -> Optional[Decimal]:
    """Mean amount, or None for an empty set."""
    if not records:
        return None
    return total_all(records) / len(records)


def spend_in_trailing_window(
    records: Sequence[ExpenseRecord],
    reference_now: DateLike,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> Decimal:
    """
    Sum of amounts dated on or after `reference_now - window_days`.

    Compares calendar dates only. There is no upper bound, so
    future-dated expenses are included.
    """
    if window_days < 0:
        raise ValueError(f"window_days must be >= 0, got {window_days}")

    start = as_date(reference_now) - dt.timedelta(days=window_days)
    return sum((record.amount for record in records if record.date >= start), ZERO)


def summarize_trends(
    records: Sequence[ExpenseRecord],
    reference_now: DateLike,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> TrendSummary:
    return TrendSummary(
        top_category=top_category_by_spend(records),
        most_expensive=most_expensive_single(records),
        average_expense=average_per_record(records),
        trailing_total=spend_in_trailing_window(records, reference_now, window_days),
        window_days=window_days,
    )
