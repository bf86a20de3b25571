"""
View selection filters.

Pure functions that pick the subsequence of records a host should
show. Input order is preserved; inputs are never modified.

NOTE: Month selection is deliberately asymmetric. "current" and
"last" are scoped to a month of a specific year, while a month name
("march") matches that month in every year.
"""

import datetime as dt
from typing import Iterable, Sequence, Union

from expense_ledger.models.expense import ExpenseCategory, ExpenseRecord

ALL = "all"
CURRENT_MONTH = "current"
LAST_MONTH = "last"

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

DateLike = Union[dt.date, dt.datetime]


def as_date(value: DateLike) -> dt.date:
    """Calendar date of a date or datetime."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def previous_month(year: int, month: int) -> tuple[int, int]:
    """(year, month) of the calendar month before the given one (months 1-12)."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def month_number(name: str) -> int | None:
    """1-12 for a full English month name in any casing, else None."""
    wanted = name.strip().lower()
    for index, month_name in enumerate(MONTH_NAMES, start=1):
        if month_name.lower() == wanted:
            return index
    return None


def filter_by_category(
    records: Iterable[ExpenseRecord],
    category: Union[ExpenseCategory, str],
) -> list[ExpenseRecord]:
    """Exact category match; "all" keeps everything."""
    if category == ALL:
        return list(records)

    label = category.value if isinstance(category, ExpenseCategory) else category
    return [record for record in records if record.category.value == label]


def filter_by_month(
    records: Iterable[ExpenseRecord],
    selector: str,
    reference_now: DateLike,
) -> list[ExpenseRecord]:
    """
    Select records by month.

    Args:
        records: Records to filter
        selector: "all", "current", "last" or a full month name
        reference_now: The point in time "current" and "last" refer to

    Returns:
        Matching records. A selector that is none of the above
        matches nothing.
    """
    selector = selector.strip().lower()
    if selector == ALL:
        return list(records)

    today = as_date(reference_now)

    if selector == CURRENT_MONTH:
        year, month = today.year, today.month
        return [
            record for record in records
            if record.date.year == year and record.date.month == month
        ]

    if selector == LAST_MONTH:
        year, month = previous_month(today.year, today.month)
        return [
            record for record in records
            if record.date.year == year and record.date.month == month
        ]

    month = month_number(selector)
    if month is None:
        return []
    return [record for record in records if record.date.month == month]


def filter_expenses(
    records: Sequence[ExpenseRecord],
    reference_now: DateLike,
    category: Union[ExpenseCategory, str] = ALL,
    month: str = ALL,
) -> list[ExpenseRecord]:
    """Apply the category and month filters together (logical AND)."""
    selected = filter_by_category(records, category)
    return filter_by_month(selected, month, reference_now)
