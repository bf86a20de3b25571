"""
Query package.

Pure derivations over ledger snapshots: filters, aggregates, trends,
budget evaluation and the combined report.
"""

from expense_ledger.queries.aggregates import (
    category_totals,
    current_month_total,
    daily_average,
    monthly_totals,
    sum_for_shown_set,
    total_all,
    total_for_month,
)
from expense_ledger.queries.budget import classify, evaluate, evaluate_month
from expense_ledger.queries.filters import (
    MONTH_NAMES,
    filter_by_category,
    filter_by_month,
    filter_expenses,
)
from expense_ledger.queries.report import ReportBuilder, round_money
from expense_ledger.queries.trends import (
    average_per_record,
    most_expensive_single,
    spend_in_trailing_window,
    summarize_trends,
    top_category_by_spend,
)

__all__ = [
    "MONTH_NAMES",
    "ReportBuilder",
    "average_per_record",
    "category_totals",
    "classify",
    "current_month_total",
    "daily_average",
    "evaluate",
    "evaluate_month",
    "filter_by_category",
    "filter_by_month",
    "filter_expenses",
    "monthly_totals",
    "most_expensive_single",
    "round_money",
    "spend_in_trailing_window",
    "sum_for_shown_set",
    "summarize_trends",
    "top_category_by_spend",
    "total_all",
    "total_for_month",
]
