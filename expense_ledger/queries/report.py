"""
Report Builder

DESIGN DECISION: The host never computes anything itself.
It hands a snapshot of the ledger plus a reference date to this
builder and renders the LedgerReport it gets back.

Filters only affect the "shown" part of the report. Statistics,
trends, budget and chart aggregates always cover every record.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence, Union

import structlog

from expense_ledger.config import AppSettings
from expense_ledger.models.expense import BudgetConfig, ExpenseCategory, ExpenseRecord
from expense_ledger.models.report import (
    BudgetEvaluation,
    CategorySpend,
    LedgerReport,
    ShownSummary,
    SpendingStats,
    TrendSummary,
)
from expense_ledger.queries.aggregates import (
    category_totals,
    current_month_total,
    daily_average,
    monthly_totals,
    sum_for_shown_set,
    total_all,
)
from expense_ledger.queries.budget import evaluate
from expense_ledger.queries.filters import ALL, DateLike, as_date, filter_expenses
from expense_ledger.queries.trends import summarize_trends

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to two decimals, halves away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class ReportBuilder:
    """
    Builds LedgerReports from record snapshots.

    Thresholds and the trailing window come from AppSettings.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or AppSettings()

    def build(
        self,
        records: Sequence[ExpenseRecord],
        reference_now: DateLike,
        budget: Optional[BudgetConfig] = None,
        category: Union[ExpenseCategory, str] = ALL,
        month: str = ALL,
    ) -> LedgerReport:
        """
        Build the full derived view of `records` as of `reference_now`.

        `budget` is None when no budget is configured; the report's
        budget section is then None as well.
        """
        today = as_date(reference_now)
        category_label = category.value if isinstance(category, ExpenseCategory) else category

        shown = filter_expenses(records, today, category=category, month=month)

        report = LedgerReport(
            reference_date=today,
            category_filter=category_label,
            month_filter=month,
            shown=shown,
            shown_summary=self._shown_summary(shown),
            stats=self._stats(records, today),
            trends=self._trends(records, today),
            budget=self._budget(records, today, budget),
            category_totals=[
                CategorySpend(category=item.category, total=round_money(item.total))
                for item in category_totals(records)
            ],
            monthly_totals=[round_money(total) for total in monthly_totals(records, today.year)],
        )

        logger.debug(
            "report_built",
            reference_date=today.isoformat(),
            category_filter=category_label,
            month_filter=month,
            shown_count=len(shown),
            record_count=len(records),
        )
        return report

    def _shown_summary(self, shown: Sequence[ExpenseRecord]) -> ShownSummary:
        summary = sum_for_shown_set(shown)
        return ShownSummary(total=round_money(summary.total), count=summary.count)

    def _stats(self, records: Sequence[ExpenseRecord], today: date) -> SpendingStats:
        return SpendingStats(
            total=round_money(total_all(records)),
            month_total=round_money(current_month_total(records, today)),
            daily_average=round_money(daily_average(records, today)),
        )

    def _trends(self, records: Sequence[ExpenseRecord], today: date) -> TrendSummary:
        trends = summarize_trends(records, today, self._settings.trailing_window_days)
        top = trends.top_category
        return trends.model_copy(update={
            "top_category": (
                CategorySpend(category=top.category, total=round_money(top.total))
                if top is not None else None
            ),
            "average_expense": (
                round_money(trends.average_expense)
                if trends.average_expense is not None else None
            ),
            "trailing_total": round_money(trends.trailing_total),
        })

    def _budget(
        self,
        records: Sequence[ExpenseRecord],
        today: date,
        budget: Optional[BudgetConfig],
    ) -> Optional[BudgetEvaluation]:
        if budget is None:
            return None

        evaluation = evaluate(
            current_month_total(records, today),
            budget,
            warning_at=Decimal(str(self._settings.budget_warning_percent)),
            danger_at=Decimal(str(self._settings.budget_danger_percent)),
        )
        # Status is decided on the exact percentage, before rounding
        return evaluation.model_copy(update={
            "spent": round_money(evaluation.spent),
            "percentage": round_money(evaluation.percentage),
            "remaining": round_money(evaluation.remaining),
        })
