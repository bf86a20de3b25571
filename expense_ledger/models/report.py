"""
Derived-value models.

Everything the query layer hands back to a host: summaries of the
currently shown records, spending statistics, trend facts and the
budget status. These are plain immutable data; rendering them is
the host's job.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from expense_ledger.models.expense import ExpenseCategory, ExpenseRecord


class BudgetStatus(str, Enum):
    """
    Budget usage status.

    GOOD below the warning threshold, WARNING from the warning
    threshold, DANGER from the danger threshold upwards.
    """
    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def message(self) -> str:
        return _BUDGET_MESSAGES[self]


_BUDGET_MESSAGES = {
    BudgetStatus.GOOD: "Within budget",
    BudgetStatus.WARNING: "Approaching budget limit",
    BudgetStatus.DANGER: "Over budget",
}


class ShownSummary(BaseModel):
    """Total and count of the records in the current filtered view."""
    model_config = ConfigDict(frozen=True)

    total: Decimal = Decimal("0")
    count: int = Field(default=0, ge=0)


class CategorySpend(BaseModel):
    """Summed spend for one category."""
    model_config = ConfigDict(frozen=True)

    category: ExpenseCategory
    total: Decimal


class BudgetEvaluation(BaseModel):
    """Result of comparing a month's spend against the budget."""
    model_config = ConfigDict(frozen=True)

    budget: Decimal
    spent: Decimal
    percentage: Decimal = Field(
        ...,
        description="Spend as a percentage of the budget"
    )
    remaining: Decimal = Field(
        ...,
        description="Budget minus spend; negative when over budget"
    )
    status: BudgetStatus

    @property
    def message(self) -> str:
        return self.status.message

    @property
    def progress_percent(self) -> Decimal:
        """Percentage capped at 100, for progress bars."""
        return min(self.percentage, Decimal("100"))


class SpendingStats(BaseModel):
    """Headline statistics over all records."""
    model_config = ConfigDict(frozen=True)

    total: Decimal
    month_total: Decimal
    daily_average: Decimal


class TrendSummary(BaseModel):
    """
    Trend facts, always computed over every record
    regardless of the active filters.
    """
    model_config = ConfigDict(frozen=True)

    top_category: Optional[CategorySpend] = None
    most_expensive: Optional[ExpenseRecord] = None
    average_expense: Optional[Decimal] = None
    trailing_total: Decimal = Decimal("0")
    window_days: int = Field(default=7, ge=0)


class LedgerReport(BaseModel):
    """
    One complete derived snapshot of the ledger.

    Money values are rounded to two decimals.
    """
    model_config = ConfigDict(frozen=True)

    reference_date: dt.date
    category_filter: str = "all"
    month_filter: str = "all"

    shown: list[ExpenseRecord] = Field(default_factory=list)
    shown_summary: ShownSummary
    stats: SpendingStats
    trends: TrendSummary
    budget: Optional[BudgetEvaluation] = None

    category_totals: list[CategorySpend] = Field(default_factory=list)
    monthly_totals: list[Decimal] = Field(
        default_factory=list,
        description="Twelve month totals for the reference year"
    )
