"""
Budget evaluation.

Compares a month's spend against the configured monthly budget:

    percentage < warning           -> GOOD
    warning <= percentage < danger -> WARNING
    percentage >= danger           -> DANGER

Both thresholds are inclusive lower bounds and are checked in
ascending order, so DANGER overrides WARNING.
"""

from decimal import Decimal
from typing import Iterable, Optional, Union

from expense_ledger.errors import NotConfiguredError
from expense_ledger.models.expense import BudgetConfig, ExpenseRecord
from expense_ledger.models.report import BudgetEvaluation, BudgetStatus
from expense_ledger.queries.aggregates import current_month_total
from expense_ledger.queries.filters import DateLike

DEFAULT_WARNING_PERCENT = Decimal("90")
DEFAULT_DANGER_PERCENT = Decimal("100")

Number = Union[Decimal, int, float, str]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def classify(
    percentage: Decimal,
    warning_at: Decimal = DEFAULT_WARNING_PERCENT,
    danger_at: Decimal = DEFAULT_DANGER_PERCENT,
) -> BudgetStatus:
    status = BudgetStatus.GOOD
    if percentage >= warning_at:
        status = BudgetStatus.WARNING
    if percentage >= danger_at:
        status = BudgetStatus.DANGER
    return status


def evaluate(
    month_spend: Number,
    budget: Optional[Union[BudgetConfig, Number]],
    warning_at: Number = DEFAULT_WARNING_PERCENT,
    danger_at: Number = DEFAULT_DANGER_PERCENT,
) -> BudgetEvaluation:
    """
    Evaluate spend against a budget.

    Args:
        month_spend: Amount spent this month
        budget: The budget (a BudgetConfig or a positive number)
        warning_at: Percentage at which the status becomes WARNING
        danger_at: Percentage at which the status becomes DANGER

    Raises:
        NotConfiguredError: If no budget is configured
        ValueError: If the budget is not positive
    """
    if budget is None:
        raise NotConfiguredError()

    limit = budget.amount if isinstance(budget, BudgetConfig) else _to_decimal(budget)
    if limit <= 0:
        raise ValueError(f"Budget must be positive, got {limit}")

    spent = _to_decimal(month_spend)
    percentage = spent / limit * 100

    return BudgetEvaluation(
        budget=limit,
        spent=spent,
        percentage=percentage,
        remaining=limit - spent,
        status=classify(percentage, _to_decimal(warning_at), _to_decimal(danger_at)),
    )


def evaluate_month(
    records: Iterable[ExpenseRecord],
    budget: Optional[Union[BudgetConfig, Number]],
    reference_now: DateLike,
    warning_at: Number = DEFAULT_WARNING_PERCENT,
    danger_at: Number = DEFAULT_DANGER_PERCENT,
) -> BudgetEvaluation:
    """Evaluate the current calendar month's spend against the budget."""
    if budget is None:
        raise NotConfiguredError()
    return evaluate(
        current_month_total(records, reference_now),
        budget,
        warning_at=warning_at,
        danger_at=danger_at,
    )
