"""Input validation package."""

from expense_ledger.validation.validator import ExpenseValidator, parse_amount

__all__ = ["ExpenseValidator", "parse_amount"]
