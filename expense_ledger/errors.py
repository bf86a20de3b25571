"""
Ledger error taxonomy.

All of these are contracts the host is expected to handle (usually by
showing a message); none of them leave the ledger partially updated.
"""

from typing import Optional

from expense_ledger.models.expense import ValidationIssue


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class ValidationError(LedgerError):
    """
    An add/update input failed validation.

    `field` names the first failing field; nothing was mutated.
    """

    def __init__(
        self,
        field: str,
        message: str,
        issue: Optional[ValidationIssue] = None,
    ):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.issue = issue or ValidationIssue(
            field=field,
            issue_type="invalid_value",
            message=message,
        )


class NotFoundError(LedgerError):
    """An update targeted an expense id that is not in the ledger."""

    def __init__(self, expense_id: str):
        super().__init__(f"Expense not found: {expense_id}")
        self.expense_id = expense_id


class NotConfiguredError(LedgerError):
    """Budget evaluation was requested while no budget is set."""

    def __init__(self, message: str = "No monthly budget is configured"):
        super().__init__(message)
