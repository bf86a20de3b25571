"""
Expense Input Validation

DESIGN DECISION: Validation runs field by field in a fixed order
(name, amount, category, date, notes) and reports every issue it
finds as a ValidationIssue. The ledger only needs the first one:
it raises ValidationError naming that field and mutates nothing.

IMPORTANT: Validation NEVER silently fixes issues beyond trimming
whitespace. Anything else is reported for the user to correct.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from expense_ledger.errors import ValidationError
from expense_ledger.models.expense import (
    ExpenseCategory,
    ExpenseFields,
    ValidationIssue,
)

DATE_FORMAT = "%Y-%m-%d"

CENT = Decimal("0.01")
# Fifteen significant digits survive a JSON (binary float) number exactly
MAX_AMOUNT = Decimal("9999999999999.99")


def _issue(
    field: str,
    issue_type: str,
    message: str,
    suggested_fix: Optional[str] = None,
) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type=issue_type,
        message=message,
        severity="error",
        suggested_fix=suggested_fix,
    )


def parse_amount(value: Any) -> tuple[Optional[Decimal], Optional[ValidationIssue]]:
    """
    Parse a user-supplied amount into a positive, finite Decimal
    rounded to cents (halves away from zero).

    Returns (amount, None) on success or (None, issue) on failure.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None, _issue(
            "amount", "missing", "Amount is required",
            suggested_fix="Enter how much the expense cost",
        )

    # bool is an int subclass; True is not an amount
    if isinstance(value, bool):
        return None, _issue("amount", "invalid_type", "Amount must be a number")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return None, _issue(
                "amount", "invalid_format", f"Amount '{value}' is not a number",
            )
    else:
        return None, _issue("amount", "invalid_type", "Amount must be a number")

    if not amount.is_finite():
        return None, _issue("amount", "invalid_value", "Amount must be a finite number")
    if amount <= 0:
        return None, _issue(
            "amount", "invalid_value", "Amount must be greater than zero",
            suggested_fix="Enter a positive amount",
        )
    if amount > MAX_AMOUNT:
        return None, _issue(
            "amount", "invalid_value", f"Amount must not exceed {MAX_AMOUNT}",
        )

    amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if amount <= 0:
        return None, _issue(
            "amount", "invalid_value", "Amount must be at least 0.01",
            suggested_fix="Enter an amount of at least one cent",
        )
    return amount, None


class ExpenseValidator:
    """
    Validates raw expense input for the ledger.

    Accepted input is a mapping with the keys `name`, `amount`,
    `category`, `date` and optionally `notes`.
    """

    def _check_name(self, value: Any) -> tuple[Optional[str], Optional[ValidationIssue]]:
        if value is None:
            return None, _issue(
                "name", "missing", "Name is required",
                suggested_fix="Describe what the money was spent on",
            )
        if not isinstance(value, str):
            return None, _issue("name", "invalid_type", "Name must be text")
        name = value.strip()
        if not name:
            return None, _issue(
                "name", "missing", "Name is required",
                suggested_fix="Describe what the money was spent on",
            )
        if len(name) > 200:
            return None, _issue("name", "too_long", "Name must be at most 200 characters")
        return name, None

    def _check_category(
        self,
        value: Any,
    ) -> tuple[Optional[ExpenseCategory], Optional[ValidationIssue]]:
        if isinstance(value, ExpenseCategory):
            return value, None
        if value is None or (isinstance(value, str) and not value.strip()):
            return None, _issue("category", "missing", "Category is required")
        if not isinstance(value, str):
            return None, _issue("category", "invalid_type", "Category must be text")
        try:
            return ExpenseCategory(value.strip()), None
        except ValueError:
            return None, _issue(
                "category", "unknown_category", f"Unknown category: {value}",
                suggested_fix="Choose one of: " + ", ".join(ExpenseCategory.labels()),
            )

    def _check_date(self, value: Any) -> tuple[Optional[dt.date], Optional[ValidationIssue]]:
        if isinstance(value, dt.datetime):
            return value.date(), None
        if isinstance(value, dt.date):
            return value, None
        if value is None or (isinstance(value, str) and not value.strip()):
            return None, _issue("date", "missing", "Date is required")
        if not isinstance(value, str):
            return None, _issue("date", "invalid_type", "Date must be a date or YYYY-MM-DD text")
        try:
            return dt.datetime.strptime(value.strip(), DATE_FORMAT).date(), None
        except ValueError:
            return None, _issue(
                "date", "invalid_format", f"'{value}' is not a valid calendar date",
                suggested_fix="Use the YYYY-MM-DD format",
            )

    def _check_notes(self, value: Any) -> tuple[Optional[str], Optional[ValidationIssue]]:
        if value is None:
            return "", None
        if not isinstance(value, str):
            return None, _issue("notes", "invalid_type", "Notes must be text")
        notes = value.strip()
        if len(notes) > 1000:
            return None, _issue("notes", "too_long", "Notes must be at most 1000 characters")
        return notes, None

    def _run_checks(
        self,
        data: Mapping[str, Any],
    ) -> tuple[dict[str, Any], list[ValidationIssue]]:
        values: dict[str, Any] = {}
        issues: list[ValidationIssue] = []

        checks = (
            ("name", self._check_name),
            ("amount", parse_amount),
            ("category", self._check_category),
            ("date", self._check_date),
            ("notes", self._check_notes),
        )
        for field, check in checks:
            value, issue = check(data.get(field))
            if issue is not None:
                issues.append(issue)
            else:
                values[field] = value

        return values, issues

    def check(self, data: Mapping[str, Any]) -> list[ValidationIssue]:
        """Return every issue found, in field order. Empty means valid."""
        _, issues = self._run_checks(data)
        return issues

    def validate(self, data: Mapping[str, Any]) -> ExpenseFields:
        """
        Validate and normalise expense input.

        Raises:
            ValidationError: naming the first failing field
        """
        values, issues = self._run_checks(data)
        if issues:
            first = issues[0]
            raise ValidationError(first.field, first.message, first)
        return ExpenseFields(**values)

    def summarize(self, issues: list[ValidationIssue]) -> str:
        """
        Generate a user-friendly summary of validation issues.

        This is what the host shows when asking the user to re-enter.
        """
        if not issues:
            return "✅ All fields look good."

        lines = ["❌ Please fix the following:"]
        for issue in issues:
            lines.append(f"   • {issue.message}")
            if issue.suggested_fix:
                lines.append(f"     💡 {issue.suggested_fix}")
        return "\n".join(lines)
