"""
Data Models Package

This package contains all Pydantic models used in the Expense Ledger.
All data flowing through the system must conform to these schemas.
"""

from expense_ledger.models.expense import (
    BudgetConfig,
    ExpenseCategory,
    ExpenseFields,
    ExpenseRecord,
    ValidationIssue,
    format_timestamp,
    json_number,
    normalize_timestamp,
    utc_now,
)
from expense_ledger.models.report import (
    BudgetEvaluation,
    BudgetStatus,
    CategorySpend,
    LedgerReport,
    ShownSummary,
    SpendingStats,
    TrendSummary,
)
from expense_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "BudgetConfig",
    "ExpenseCategory",
    "ExpenseFields",
    "ExpenseRecord",
    "ValidationIssue",
    "format_timestamp",
    "json_number",
    "normalize_timestamp",
    "utc_now",
    # Derived values
    "BudgetEvaluation",
    "BudgetStatus",
    "CategorySpend",
    "LedgerReport",
    "ShownSummary",
    "SpendingStats",
    "TrendSummary",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
