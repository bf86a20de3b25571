"""
Audit Models for Expense Ledger

Each ledger mutation, rejected input, export and storage failure
becomes one AuditEvent. Events are written once and never edited;
the JSON-lines store only ever appends.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expense lifecycle
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_CLEARED = "expenses_cleared"
    SAMPLE_DATA_LOADED = "sample_data_loaded"

    # Budget
    BUDGET_SET = "budget_set"
    BUDGET_CLEARED = "budget_cleared"

    # Rejections
    VALIDATION_FAILED = "validation_failed"
    EXPENSE_NOT_FOUND = "expense_not_found"

    # Data movement
    DATA_EXPORTED = "data_exported"
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    One entry in the audit trail.

    `entity_id` is the expense id for expense events and None for
    ledger-wide events such as a clear.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which expense is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'budget', 'export')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Flat keyword arguments for structlog."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }

    def to_json_line(self) -> str:
        """Serialize as one line of the JSON-lines audit file."""
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False)


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, name, amount, category)
        event = AuditEventBuilder.budget_cleared()
    """

    @staticmethod
    def expense_added(
        expense_id: str,
        name: str,
        amount: str,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {name} - {amount}",
            details={
                "name": name,
                "amount": amount,
                "category": category,
            },
        )

    @staticmethod
    def expense_updated(
        expense_id: str,
        changed_fields: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense updated ({len(changed_fields)} fields changed)",
            details={
                "changed_fields": changed_fields,
            },
        )

    @staticmethod
    def expense_deleted(expense_id: str, removed: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description=(
                "Expense deleted" if removed else "Delete requested for unknown expense"
            ),
            details={
                "removed": removed,
            },
        )

    @staticmethod
    def expenses_cleared(removed_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_CLEARED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            description=f"All expenses cleared ({removed_count} removed)",
            details={
                "removed_count": removed_count,
            },
        )

    @staticmethod
    def sample_data_loaded(inserted_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAMPLE_DATA_LOADED,
            entity_type="ledger",
            description=f"Sample data loaded ({inserted_count} new expenses)",
            details={
                "inserted_count": inserted_count,
            },
        )

    @staticmethod
    def budget_set(amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            description=f"Monthly budget set to {amount}",
            details={
                "amount": amount,
            },
        )

    @staticmethod
    def budget_cleared() -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_CLEARED,
            entity_type="budget",
            description="Monthly budget cleared",
        )

    @staticmethod
    def validation_failed(
        field: str,
        message: str,
        expense_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Validation failed on '{field}'",
            details={
                "field": field,
            },
            error_message=message,
        )

    @staticmethod
    def expense_not_found(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=expense_id,
            description="Update requested for unknown expense",
        )

    @staticmethod
    def data_exported(path: str, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_EXPORTED,
            entity_type="export",
            description=f"Exported {record_count} expenses",
            details={
                "path": path,
                "record_count": record_count,
            },
        )

    @staticmethod
    def storage_error(operation: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            details={
                "operation": operation,
            },
            error_message=error_message,
        )
