"""
Audit Logger

DESIGN DECISION: Every change to the ledger or the budget produces an
AuditEvent, so the history of a data file can be reconstructed after a
clear or a bad import.

Events always go to the structlog stream. When an audit store is
configured they are appended there as well; a failing store is logged
and otherwise ignored, so bookkeeping never blocks the ledger.
"""

import logging
import sys
from typing import Optional

import structlog

from expense_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from expense_ledger.services.storage import AuditStorageInterface


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog on top of stdlib logging.

    Call once at startup; the host decides level and renderer.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Records ledger events to the log stream and, optionally, to an
    append-only AuditStorageInterface.
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    def log(self, event: AuditEvent) -> bool:
        """
        Emit one event at a log level matching its severity.

        Returns False only when a configured store failed to take it.
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_expense_added(
        self,
        expense_id: str,
        name: str,
        amount: str,
        category: str,
    ) -> None:
        """Log a new expense."""
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense_id,
            name=name,
            amount=amount,
            category=category,
        ))

    def log_expense_updated(self, expense_id: str, changed_fields: list[str]) -> None:
        """Log an expense edit."""
        self.log(AuditEventBuilder.expense_updated(
            expense_id=expense_id,
            changed_fields=changed_fields,
        ))

    def log_expense_deleted(self, expense_id: str, removed: bool) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id=expense_id, removed=removed))

    def log_expenses_cleared(self, removed_count: int) -> None:
        self.log(AuditEventBuilder.expenses_cleared(removed_count=removed_count))

    def log_sample_data_loaded(self, inserted_count: int) -> None:
        self.log(AuditEventBuilder.sample_data_loaded(inserted_count=inserted_count))

    def log_budget_set(self, amount: str) -> None:
        self.log(AuditEventBuilder.budget_set(amount=amount))

    def log_budget_cleared(self) -> None:
        self.log(AuditEventBuilder.budget_cleared())

    def log_validation_failed(
        self,
        field: str,
        message: str,
        expense_id: Optional[str] = None,
    ) -> None:
        """Log rejected input."""
        self.log(AuditEventBuilder.validation_failed(
            field=field,
            message=message,
            expense_id=expense_id,
        ))

    def log_expense_not_found(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_not_found(expense_id=expense_id))

    def log_data_exported(self, path: str, record_count: int) -> None:
        self.log(AuditEventBuilder.data_exported(path=path, record_count=record_count))

    def log_storage_error(self, operation: str, error_message: str) -> None:
        """Log a failed load or save."""
        self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
        ))
