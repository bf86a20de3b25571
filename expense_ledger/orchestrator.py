"""
Main Orchestrator for Expense Ledger

This module ties together the ledger, storage, audit logging, export
and the report builder, and is what a host application (web page,
CLI, notebook) talks to.

DESIGN DECISION: The orchestrator enforces the boundaries:
- The ledger only changes through validated operations
- Every successful mutation is persisted immediately
- Every mutation and every rejection is audited

"Now" is injectable (`clock` for creation timestamps, `today` for the
reference date of reports and exports) so behaviour is reproducible.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

import structlog

from expense_ledger.audit import AuditLogger, configure_logging
from expense_ledger.config import AppSettings, Settings, get_settings
from expense_ledger.errors import NotFoundError, ValidationError
from expense_ledger.ledger import Ledger
from expense_ledger.ledger.samples import sample_expenses
from expense_ledger.models.expense import (
    BudgetConfig,
    ExpenseCategory,
    ExpenseRecord,
    utc_now,
)
from expense_ledger.models.report import BudgetEvaluation, LedgerReport
from expense_ledger.queries import ReportBuilder, evaluate_month
from expense_ledger.queries.filters import ALL, DateLike, as_date
from expense_ledger.services.export import write_export
from expense_ledger.services.storage import (
    ExpenseStorageInterface,
    JsonFileExpenseStorage,
    JsonLinesAuditStorage,
    StorageError,
)

logger = structlog.get_logger(__name__)

_EDITABLE_FIELDS = ("name", "amount", "category", "date", "notes")


class ExpenseTracker:
    """
    Host-facing facade over one ledger.

    Flow for every mutation:
    1. Ledger validates and applies the change (or raises, unchanged)
    2. Storage saves the new state
    3. Audit logger records what happened
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
        today: Optional[Callable[[], date]] = None,
        export_dir: Path = Path("."),
    ):
        self._storage = storage
        self._audit = audit_logger or AuditLogger()
        self._settings = settings or AppSettings()
        self._clock = clock or utc_now
        self._today = today or date.today
        self._export_dir = Path(export_dir)
        self._report_builder = ReportBuilder(self._settings)

        try:
            records = storage.load()
            budget_amount = storage.load_budget()
        except StorageError as e:
            self._audit.log_storage_error("load", str(e))
            raise

        self._ledger = Ledger(
            records=records,
            budget=BudgetConfig(amount=budget_amount) if budget_amount is not None else None,
            clock=self._clock,
        )
        logger.info(
            "tracker_loaded",
            expense_count=len(self._ledger),
            budget_configured=budget_amount is not None,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def expenses(self) -> tuple[ExpenseRecord, ...]:
        return self._ledger.all()

    @property
    def budget(self) -> Optional[BudgetConfig]:
        return self._ledger.budget

    def get_expense(self, expense_id: str) -> Optional[ExpenseRecord]:
        return self._ledger.get(expense_id)

    def _reference(self, reference_now: Optional[DateLike]) -> date:
        return as_date(reference_now) if reference_now is not None else self._today()

    def report(
        self,
        category: Union[ExpenseCategory, str] = ALL,
        month: str = ALL,
        reference_now: Optional[DateLike] = None,
    ) -> LedgerReport:
        """Build the derived view for the given filters."""
        return self._report_builder.build(
            self._ledger.all(),
            self._reference(reference_now),
            budget=self._ledger.budget,
            category=category,
            month=month,
        )

    def evaluate_budget(self, reference_now: Optional[DateLike] = None) -> BudgetEvaluation:
        """
        Evaluate this month's spend against the budget.

        Raises:
            NotConfiguredError: If no budget is set
        """
        return evaluate_month(
            self._ledger.all(),
            self._ledger.budget,
            self._reference(reference_now),
            warning_at=str(self._settings.budget_warning_percent),
            danger_at=str(self._settings.budget_danger_percent),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _persist(self) -> None:
        try:
            self._storage.save(self._ledger.all())
        except StorageError as e:
            self._audit.log_storage_error("save", str(e))
            raise

    def _persist_budget(self) -> None:
        budget = self._ledger.budget
        try:
            self._storage.save_budget(budget.amount if budget else None)
        except StorageError as e:
            self._audit.log_storage_error("save_budget", str(e))
            raise

    def add_expense(self, data: Mapping[str, Any]) -> ExpenseRecord:
        """
        Add an expense.

        Raises:
            ValidationError: naming the first invalid field
            StorageError: If the new state could not be saved
        """
        try:
            record = self._ledger.add(data)
        except ValidationError as e:
            self._audit.log_validation_failed(e.field, e.message)
            raise

        self._persist()
        self._audit.log_expense_added(
            expense_id=record.id,
            name=record.name,
            amount=str(record.amount),
            category=record.category.value,
        )
        return record

    def update_expense(self, expense_id: str, data: Mapping[str, Any]) -> ExpenseRecord:
        """
        Replace an expense's editable fields.

        Raises:
            NotFoundError: If the id is unknown
            ValidationError: naming the first invalid field
            StorageError: If the new state could not be saved
        """
        before = self._ledger.get(expense_id)
        try:
            updated = self._ledger.update(expense_id, data)
        except NotFoundError:
            self._audit.log_expense_not_found(expense_id)
            raise
        except ValidationError as e:
            self._audit.log_validation_failed(e.field, e.message, expense_id=expense_id)
            raise

        self._persist()
        changed = [
            field for field in _EDITABLE_FIELDS
            if getattr(before, field) != getattr(updated, field)
        ]
        self._audit.log_expense_updated(expense_id, changed)
        return updated

    def delete_expense(self, expense_id: str) -> bool:
        """Delete an expense. Deleting an unknown id is a no-op."""
        removed = self._ledger.delete(expense_id)
        if removed:
            self._persist()
        self._audit.log_expense_deleted(expense_id, removed)
        return removed

    def clear_all(self) -> int:
        """Delete every expense. Returns how many were removed."""
        removed = self._ledger.clear()
        self._persist()
        self._audit.log_expenses_cleared(removed)
        return removed

    def load_sample_data(self, reference_now: Optional[DateLike] = None) -> int:
        """Insert the demonstration expenses that are not already present."""
        samples = sample_expenses(self._reference(reference_now), self._clock())
        inserted = self._ledger.import_records(samples)
        if inserted:
            self._persist()
        self._audit.log_sample_data_loaded(inserted)
        return inserted

    def set_budget(self, amount: Any) -> BudgetConfig:
        """
        Set the monthly budget.

        Raises:
            ValidationError: If the amount is not a positive number
        """
        try:
            budget = self._ledger.set_budget(amount)
        except ValidationError as e:
            self._audit.log_validation_failed(e.field, e.message)
            raise

        self._persist_budget()
        self._audit.log_budget_set(str(budget.amount))
        return budget

    def clear_budget(self) -> bool:
        """Remove the monthly budget. Returns whether one was set."""
        had_budget = self._ledger.clear_budget()
        self._persist_budget()
        if had_budget:
            self._audit.log_budget_cleared()
        return had_budget

    def export(self, directory: Optional[Path] = None) -> Path:
        """
        Write `expenses-<today>.json` with every expense.

        Returns:
            Path of the written file

        Raises:
            ExportError: If the file could not be written
        """
        records = self._ledger.all()
        try:
            path = write_export(records, directory or self._export_dir, self._today())
        except StorageError as e:
            self._audit.log_storage_error("export", str(e))
            raise
        self._audit.log_data_exported(str(path), len(records))
        return path


def create_app_components(
    settings: Optional[Settings] = None,
    use_audit_storage: bool = True,
) -> ExpenseTracker:
    """
    Factory function to create a file-backed tracker from configuration.

    Args:
        settings: Root settings (default: cached get_settings())
        use_audit_storage: Whether to persist audit events to the
                    JSON-lines audit log. Set to False for local-only logging.

    Returns:
        The configured ExpenseTracker
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings.log_level, app_settings.log_json)

    audit_storage = (
        JsonLinesAuditStorage(storage_settings.audit_path)
        if use_audit_storage else None
    )

    return ExpenseTracker(
        storage=JsonFileExpenseStorage(
            storage_settings.expenses_path,
            storage_settings.budget_path,
        ),
        audit_logger=AuditLogger(audit_storage),
        settings=app_settings,
        export_dir=storage_settings.export_dir,
    )
