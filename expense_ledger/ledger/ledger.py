"""
Expense Ledger

DESIGN DECISION: The Ledger exclusively owns the expense collection.
Callers only ever get immutable records or tuple snapshots back, and
all derived views (filters, totals, trends, budget) are pure functions
over those snapshots in `expense_ledger.queries`.

The collection is ordered newest-inserted first. Ordering is cosmetic:
no aggregate depends on it except "first wins" tie-breaking.

The ledger does no I/O. The host persists `all()` after each mutation.
It is not thread-safe; serialise access externally if shared.
"""

from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional
from uuid import uuid4

import structlog

from expense_ledger.errors import NotFoundError, ValidationError
from expense_ledger.models.expense import (
    BudgetConfig,
    ExpenseRecord,
    normalize_timestamp,
    utc_now,
)
from expense_ledger.validation import ExpenseValidator, parse_amount

logger = structlog.get_logger(__name__)


def _default_id() -> str:
    return uuid4().hex


class Ledger:
    """
    The owned, mutable collection of expense records plus the
    optional monthly budget.
    """

    def __init__(
        self,
        records: Optional[Iterable[ExpenseRecord]] = None,
        budget: Optional[BudgetConfig] = None,
        validator: Optional[ExpenseValidator] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the ledger.

        Args:
            records: Initial records in stored order (newest first).
                     Later duplicates of an id are dropped.
            budget: Initial monthly budget, if any
            validator: Input validator (default ExpenseValidator)
            clock: Source of creation timestamps (default: UTC now)
            id_factory: Source of candidate ids (default: uuid4 hex)
        """
        self._records: list[ExpenseRecord] = []
        self._budget = budget
        self._validator = validator or ExpenseValidator()
        self._clock = clock or utc_now
        self._id_factory = id_factory or _default_id

        seen: set[str] = set()
        for record in records or ():
            if record.id in seen:
                logger.warning("duplicate_expense_id_dropped", expense_id=record.id)
                continue
            seen.add(record.id)
            self._records.append(record)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def all(self) -> tuple[ExpenseRecord, ...]:
        """Read-only snapshot in stored order."""
        return tuple(self._records)

    def get(self, expense_id: str) -> Optional[ExpenseRecord]:
        index = self._index_of(expense_id)
        return None if index is None else self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, expense_id: object) -> bool:
        return isinstance(expense_id, str) and self._index_of(expense_id) is not None

    def _index_of(self, expense_id: str) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == expense_id:
                return index
        return None

    def _new_id(self) -> str:
        existing = {record.id for record in self._records}
        candidate = self._id_factory()
        while candidate in existing:
            candidate = self._id_factory()
        return candidate

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, data: Mapping[str, Any]) -> ExpenseRecord:
        """
        Validate input and insert a new expense at the front.

        Raises:
            ValidationError: naming the first invalid field
        """
        fields = self._validator.validate(data)

        record = ExpenseRecord(
            id=self._new_id(),
            created_at=normalize_timestamp(self._clock()),
            **fields.model_dump(),
        )
        self._records.insert(0, record)

        logger.info(
            "expense_added",
            expense_id=record.id,
            category=record.category.value,
            amount=str(record.amount),
        )
        return record

    def update(self, expense_id: str, data: Mapping[str, Any]) -> ExpenseRecord:
        """
        Replace every field of an expense except id and created_at.

        Raises:
            NotFoundError: If no expense has this id
            ValidationError: naming the first invalid field
        """
        index = self._index_of(expense_id)
        if index is None:
            raise NotFoundError(expense_id)

        fields = self._validator.validate(data)
        updated = self._records[index].model_copy(update=fields.model_dump())
        self._records[index] = updated

        logger.info("expense_updated", expense_id=expense_id)
        return updated

    def delete(self, expense_id: str) -> bool:
        """Remove an expense. Returns False (and does nothing) if absent."""
        index = self._index_of(expense_id)
        if index is None:
            logger.debug("expense_delete_noop", expense_id=expense_id)
            return False

        del self._records[index]
        logger.info("expense_deleted", expense_id=expense_id)
        return True

    def clear(self) -> int:
        """Remove every expense. Returns how many were removed."""
        removed = len(self._records)
        self._records.clear()
        logger.info("expenses_cleared", removed_count=removed)
        return removed

    def import_records(self, records: Iterable[ExpenseRecord]) -> int:
        """
        Prepend pre-built records whose ids are not yet present.

        Each inserted record lands in front of the previously inserted
        one. Returns how many records were inserted.
        """
        inserted = 0
        for record in records:
            if self._index_of(record.id) is not None:
                continue
            self._records.insert(0, record)
            inserted += 1

        logger.info("expenses_imported", inserted_count=inserted)
        return inserted

    # ------------------------------------------------------------------
    # Budget
    # ------------------------------------------------------------------

    @property
    def budget(self) -> Optional[BudgetConfig]:
        return self._budget

    def set_budget(self, amount: Any) -> BudgetConfig:
        """
        Set the monthly budget.

        Raises:
            ValidationError: If the amount is missing, non-finite or not positive
        """
        value, issue = parse_amount(amount)
        if issue is not None:
            budget_issue = issue.model_copy(update={"field": "budget"})
            raise ValidationError("budget", issue.message, budget_issue)

        self._budget = BudgetConfig(amount=value)
        logger.info("budget_set", amount=str(value))
        return self._budget

    def clear_budget(self) -> bool:
        """Remove the monthly budget. Returns whether one was set."""
        had_budget = self._budget is not None
        self._budget = None
        if had_budget:
            logger.info("budget_cleared")
        return had_budget
