"""
In-memory storage implementations.

Used by tests and by hosts that persist elsewhere. Records are kept
in their serialized form so a load always goes through the same
validation as a file load.
"""

from decimal import Decimal
from typing import Any, Optional, Sequence

from expense_ledger.models.audit import AuditEvent
from expense_ledger.models.expense import ExpenseRecord
from expense_ledger.services.storage.interface import (
    AuditStorageInterface,
    ExpenseStorageInterface,
)


class InMemoryExpenseStorage(ExpenseStorageInterface):
    """Keeps the saved collection and budget in memory."""

    def __init__(
        self,
        records: Optional[Sequence[ExpenseRecord]] = None,
        budget: Optional[Decimal] = None,
    ):
        self._rows: list[dict[str, Any]] = [r.to_storage_dict() for r in records or ()]
        self._budget = budget
        self.save_count = 0

    def load(self) -> list[ExpenseRecord]:
        return [ExpenseRecord.model_validate(row) for row in self._rows]

    def save(self, records: Sequence[ExpenseRecord]) -> None:
        self._rows = [record.to_storage_dict() for record in records]
        self.save_count += 1

    def load_budget(self) -> Optional[Decimal]:
        return self._budget

    def save_budget(self, amount: Optional[Decimal]) -> None:
        self._budget = amount


class InMemoryAuditStorage(AuditStorageInterface):
    """Keeps audit events in a list, oldest first."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self.events))[:limit]
