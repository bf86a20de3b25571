"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the local JSON files for another backend later
2. Use in-memory storage for testing
3. Keep the ledger itself free of any I/O

The interface is intentionally simple: whole-collection load and save,
plus the budget scalar. The host saves after every mutating call.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, Sequence

from expense_ledger.models.audit import AuditEvent
from expense_ledger.models.expense import ExpenseRecord


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> list[ExpenseRecord]:
        """
        Load every stored expense in stored order.

        Returns:
            The records; empty if nothing has been saved yet

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, records: Sequence[ExpenseRecord]) -> None:
        """
        Replace the stored collection with `records`.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def load_budget(self) -> Optional[Decimal]:
        """
        Load the monthly budget.

        Returns:
            The budget amount, or None when no budget is stored
        """
        pass

    @abstractmethod
    def save_budget(self, amount: Optional[Decimal]) -> None:
        """
        Store the monthly budget; None removes it.

        Raises:
            StorageError: If the write fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """Stored data exists but cannot be parsed."""
    pass
