"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements local JSON files as the backend, but designed to be swappable.
"""

from expense_ledger.services.storage.interface import (
    AuditStorageInterface,
    CorruptDataError,
    ExpenseStorageInterface,
    StorageError,
)
from expense_ledger.services.storage.json_file import (
    JsonFileExpenseStorage,
    JsonLinesAuditStorage,
)
from expense_ledger.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryExpenseStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "ExpenseStorageInterface",
    # Exceptions
    "CorruptDataError",
    "StorageError",
    # Local JSON implementation
    "JsonFileExpenseStorage",
    "JsonLinesAuditStorage",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryExpenseStorage",
]
