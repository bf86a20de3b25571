"""Services package."""

from expense_ledger.services.export import (
    ExportError,
    export_filename,
    export_json,
    write_export,
)
from expense_ledger.services.storage import (
    AuditStorageInterface,
    CorruptDataError,
    ExpenseStorageInterface,
    InMemoryAuditStorage,
    InMemoryExpenseStorage,
    JsonFileExpenseStorage,
    JsonLinesAuditStorage,
    StorageError,
)

__all__ = [
    # Export
    "ExportError",
    "export_filename",
    "export_json",
    "write_export",
    # Storage services
    "AuditStorageInterface",
    "CorruptDataError",
    "ExpenseStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryExpenseStorage",
    "JsonFileExpenseStorage",
    "JsonLinesAuditStorage",
    "StorageError",
]
