"""Ledger package: the record store and its error types."""

from expense_ledger.errors import (
    LedgerError,
    NotConfiguredError,
    NotFoundError,
    ValidationError,
)
from expense_ledger.ledger.ledger import Ledger

__all__ = [
    "Ledger",
    "LedgerError",
    "NotConfiguredError",
    "NotFoundError",
    "ValidationError",
]
