"""Shared fixtures: fixed dates and a record factory."""

import itertools
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from expense_ledger.models.expense import ExpenseCategory, ExpenseRecord

CREATED_AT = datetime(2024, 3, 15, 12, 30, 0, 250000, tzinfo=timezone.utc)


@pytest.fixture
def make_record():
    """Factory for valid ExpenseRecords with unique ids."""
    counter = itertools.count(1)

    def _make(
        amount="10.00",
        category=ExpenseCategory.OTHER,
        on=date(2024, 3, 15),
        name=None,
        notes="",
        expense_id=None,
    ) -> ExpenseRecord:
        n = next(counter)
        return ExpenseRecord(
            id=expense_id or f"exp-{n}",
            name=name or f"Expense {n}",
            amount=Decimal(str(amount)),
            category=category,
            date=on,
            notes=notes,
            created_at=CREATED_AT,
        )

    return _make


@pytest.fixture
def fixed_clock():
    """A clock that always returns the same instant."""
    return lambda: CREATED_AT
