"""
Demonstration data.

Six fixed-id expenses spread over the last two weeks. Loading them
twice is harmless: the ledger skips ids it already holds.
"""

import datetime as dt
from decimal import Decimal

from expense_ledger.models.expense import ExpenseCategory, ExpenseRecord

# (id, name, amount, category, days ago, notes)
_SAMPLES = (
    ("sample1", "Groceries", "85.50", ExpenseCategory.FOOD_AND_DINING, 0,
     "Weekly groceries from supermarket"),
    ("sample2", "Gasoline", "45.00", ExpenseCategory.TRANSPORTATION, 2,
     "Full tank"),
    ("sample3", "Netflix Subscription", "15.99", ExpenseCategory.ENTERTAINMENT, 5,
     "Monthly subscription"),
    ("sample4", "Electricity Bill", "120.75", ExpenseCategory.UTILITIES, 10,
     "Monthly electricity bill"),
    ("sample5", "New Shoes", "75.25", ExpenseCategory.SHOPPING, 15,
     "Running shoes"),
    ("sample6", "Dinner at Restaurant", "65.80", ExpenseCategory.FOOD_AND_DINING, 1,
     "Celebrating anniversary"),
)


def sample_expenses(today: dt.date, now: dt.datetime) -> list[ExpenseRecord]:
    """
    Build the sample records relative to `today` (expense dates)
    and `now` (creation timestamps).
    """
    return [
        ExpenseRecord(
            id=expense_id,
            name=name,
            amount=Decimal(amount),
            category=category,
            date=today - dt.timedelta(days=days_ago),
            notes=notes,
            created_at=now - dt.timedelta(days=days_ago),
        )
        for expense_id, name, amount, category, days_ago, notes in _SAMPLES
    ]
