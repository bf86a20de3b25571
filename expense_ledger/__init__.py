"""
Expense Ledger - Source Package

A personal expense tracking engine: records discrete expenses,
persists them through a swappable storage adapter, and derives
statistics, trends and a budget status from them.

DESIGN PRINCIPLES:
1. The ledger owns the records; everything else reads snapshots
2. Derived views are pure functions of (records, reference date)
3. Fail early, fail visibly - invalid input never mutates state
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Ledger Team"
