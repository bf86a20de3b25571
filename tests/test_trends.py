"""Tests for trend analysis."""

import pytest
from datetime import date
from decimal import Decimal

from expense_ledger.models.expense import ExpenseCategory
from expense_ledger.queries.trends import (
    average_per_record,
    most_expensive_single,
    spend_in_trailing_window,
    summarize_trends,
    top_category_by_spend,
)

FOOD = ExpenseCategory.FOOD_AND_DINING
SHOPPING = ExpenseCategory.SHOPPING


class TestTopCategory:
    """Tests for top_category_by_spend."""

    def test_summed_spend_wins(self, make_record):
        records = [
            make_record(amount="50", category=FOOD),
            make_record(amount="40", category=SHOPPING),
            make_record(amount="30", category=FOOD),
        ]
        top = top_category_by_spend(records)
        assert top.category == FOOD
        assert top.total == Decimal("80")

    def test_tie_goes_to_first_seen(self, make_record):
        records = [
            make_record(amount="20", category=SHOPPING),
            make_record(amount="20", category=FOOD),
        ]
        assert top_category_by_spend(records).category == SHOPPING

    def test_empty(self):
        assert top_category_by_spend([]) is None


class TestMostExpensive:
    """Tests for most_expensive_single."""

    def test_largest_amount(self, make_record):
        records = [make_record(amount="5"), make_record(amount="120.75"), make_record(amount="80")]
        assert most_expensive_single(records).amount == Decimal("120.75")

    def test_tie_goes_to_first_in_order(self, make_record):
        records = [
            make_record(amount="9", expense_id="first"),
            make_record(amount="9", expense_id="second"),
        ]
        assert most_expensive_single(records).id == "first"

    def test_empty(self):
        assert most_expensive_single([]) is None


class TestAverage:
    """Tests for average_per_record."""

    def test_mean(self, make_record):
        records = [make_record(amount="10"), make_record(amount="20"), make_record(amount="30")]
        assert average_per_record(records) == Decimal("20")

    def test_empty_is_none(self):
        assert average_per_record([]) is None


class TestTrailingWindow:
    """Tests for spend_in_trailing_window."""

    def test_window_boundary_is_inclusive(self, make_record):
        records = [
            make_record(amount="1", on=date(2024, 3, 8)),
            make_record(amount="2", on=date(2024, 3, 7)),
            make_record(amount="4", on=date(2024, 3, 15)),
        ]
        assert spend_in_trailing_window(records, date(2024, 3, 15)) == Decimal("5")

    def test_future_dates_are_included(self, make_record):
        records = [make_record(amount="3", on=date(2024, 4, 1))]
        assert spend_in_trailing_window(records, date(2024, 3, 15)) == Decimal("3")

    def test_custom_window(self, make_record):
        records = [make_record(amount="6", on=date(2024, 3, 1))]
        assert spend_in_trailing_window(records, date(2024, 3, 15), window_days=30) == Decimal("6")
        assert spend_in_trailing_window(records, date(2024, 3, 15), window_days=0) == 0

    def test_negative_window_rejected(self):
        with pytest.raises(ValueError):
            spend_in_trailing_window([], date(2024, 3, 15), window_days=-1)


class TestSummarizeTrends:
    """Tests for summarize_trends."""

    def test_empty_collection(self):
        trends = summarize_trends([], date(2024, 3, 15))
        assert trends.top_category is None
        assert trends.most_expensive is None
        assert trends.average_expense is None
        assert trends.trailing_total == 0
        assert trends.window_days == 7

    def test_populated(self, make_record):
        records = [
            make_record(amount="50", category=FOOD, on=date(2024, 3, 14)),
            make_record(amount="40", category=SHOPPING, on=date(2024, 1, 1)),
        ]
        trends = summarize_trends(records, date(2024, 3, 15))
        assert trends.top_category.category == FOOD
        assert trends.most_expensive.amount == Decimal("50")
        assert trends.average_expense == Decimal("45")
        assert trends.trailing_total == Decimal("50")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
