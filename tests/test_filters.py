"""Tests for category and month view filters."""

import pytest
from datetime import date, datetime

from expense_ledger.models.expense import ExpenseCategory
from expense_ledger.queries.filters import (
    filter_by_category,
    filter_by_month,
    filter_expenses,
    month_number,
    previous_month,
)

MARCH_15 = date(2024, 3, 15)


@pytest.fixture
def spread(make_record):
    """Records spread over two years."""
    return [
        make_record(expense_id="mar24", on=date(2024, 3, 2), category=ExpenseCategory.FOOD_AND_DINING),
        make_record(expense_id="feb24", on=date(2024, 2, 28), category=ExpenseCategory.SHOPPING),
        make_record(expense_id="mar23", on=date(2023, 3, 31), category=ExpenseCategory.FOOD_AND_DINING),
        make_record(expense_id="dec23", on=date(2023, 12, 24), category=ExpenseCategory.SHOPPING),
    ]


def ids(records):
    return [record.id for record in records]


class TestCategoryFilter:
    """Tests for filter_by_category."""

    def test_all_keeps_everything(self, spread):
        assert filter_by_category(spread, "all") == spread

    def test_exact_match_preserves_order(self, spread):
        assert ids(filter_by_category(spread, "Shopping")) == ["feb24", "dec23"]

    def test_accepts_enum(self, spread):
        result = filter_by_category(spread, ExpenseCategory.FOOD_AND_DINING)
        assert ids(result) == ["mar24", "mar23"]

    def test_unknown_category_matches_nothing(self, spread):
        assert filter_by_category(spread, "Groceries") == []

    def test_input_is_not_modified(self, spread):
        before = list(spread)
        filter_by_category(spread, "Shopping")
        assert spread == before


class TestMonthFilter:
    """Tests for filter_by_month."""

    def test_all(self, spread):
        assert filter_by_month(spread, "all", MARCH_15) == spread

    def test_current_month_is_year_scoped(self, spread):
        assert ids(filter_by_month(spread, "current", MARCH_15)) == ["mar24"]

    def test_last_month(self, spread):
        assert ids(filter_by_month(spread, "last", MARCH_15)) == ["feb24"]

    def test_last_month_rolls_over_year(self, spread):
        """In January, "last" means December of the previous year."""
        result = filter_by_month(spread, "last", date(2024, 1, 10))
        assert ids(result) == ["dec23"]

    def test_month_name_matches_any_year(self, spread):
        assert ids(filter_by_month(spread, "march", MARCH_15)) == ["mar24", "mar23"]

    def test_month_name_is_case_insensitive(self, spread):
        assert ids(filter_by_month(spread, "December", MARCH_15)) == ["dec23"]

    def test_unknown_selector_matches_nothing(self, spread):
        assert filter_by_month(spread, "someday", MARCH_15) == []

    def test_accepts_datetime_reference(self, spread):
        result = filter_by_month(spread, "current", datetime(2024, 3, 31, 23, 59))
        assert ids(result) == ["mar24"]


class TestCombinedFilter:
    """Tests for filter_expenses."""

    def test_filters_are_anded(self, spread):
        result = filter_expenses(spread, MARCH_15, category="Food & Dining", month="current")
        assert ids(result) == ["mar24"]

    def test_defaults_show_everything(self, spread):
        assert filter_expenses(spread, MARCH_15) == spread

    def test_empty_input(self):
        assert filter_expenses([], MARCH_15, category="Shopping", month="last") == []


class TestMonthHelpers:
    """Tests for month helper functions."""

    @pytest.mark.parametrize(
        "year, month, expected",
        [(2024, 1, (2023, 12)), (2024, 3, (2024, 2)), (2024, 12, (2024, 11))],
    )
    def test_previous_month(self, year, month, expected):
        assert previous_month(year, month) == expected

    def test_month_number(self):
        assert month_number("January") == 1
        assert month_number(" sEpTeMbEr ") == 9
        assert month_number("Sept") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
