"""Tests for the combined report builder."""

import pytest
from datetime import date
from decimal import Decimal

from expense_ledger.config import AppSettings
from expense_ledger.models.expense import BudgetConfig, ExpenseCategory
from expense_ledger.models.report import BudgetStatus
from expense_ledger.queries.report import ReportBuilder, round_money

TODAY = date(2024, 3, 10)


@pytest.fixture
def records(make_record):
    return [
        make_record(amount="50", category=ExpenseCategory.FOOD_AND_DINING, on=date(2024, 3, 9), expense_id="a"),
        make_record(amount="40", category=ExpenseCategory.SHOPPING, on=date(2024, 3, 1), expense_id="b"),
        make_record(amount="30", category=ExpenseCategory.FOOD_AND_DINING, on=date(2024, 2, 20), expense_id="c"),
        make_record(amount="10.005", category=ExpenseCategory.OTHER, on=date(2023, 7, 4), expense_id="d"),
    ]


class TestRoundMoney:
    """Tests for round_money."""

    @pytest.mark.parametrize(
        "value, expected",
        [("10.005", "10.01"), ("2.344", "2.34"), ("-1.005", "-1.01"), ("7", "7.00")],
    )
    def test_half_up(self, value, expected):
        assert round_money(Decimal(value)) == Decimal(expected)


class TestReportBuilder:
    """Tests for ReportBuilder.build."""

    def setup_method(self):
        self.builder = ReportBuilder(AppSettings())

    def test_filters_only_affect_shown(self, records):
        report = self.builder.build(records, TODAY, category="Food & Dining", month="current")

        assert [r.id for r in report.shown] == ["a"]
        assert report.shown_summary.total == Decimal("50.00")
        assert report.shown_summary.count == 1
        assert report.stats.total == Decimal("130.01")
        assert report.trends.top_category.category == ExpenseCategory.FOOD_AND_DINING

    def test_stats(self, records):
        report = self.builder.build(records, TODAY)
        assert report.stats.month_total == Decimal("90.00")
        assert report.stats.daily_average == Decimal("9.00")

    def test_trends_over_full_set(self, records):
        trends = self.builder.build(records, TODAY, month="last").trends
        assert trends.top_category.total == Decimal("80.00")
        assert trends.most_expensive.id == "a"
        assert trends.average_expense == Decimal("32.50")
        assert trends.trailing_total == Decimal("50.00")
        assert trends.window_days == 7

    def test_trailing_window_from_settings(self, records):
        builder = ReportBuilder(AppSettings(trailing_window_days=30))
        trends = builder.build(records, TODAY).trends
        assert trends.trailing_total == Decimal("120.00")
        assert trends.window_days == 30

    def test_budget_section(self, records):
        report = self.builder.build(records, TODAY, budget=BudgetConfig(amount=Decimal("100")))
        assert report.budget.spent == Decimal("90.00")
        assert report.budget.percentage == Decimal("90.00")
        assert report.budget.remaining == Decimal("10.00")
        assert report.budget.status == BudgetStatus.WARNING

    def test_status_uses_unrounded_percentage(self, make_record):
        """89.996% rounds to 90.00 for display but is still GOOD."""
        records = [make_record(amount="89.996", on=TODAY)]
        report = self.builder.build(records, TODAY, budget=BudgetConfig(amount=Decimal("100")))
        assert report.budget.percentage == Decimal("90.00")
        assert report.budget.status == BudgetStatus.GOOD

    def test_no_budget(self, records):
        assert self.builder.build(records, TODAY).budget is None

    def test_chart_series(self, records):
        report = self.builder.build(records, TODAY)
        assert [(c.category, c.total) for c in report.category_totals] == [
            (ExpenseCategory.FOOD_AND_DINING, Decimal("80.00")),
            (ExpenseCategory.SHOPPING, Decimal("40.00")),
            (ExpenseCategory.OTHER, Decimal("10.01")),
        ]
        assert report.monthly_totals[1] == Decimal("30.00")
        assert report.monthly_totals[2] == Decimal("90.00")
        assert report.monthly_totals[6] == Decimal("0.00")

    def test_filter_labels(self, records):
        report = self.builder.build(records, TODAY, category=ExpenseCategory.SHOPPING, month="march")
        assert report.category_filter == "Shopping"
        assert report.month_filter == "march"
        assert report.reference_date == TODAY

    def test_empty_ledger(self):
        report = self.builder.build([], TODAY)
        assert report.shown == []
        assert report.shown_summary.count == 0
        assert report.stats.total == Decimal("0.00")
        assert report.stats.daily_average == Decimal("0.00")
        assert report.trends.top_category is None
        assert report.trends.average_expense is None
        assert report.category_totals == []
        assert report.monthly_totals == [Decimal("0.00")] * 12


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
