"""Tests for expense input validation."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from expense_ledger.errors import ValidationError
from expense_ledger.models.expense import ExpenseCategory
from expense_ledger.validation import ExpenseValidator, parse_amount


def valid_input(**overrides):
    data = {
        "name": "Coffee",
        "amount": "3.50",
        "category": "Food & Dining",
        "date": "2024-03-10",
        "notes": "  oat milk  ",
    }
    data.update(overrides)
    return data


class TestExpenseValidator:
    """Tests for ExpenseValidator.validate and check."""

    def setup_method(self):
        self.validator = ExpenseValidator()

    def test_valid_input_is_normalised(self):
        fields = self.validator.validate(valid_input())
        assert fields.name == "Coffee"
        assert fields.amount == Decimal("3.50")
        assert fields.category == ExpenseCategory.FOOD_AND_DINING
        assert fields.date == date(2024, 3, 10)
        assert fields.notes == "oat milk"

    def test_notes_are_optional(self):
        data = valid_input()
        del data["notes"]
        assert self.validator.validate(data).notes == ""

    def test_accepts_native_types(self):
        fields = self.validator.validate(valid_input(
            amount=12,
            category=ExpenseCategory.HOUSING,
            date=datetime(2024, 3, 10, 18, 45),
        ))
        assert fields.amount == Decimal("12")
        assert fields.category == ExpenseCategory.HOUSING
        assert fields.date == date(2024, 3, 10)

    def test_float_amount_keeps_its_decimal_value(self):
        assert self.validator.validate(valid_input(amount=0.1)).amount == Decimal("0.1")

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_missing_name(self, name):
        with pytest.raises(ValidationError) as excinfo:
            self.validator.validate(valid_input(name=name))
        assert excinfo.value.field == "name"

    @pytest.mark.parametrize(
        "amount",
        [None, "", "abc", 0, "-1", -0.01, True, float("nan"), float("inf"), "Infinity"],
    )
    def test_invalid_amount(self, amount):
        with pytest.raises(ValidationError) as excinfo:
            self.validator.validate(valid_input(amount=amount))
        assert excinfo.value.field == "amount"

    @pytest.mark.parametrize("category", ["Groceries", "food & dining", "", None, 3])
    def test_invalid_category(self, category):
        with pytest.raises(ValidationError) as excinfo:
            self.validator.validate(valid_input(category=category))
        assert excinfo.value.field == "category"

    @pytest.mark.parametrize("value", ["2024-02-30", "2024-13-01", "yesterday", "", None, 20240101])
    def test_invalid_date(self, value):
        with pytest.raises(ValidationError) as excinfo:
            self.validator.validate(valid_input(date=value))
        assert excinfo.value.field == "date"

    def test_first_failing_field_is_reported(self):
        """Amount is checked before category and date."""
        with pytest.raises(ValidationError) as excinfo:
            self.validator.validate(valid_input(amount="-3", category="Nope", date="bad"))
        assert excinfo.value.field == "amount"
        assert excinfo.value.issue.issue_type == "invalid_value"

    def test_check_reports_every_issue_in_field_order(self):
        issues = self.validator.check({"name": "", "amount": 0, "category": "x", "date": "x"})
        assert [issue.field for issue in issues] == ["name", "amount", "category", "date"]

    def test_check_valid_input_has_no_issues(self):
        assert self.validator.check(valid_input()) == []

    def test_summarize(self):
        issues = self.validator.check(valid_input(amount="0"))
        summary = self.validator.summarize(issues)
        assert "Amount must be greater than zero" in summary
        assert self.validator.summarize([]).startswith("✅")


class TestParseAmount:
    """Tests for parse_amount."""

    def test_decimal_passthrough(self):
        amount, issue = parse_amount(Decimal("7.25"))
        assert amount == Decimal("7.25")
        assert issue is None

    def test_string_with_whitespace(self):
        amount, issue = parse_amount(" 42.10 ")
        assert amount == Decimal("42.10")
        assert issue is None

    def test_rejects_bool(self):
        amount, issue = parse_amount(True)
        assert amount is None
        assert issue.issue_type == "invalid_type"

    @pytest.mark.parametrize(
        "value, expected",
        [("12.345", "12.35"), ("12.344", "12.34"), ("0.005", "0.01"), (19.999, "20.00")],
    )
    def test_rounds_to_cents(self, value, expected):
        amount, issue = parse_amount(value)
        assert issue is None
        assert amount == Decimal(expected)
        assert amount.as_tuple().exponent == -2

    @pytest.mark.parametrize("value", ["0.004", "1e-400"])
    def test_rejects_amounts_below_one_cent(self, value):
        amount, issue = parse_amount(value)
        assert amount is None
        assert issue.message == "Amount must be at least 0.01"

    def test_largest_amount_is_accepted(self):
        amount, issue = parse_amount("9999999999999.99")
        assert issue is None
        assert amount == Decimal("9999999999999.99")

    @pytest.mark.parametrize("value", ["1234567890123456.78", "10000000000000", "1e30"])
    def test_rejects_oversized_amounts(self, value):
        amount, issue = parse_amount(value)
        assert amount is None
        assert issue.issue_type == "invalid_value"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
