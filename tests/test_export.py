"""Tests for JSON export."""

import json
import pytest
from datetime import date

from expense_ledger.ledger import Ledger, ValidationError
from expense_ledger.services.export import (
    ExportError,
    export_filename,
    export_json,
    write_export,
)
from expense_ledger.services.storage import JsonFileExpenseStorage


class TestExport:
    """Tests for the JSON exporter."""

    def test_filename_uses_iso_date(self):
        assert export_filename(date(2024, 3, 5)) == "expenses-2024-03-05.json"

    def test_export_json_is_pretty_printed(self, make_record):
        text = export_json([make_record(expense_id="e1")])
        assert text.startswith("[\n  {\n")
        assert json.loads(text)[0]["id"] == "e1"

    def test_empty_export(self):
        assert json.loads(export_json([])) == []

    def test_write_export_round_trip(self, tmp_path, make_record):
        records = [make_record(amount="15.99", notes="Zürich"), make_record(amount="45")]
        path = write_export(records, tmp_path / "exports", date(2024, 3, 15))

        assert path == tmp_path / "exports" / "expenses-2024-03-15.json"
        assert JsonFileExpenseStorage(path).load() == records

    @pytest.mark.parametrize(
        "amount",
        ["9999999999999.99", "1234567890.12", "0.01", "15.99", "0.005", "72.125"],
    )
    def test_validated_amounts_survive_export(self, tmp_path, fixed_clock, amount):
        """Every amount the ledger accepts loads back from an export unchanged."""
        ledger = Ledger(clock=fixed_clock)
        ledger.add({
            "name": "Edge amount",
            "amount": amount,
            "category": "Other",
            "date": "2024-03-15",
        })

        path = write_export(ledger.all(), tmp_path, date(2024, 3, 15))
        loaded = JsonFileExpenseStorage(path).load()

        assert loaded == list(ledger.all())
        assert loaded[0].amount == ledger.all()[0].amount

    @pytest.mark.parametrize("amount", ["1234567890123456.78", "1e-400"])
    def test_unrepresentable_amounts_never_reach_export(self, fixed_clock, amount):
        ledger = Ledger(clock=fixed_clock)
        with pytest.raises(ValidationError) as excinfo:
            ledger.add({
                "name": "Edge amount",
                "amount": amount,
                "category": "Other",
                "date": "2024-03-15",
            })
        assert excinfo.value.field == "amount"
        assert ledger.all() == ()

    def test_unwritable_directory(self, tmp_path, make_record):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(ExportError):
            write_export([make_record()], blocker, date(2024, 3, 15))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
