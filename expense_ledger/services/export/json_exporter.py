"""
JSON Export

Writes the full record set as a pretty-printed JSON array named
`expenses-<ISO date>.json`. The file uses the persisted record shape,
so it can be loaded back with JsonFileExpenseStorage.
"""

import json
from datetime import date
from pathlib import Path
from typing import Sequence

import structlog

from expense_ledger.models.expense import ExpenseRecord
from expense_ledger.services.storage.interface import StorageError

logger = structlog.get_logger(__name__)

EXPORT_FILENAME_PATTERN = "expenses-{date}.json"


class ExportError(StorageError):
    """The export file could not be written."""
    pass


def export_filename(today: date) -> str:
    return EXPORT_FILENAME_PATTERN.format(date=today.isoformat())


def export_json(records: Sequence[ExpenseRecord]) -> str:
    """Serialize records as a pretty-printed JSON array."""
    return json.dumps(
        [record.to_storage_dict() for record in records],
        indent=2,
        ensure_ascii=False,
    )


def write_export(
    records: Sequence[ExpenseRecord],
    directory: Path,
    today: date,
) -> Path:
    """
    Write an export file into `directory`.

    Returns:
        Path of the written file

    Raises:
        ExportError: If the directory or file cannot be written
    """
    directory = Path(directory)
    path = directory / export_filename(today)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(export_json(records), encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write export {path}: {e}") from e

    logger.info("expenses_exported", path=str(path), count=len(records))
    return path
