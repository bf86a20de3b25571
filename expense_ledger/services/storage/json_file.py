"""
Local JSON File Storage

DESIGN DECISION: Expenses live in a single JSON array, in the same
shape the browser tracker kept in localStorage (`id, name, amount,
category, date, notes, createdAt`), and the budget in a separate file
holding one JSON number. Existing data can be dropped in unchanged.

TRADEOFFS:
- The whole collection is rewritten on every save (fine for personal use)
- Writes go to a temp file first and are swapped in with os.replace,
  so a crash never leaves a half-written file behind
- Transient OS errors are retried; anything else surfaces as StorageError
"""

import json
import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from expense_ledger.models.audit import AuditEvent
from expense_ledger.models.expense import ExpenseRecord, json_number
from expense_ledger.services.storage.interface import (
    AuditStorageInterface,
    CorruptDataError,
    ExpenseStorageInterface,
    StorageError,
)
from expense_ledger.validation import parse_amount

logger = structlog.get_logger(__name__)


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "storage_io_retry",
        operation=retry_state.fn.__name__ if retry_state.fn else None,
        attempt=retry_state.attempt_number,
        error=str(error),
    )


_retry_io = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
    retry=retry_if_exception_type(OSError),
    before_sleep=_log_retry,
    reraise=True,
)


@_retry_io
def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


@_retry_io
def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(text, encoding="utf-8")
    os.replace(tmp_path, path)


@_retry_io
def _append_line(path: Path, line: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(line + "\n")


@_retry_io
def _remove(path: Path) -> None:
    path.unlink(missing_ok=True)


class JsonFileExpenseStorage(ExpenseStorageInterface):
    """
    JSON file implementation of expense storage.

    One file for the record array, one for the budget scalar.
    Missing files read as "nothing saved yet".
    """

    def __init__(self, expenses_path: Path, budget_path: Optional[Path] = None):
        self._expenses_path = Path(expenses_path)
        self._budget_path = (
            Path(budget_path)
            if budget_path is not None
            else self._expenses_path.with_name("monthly_budget.json")
        )

    @property
    def expenses_path(self) -> Path:
        return self._expenses_path

    @property
    def budget_path(self) -> Path:
        return self._budget_path

    def _read_json(self, path: Path) -> Any:
        try:
            text = _read_text(path)
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

        if text is None or not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"{path} is not valid JSON: {e}") from e

    def _write_json(self, path: Path, payload: Any) -> None:
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        try:
            _write_text(path, text)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def load(self) -> list[ExpenseRecord]:
        """Load all expenses; malformed entries are skipped and logged."""
        payload = self._read_json(self._expenses_path)
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise CorruptDataError(
                f"{self._expenses_path} must hold a JSON array, got {type(payload).__name__}"
            )

        records = []
        for index, item in enumerate(payload):
            try:
                records.append(ExpenseRecord.model_validate(item))
            except PydanticValidationError as e:
                logger.warning(
                    "malformed_expense_skipped",
                    path=str(self._expenses_path),
                    index=index,
                    error_count=e.error_count(),
                )

        logger.debug("expenses_loaded", path=str(self._expenses_path), count=len(records))
        return records

    def save(self, records: Sequence[ExpenseRecord]) -> None:
        self._write_json(
            self._expenses_path,
            [record.to_storage_dict() for record in records],
        )
        logger.debug("expenses_saved", path=str(self._expenses_path), count=len(records))

    def load_budget(self) -> Optional[Decimal]:
        payload = self._read_json(self._budget_path)
        if payload is None:
            return None

        amount, issue = parse_amount(payload)
        if issue is not None:
            # A zero or garbage budget has always meant "no budget"
            logger.warning(
                "stored_budget_ignored",
                path=str(self._budget_path),
                reason=issue.message,
            )
            return None
        return amount

    def save_budget(self, amount: Optional[Decimal]) -> None:
        if amount is None:
            try:
                _remove(self._budget_path)
            except OSError as e:
                raise StorageError(f"Failed to remove {self._budget_path}: {e}") from e
            return
        self._write_json(self._budget_path, json_number(amount))


class JsonLinesAuditStorage(AuditStorageInterface):
    """
    Append-only audit log, one JSON object per line.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event."""
        try:
            _append_line(self._path, event.to_json_line())
            return True
        except OSError as e:
            # Don't raise - audit logging should not break the main flow
            logger.error("audit_write_failed", path=str(self._path), error=str(e))
            return False

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Get recent events, newest first. Unreadable lines are skipped."""
        try:
            text = _read_text(self._path)
        except OSError as e:
            raise StorageError(f"Failed to read audit log {self._path}: {e}") from e
        if not text:
            return []

        events = []
        for line in text.splitlines():
            if not line.strip():
                continue
            try:
                events.append(AuditEvent.model_validate_json(line))
            except PydanticValidationError:
                continue

        events.sort(key=lambda e: e.timestamp, reverse=True)
        return events[:limit]
