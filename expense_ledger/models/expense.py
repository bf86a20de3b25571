"""
Core Data Models for Expense Ledger

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Round-trip the persisted JSON shape exactly
3. Be immutable once created, so snapshots can be shared freely

DESIGN DECISION: Persisted field names (`createdAt`) are kept as aliases
so data written by earlier versions of the tracker loads unchanged.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    DESIGN DECISION: The set is closed and the labels are stored verbatim.
    Declaration order is the canonical enumeration order.
    """
    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    HOUSING = "Housing"
    UTILITIES = "Utilities"
    ENTERTAINMENT = "Entertainment"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    PERSONAL_CARE = "Personal Care"
    OTHER = "Other"

    @classmethod
    def labels(cls) -> list[str]:
        return [category.value for category in cls]


# =============================================================================
# TIMESTAMPS
# =============================================================================

def normalize_timestamp(value: dt.datetime) -> dt.datetime:
    """Return `value` in UTC, truncated to millisecond precision.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    else:
        value = value.astimezone(dt.timezone.utc)
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def utc_now() -> dt.datetime:
    return normalize_timestamp(dt.datetime.now(dt.timezone.utc))


def json_number(amount: Decimal) -> float | int:
    """Decimal as a JSON number: int when integral, float otherwise."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def format_timestamp(value: dt.datetime) -> str:
    """Format as `YYYY-MM-DDTHH:MM:SS.mmmZ`."""
    value = normalize_timestamp(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{value.microsecond // 1000:03d}Z"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    One user-entered expense.

    Records are frozen: the ledger replaces a record on update
    instead of mutating it, so snapshots handed out stay valid.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Unique expense ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display label"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount in currency units"
    )
    category: ExpenseCategory
    date: dt.date = Field(
        ...,
        description="Calendar date the expense occurred on"
    )
    notes: str = Field(
        default="",
        max_length=1000,
        description="Optional free text"
    )
    created_at: dt.datetime = Field(
        ...,
        alias="createdAt",
        description="When the record was inserted (UTC)"
    )

    @field_validator('id', mode='before')
    @classmethod
    def coerce_legacy_id(cls, v: Any) -> Any:
        """Older data used numeric millisecond ids."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('amount', mode='before')
    @classmethod
    def float_amount_via_repr(cls, v: Any) -> Any:
        """JSON numbers arrive as floats; 15.99 must load as Decimal('15.99')."""
        if isinstance(v, float):
            return Decimal(repr(v))
        return v

    @field_validator('notes', mode='before')
    @classmethod
    def default_notes(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator('created_at')
    @classmethod
    def normalize_created_at(cls, v: dt.datetime) -> dt.datetime:
        return normalize_timestamp(v)

    @field_serializer('amount', when_used='json')
    def serialize_amount(self, amount: Decimal) -> float | int:
        # Persisted as a JSON number, like the stored data always was
        return json_number(amount)

    @field_serializer('created_at', when_used='json')
    def serialize_created_at(self, created_at: dt.datetime) -> str:
        return format_timestamp(created_at)

    def to_storage_dict(self) -> dict[str, Any]:
        """Persisted shape: id, name, amount, category, date, notes, createdAt."""
        return self.model_dump(mode="json", by_alias=True)


class ExpenseFields(BaseModel):
    """
    The user-editable part of an expense, after validation.

    Produced by ExpenseValidator; the ledger adds id and created_at.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    category: ExpenseCategory
    date: dt.date
    notes: str = ""


class BudgetConfig(BaseModel):
    """Monthly budget ceiling. Absent when no budget is configured."""
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Monthly budget in currency units"
    )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )
