"""
Core Ledger Models for Finance Tracker

These models define the schemas for everything the ledger engine stores
or hands back to the UI:
1. Transaction - one recorded money movement (immutable)
2. FilterCriteria / SortKey - how a caller narrows and orders a view
3. Summary / ChartPoint - aggregate figures derived from a view

DESIGN DECISION: Transactions are frozen. An "edit" is a remove followed
by an add; nothing in the engine mutates a stored transaction in place.
"""

import datetime
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)
from pydantic.alias_generators import to_camel


# Amounts are Decimals in memory but plain JSON numbers on disk,
# which is the shape the original browser snapshot used.
Amount = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]

# Sentinel used by FilterCriteria for "match everything".
ALL = "All"


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a money movement."""
    EXPENSE = "expense"
    INCOME = "income"


class SortKey(str, Enum):
    """
    Supported orderings for a ledger view.

    Ties are always broken by the order the filter step produced,
    so repeated calls render identically.
    """
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    AMOUNT_DESC = "amount-desc"
    AMOUNT_ASC = "amount-asc"


def parse_calendar_date(value: Any) -> Optional[date]:
    """Parse an ISO ``YYYY-MM-DD`` value, returning None when it isn't one."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


# =============================================================================
# TRANSACTION
# =============================================================================

class Transaction(BaseModel):
    """
    A single expense or income.

    CRITICAL: Only TransactionStore.add creates these for the live ledger.
    The store assigns the id and validates amount/date before construction.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier assigned by the store"
    )
    amount: Amount = Field(
        ...,
        gt=0,
        description="Amount moved, always positive"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category name (normally one from the catalog)"
    )
    date: str = Field(
        ...,
        min_length=1,
        description="Calendar date as ISO text (YYYY-MM-DD)"
    )
    note: str = Field(
        default="",
        description="Optional free text"
    )
    type: TransactionType = Field(
        ...,
        description="expense or income, fixed at creation"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_legacy_id(cls, v: Any) -> Any:
        """Old snapshots carry millisecond timestamps as numeric ids."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> Any:
        if isinstance(v, datetime.datetime):
            v = v.date()
        if isinstance(v, date):
            return v.isoformat()
        return v

    @field_validator("note", mode="before")
    @classmethod
    def none_note_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def calendar_date(self) -> Optional[datetime.date]:
        """The parsed date, or None if the stored text is malformed."""
        return parse_calendar_date(self.date)

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


# =============================================================================
# QUERY MODELS
# =============================================================================

def _blank_to_none(v: Any) -> Any:
    if v is None:
        return None
    if isinstance(v, str) and not v.strip():
        return None
    return v


class FilterCriteria(BaseModel):
    """
    Optional predicates narrowing a ledger view.

    Every field defaults to "match all". Bounds are inclusive.
    Blank strings are accepted for bounds and mean "no bound", which is
    what an untouched form input submits.

    Fields accept their snake_case names or camelCase aliases (dateFrom,
    amountMin, ...). Unknown keys are rejected, so a misspelt bound fails
    loudly instead of matching everything.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    type: Union[TransactionType, str] = Field(
        default=ALL,
        description="'All', 'expense' or 'income'"
    )
    category: str = Field(
        default=ALL,
        description="'All' or a specific category name"
    )
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    amount_min: Optional[Decimal] = None
    amount_max: Optional[Decimal] = None

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return ALL
        if isinstance(v, str) and v.strip() == ALL:
            return ALL
        return TransactionType(v)

    @field_validator("category", mode="before")
    @classmethod
    def blank_category_is_all(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return ALL
        return v

    @field_validator(
        "date_from", "date_to", "amount_min", "amount_max", mode="before"
    )
    @classmethod
    def blank_bound_is_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @property
    def is_active(self) -> bool:
        """True if at least one predicate would narrow the view."""
        return (
            self.type != ALL
            or self.category != ALL
            or self.date_from is not None
            or self.date_to is not None
            or self.amount_min is not None
            or self.amount_max is not None
        )


# =============================================================================
# SUMMARY MODELS
# =============================================================================

class ChartPoint(BaseModel):
    """One labelled value of a chart series."""

    label: str
    value: Amount


class Summary(BaseModel):
    """
    Aggregate figures for a set of transactions.

    Absent categories in per_category_totals mean zero; they are never
    returned as zero entries.
    """

    per_category_totals: dict[str, Amount] = Field(
        default_factory=dict,
        description="Expense totals per catalog category, catalog order"
    )
    total_income: Amount = Field(
        default=Decimal("0.00"),
        description="Income total rounded to 2 decimals"
    )
    total_expenses: Amount = Field(
        default=Decimal("0.00"),
        description="Expense total rounded to 2 decimals"
    )
    net_balance: Amount = Field(
        default=Decimal("0.00"),
        description="Rounded income minus rounded expenses"
    )
    income_vs_expense_series: list[ChartPoint] = Field(default_factory=list)
    transaction_count: int = Field(default=0, ge=0)

    @property
    def category_series(self) -> list[ChartPoint]:
        """per_category_totals as chart points, in the same order."""
        return [
            ChartPoint(label=name, value=value)
            for name, value in self.per_category_totals.items()
        ]
