"""
Transaction Input Validation

DESIGN DECISION: Raw form input is checked before a Transaction is built.

ERRORS (block the add):
- Missing, non-numeric, non-finite or non-positive amount
- Amount that a JSON number can't hold exactly (too large, too small
  or too many significant digits); it would not survive a reload
- Empty date
- Empty category
- Unknown transaction type

WARNINGS (reported, never block):
- Date text that is not an ISO calendar date
- Category that is not in the catalog for the type

IMPORTANT: Validation NEVER silently fixes issues. Warnings are surfaced
so the UI can point them out, but the value is stored as entered.
"""

import math
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from finance_tracker.models.catalog import DEFAULT_CATALOG, CategoryCatalog
from finance_tracker.models.transaction import TransactionType, parse_calendar_date
from finance_tracker.models.validation import ValidationIssue, ValidationResult


class ValidationError(Exception):
    """Transaction input was rejected; the ledger is unchanged."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        errors = [issue.message for issue in issues if issue.severity == "error"]
        super().__init__("; ".join(errors) or "Invalid transaction")


def parse_amount(value: Any) -> Optional[Decimal]:
    """Convert form input to a Decimal, or None if it isn't a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        text = str(value).strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite():
        return None
    return amount


def survives_snapshot(amount: Decimal) -> bool:
    """True if the amount comes back unchanged after a JSON number round-trip."""
    as_float = float(amount)
    if not math.isfinite(as_float):
        return False
    return Decimal(repr(as_float)) == amount


class TransactionValidator:
    """Validates the inputs for a new transaction."""

    def __init__(self, catalog: Optional[CategoryCatalog] = None):
        self._catalog = catalog or DEFAULT_CATALOG

    def validate(
        self,
        amount: Any,
        category: Any,
        date: Any,
        note: Any = "",
        type: Any = TransactionType.EXPENSE,
    ) -> ValidationResult:
        issues = []
        issues.extend(self._check_amount(amount))
        issues.extend(self._check_date(date))

        transaction_type = self._coerce_type(type)
        if transaction_type is None:
            issues.append(ValidationIssue(
                field="type",
                issue_type="invalid_value",
                message=f"Transaction type must be 'expense' or 'income', got {type!r}",
                severity="error",
            ))
        issues.extend(self._check_category(category, transaction_type))

        if note is not None and not isinstance(note, str):
            issues.append(ValidationIssue(
                field="note",
                issue_type="invalid_format",
                message="Note must be text",
                severity="error",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return ValidationResult(is_valid=is_valid, issues=issues)

    def _check_amount(self, amount: Any) -> list[ValidationIssue]:
        parsed = parse_amount(amount)
        if parsed is None:
            return [ValidationIssue(
                field="amount",
                issue_type="missing" if amount in (None, "") else "invalid_format",
                message="Please enter a valid amount",
                severity="error",
                suggested_fix="Enter a number such as 50.75",
            )]
        if parsed <= 0:
            return [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            )]
        if not survives_snapshot(parsed):
            return [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=f"Amount {amount} can't be stored exactly",
                severity="error",
                suggested_fix="Enter an amount with at most 2 decimal places",
            )]
        return []

    def _check_date(self, value: Any) -> list[ValidationIssue]:
        if isinstance(value, date):
            return []
        if value is None or not str(value).strip():
            return [ValidationIssue(
                field="date",
                issue_type="missing",
                message="Please enter a date",
                severity="error",
            )]
        if not isinstance(value, str):
            return [ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message="Date must be text in YYYY-MM-DD form",
                severity="error",
            )]
        if parse_calendar_date(value) is None:
            return [ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"'{value}' is not a calendar date; it will sort before all other dates",
                severity="warning",
                suggested_fix="Use the YYYY-MM-DD format",
            )]
        return []

    def _check_category(
        self,
        category: Any,
        transaction_type: Optional[TransactionType],
    ) -> list[ValidationIssue]:
        if not isinstance(category, str) or not category.strip():
            return [ValidationIssue(
                field="category",
                issue_type="missing",
                message="Please choose a category",
                severity="error",
            )]
        if transaction_type is not None and not self._catalog.contains(
            transaction_type, category.strip()
        ):
            return [ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message=f"'{category}' is not a standard {transaction_type.value} category",
                severity="warning",
            )]
        return []

    @staticmethod
    def _coerce_type(value: Any) -> Optional[TransactionType]:
        try:
            return TransactionType(value)
        except ValueError:
            return None
