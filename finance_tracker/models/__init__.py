"""
Data Models Package

This package contains all Pydantic models used by the Finance Tracker
ledger engine. Everything the store keeps or the query engines return
conforms to these schemas.
"""

from finance_tracker.models.transaction import (
    ALL,
    ChartPoint,
    FilterCriteria,
    SortKey,
    Summary,
    Transaction,
    TransactionType,
    parse_calendar_date,
)
from finance_tracker.models.catalog import (
    DEFAULT_CATALOG,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    CategoryCatalog,
)
from finance_tracker.models.validation import ValidationIssue, ValidationResult
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "ALL",
    "ChartPoint",
    "FilterCriteria",
    "SortKey",
    "Summary",
    "Transaction",
    "TransactionType",
    "parse_calendar_date",
    # Catalog
    "DEFAULT_CATALOG",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "CategoryCatalog",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
