"""
Tests for Finance Tracker models

Test strategy:
1. Unit tests for individual components (models, catalog, validator)
2. Store and query tests run against in-memory storage
3. No real disk writes except in the JSON storage tests (tmp_path)
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from finance_tracker.models import (
    ALL,
    DEFAULT_CATALOG,
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    CategoryCatalog,
    ChartPoint,
    FilterCriteria,
    SortKey,
    Summary,
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    parse_calendar_date,
)


class TestTransactionModel:
    """Tests for the Transaction model."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        transaction = Transaction(
            id="abc",
            amount=Decimal("50.75"),
            category="Food",
            date="2024-01-05",
            type=TransactionType.EXPENSE,
        )
        assert transaction.amount == Decimal("50.75")
        assert transaction.note == ""
        assert transaction.is_expense is True

    def test_transaction_is_frozen(self):
        """Test that transactions cannot be mutated in place."""
        transaction = Transaction(
            id="abc", amount=Decimal("1"), category="Food",
            date="2024-01-05", type="expense",
        )
        with pytest.raises(ValueError):
            transaction.amount = Decimal("2")

    def test_transaction_rejects_non_positive_amount(self):
        """Test that zero and negative amounts are rejected."""
        for amount in ("0", "-5"):
            with pytest.raises(ValueError):
                Transaction(
                    id="x", amount=Decimal(amount), category="Food",
                    date="2024-01-05", type="expense",
                )

    def test_date_objects_are_stored_as_iso_text(self):
        """Test date and datetime inputs are normalized."""
        from_date = Transaction(
            id="a", amount=1, category="Food", date=date(2024, 3, 9), type="income",
        )
        from_datetime = Transaction(
            id="b", amount=1, category="Food",
            date=datetime(2024, 3, 9, 18, 30), type="income",
        )
        assert from_date.date == "2024-03-09"
        assert from_datetime.date == "2024-03-09"
        assert from_date.calendar_date == date(2024, 3, 9)

    def test_malformed_date_has_no_calendar_date(self):
        """Test that malformed date text is kept but not parsed."""
        transaction = Transaction(
            id="a", amount=1, category="Food", date="yesterday", type="expense",
        )
        assert transaction.date == "yesterday"
        assert transaction.calendar_date is None

    def test_numeric_legacy_id_is_coerced(self):
        """Test that timestamp ids from old snapshots become strings."""
        transaction = Transaction.model_validate({
            "id": 1704441600000,
            "amount": 50.75,
            "category": "Food",
            "date": "2024-01-05",
            "note": None,
            "type": "expense",
        })
        assert transaction.id == "1704441600000"
        assert transaction.note == ""
        assert transaction.amount == Decimal("50.75")

    def test_amount_serializes_as_json_number(self):
        """Test JSON output keeps the flat record shape."""
        transaction = Transaction(
            id="a", amount=Decimal("50.75"), category="Food",
            date="2024-01-05", type="expense",
        )
        dumped = transaction.model_dump(mode="json")
        assert dumped == {
            "id": "a",
            "amount": 50.75,
            "category": "Food",
            "date": "2024-01-05",
            "note": "",
            "type": "expense",
        }


class TestFilterCriteria:
    """Tests for FilterCriteria parsing."""

    def test_defaults_match_everything(self):
        """Test that an empty criteria object is inactive."""
        criteria = FilterCriteria()
        assert criteria.type == ALL
        assert criteria.category == ALL
        assert criteria.is_active is False

    def test_blank_bounds_mean_no_bound(self):
        """Test that untouched form inputs are ignored."""
        criteria = FilterCriteria(
            date_from="", date_to="  ", amount_min="", amount_max=None,
        )
        assert criteria.date_from is None
        assert criteria.date_to is None
        assert criteria.amount_min is None
        assert criteria.is_active is False

    def test_string_inputs_are_coerced(self):
        """Test that form strings become dates, decimals and enums."""
        criteria = FilterCriteria(
            type="expense", amount_min="100", date_from="2024-01-01",
        )
        assert criteria.type == TransactionType.EXPENSE
        assert criteria.amount_min == Decimal("100")
        assert criteria.date_from == date(2024, 1, 1)
        assert criteria.is_active is True

    def test_unknown_type_is_rejected(self):
        """Test that only All/expense/income are accepted."""
        with pytest.raises(ValueError):
            FilterCriteria(type="transfer")


class TestSummaryModel:
    """Tests for Summary and ChartPoint."""

    def test_category_series_follows_totals_order(self):
        """Test category_series mirrors per_category_totals."""
        summary = Summary(
            per_category_totals={"Food": Decimal("10"), "Bills": Decimal("5")},
        )
        assert summary.category_series == [
            ChartPoint(label="Food", value=Decimal("10")),
            ChartPoint(label="Bills", value=Decimal("5")),
        ]

    def test_sort_key_values(self):
        """Test sort key string values."""
        assert SortKey("date-desc") == SortKey.DATE_DESC
        assert SortKey.AMOUNT_ASC.value == "amount-asc"

    def test_parse_calendar_date(self):
        """Test ISO parsing helper."""
        assert parse_calendar_date("2024-02-29") == date(2024, 2, 29)
        assert parse_calendar_date("2023-02-29") is None
        assert parse_calendar_date("") is None
        assert parse_calendar_date(None) is None


class TestCategoryCatalog:
    """Tests for the category catalog."""

    def test_default_categories(self):
        """Test the built-in category lists and their order."""
        assert DEFAULT_CATALOG.categories_for("expense") == (
            "Food", "Travel", "Bills", "Entertainment",
            "Shopping", "Health", "Education", "Others",
        )
        assert DEFAULT_CATALOG.categories_for(TransactionType.INCOME) == (
            "Salary", "Freelance", "Investments", "Gift", "Refund", "Others",
        )

    def test_default_category(self):
        """Test the entry form reset values."""
        assert DEFAULT_CATALOG.default_category("expense") == "Food"
        assert DEFAULT_CATALOG.default_category("income") == "Salary"

    def test_filter_options_follow_type_filter(self):
        """Test income categories are offered only for the income filter."""
        assert DEFAULT_CATALOG.filter_options("income")[:2] == (ALL, "Salary")
        assert DEFAULT_CATALOG.filter_options("expense")[:2] == (ALL, "Food")
        assert DEFAULT_CATALOG.filter_options(ALL)[:2] == (ALL, "Food")

    def test_custom_catalog(self):
        """Test a catalog with custom categories."""
        catalog = CategoryCatalog(expense=("Rent",), income=("Wages",))
        assert catalog.contains("expense", "Rent")
        assert not catalog.contains("income", "Rent")


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Amount required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="category",
                    issue_type="unknown_category",
                    message="Not a standard category",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert len(result.warnings) == 1


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            description="Added",
        )
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.transaction_added(
            transaction_id="abc",
            amount="50.75",
            category="Food",
            type="expense",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "transaction_added"
        assert log_dict["entity_id"] == "abc"
        assert log_dict["details"]["amount"] == "50.75"

    def test_audit_event_builder_save_failed(self):
        """Test save failures are error-level events."""
        event = AuditEventBuilder.save_failed("transactions", 3, "disk full")
        assert event.event_type == AuditEventType.SAVE_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
