"""
Aggregation Engine

Computes the Summary for a set of transactions: per-category expense
totals, income/expense/net figures and the chart series built from them.

DESIGN DECISION: Full recomputation on every call. Personal ledgers are
small, and having no cached state means a summary can never be stale.

ROUNDING: Income and expense totals are rounded half-up to 2 decimals.
The net balance is computed from those ROUNDED totals and rounded again,
so it can differ by up to 0.01 from the unrounded difference. Keep this
order; stored figures and tests depend on it.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from finance_tracker.models.catalog import DEFAULT_CATALOG, CategoryCatalog
from finance_tracker.models.transaction import (
    ChartPoint,
    Summary,
    Transaction,
    TransactionType,
)


CENTS = Decimal("0.01")
TOTAL_INCOME_LABEL = "Total Income"
TOTAL_EXPENSES_LABEL = "Total Expenses"


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, halves away from zero."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class AggregationEngine:
    """Builds Summary objects. Stateless apart from the catalog."""

    def __init__(self, catalog: Optional[CategoryCatalog] = None):
        self._catalog = catalog or DEFAULT_CATALOG

    def summarize(self, transactions: Iterable[Transaction]) -> Summary:
        transactions = list(transactions)

        income = Decimal("0")
        expenses = Decimal("0")
        for transaction in transactions:
            if transaction.type == TransactionType.INCOME:
                income += transaction.amount
            else:
                expenses += transaction.amount

        total_income = round_money(income)
        total_expenses = round_money(expenses)
        net_balance = round_money(total_income - total_expenses)

        return Summary(
            per_category_totals=self.category_totals(transactions),
            total_income=total_income,
            total_expenses=total_expenses,
            net_balance=net_balance,
            income_vs_expense_series=[
                ChartPoint(label=TOTAL_INCOME_LABEL, value=total_income),
                ChartPoint(label=TOTAL_EXPENSES_LABEL, value=total_expenses),
            ],
            transaction_count=len(transactions),
        )

    def category_totals(self, transactions: Iterable[Transaction]) -> dict[str, Decimal]:
        """
        Expense totals per catalog category, in catalog order.

        Categories without expenses are omitted. Expenses filed under a
        category the catalog doesn't list are not attributed to any.
        """
        sums = {name: Decimal("0") for name in self._catalog.expense}
        seen = set()
        for transaction in transactions:
            if transaction.type != TransactionType.EXPENSE:
                continue
            if transaction.category in sums:
                sums[transaction.category] += transaction.amount
                seen.add(transaction.category)
        return {name: total for name, total in sums.items() if name in seen}


_DEFAULT_ENGINE = AggregationEngine()


def summarize(transactions: Iterable[Transaction]) -> Summary:
    """Module-level shortcut using the default catalog."""
    return _DEFAULT_ENGINE.summarize(transactions)
