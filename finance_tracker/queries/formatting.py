"""Display helpers for amounts. Kept here so every front end formats alike."""

from decimal import Decimal

from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.queries.summary import round_money


def format_amount(amount: Decimal, symbol: str = "₹") -> str:
    """``Decimal("50.75")`` → ``"₹ 50.75"``."""
    return f"{symbol} {round_money(Decimal(amount)):.2f}"


def format_signed_amount(transaction: Transaction, symbol: str = "₹") -> str:
    """Expenses render as ``"- ₹ 50.75"``, incomes as ``"+ ₹ 1000.00"``."""
    sign = "-" if transaction.type == TransactionType.EXPENSE else "+"
    return f"{sign} {format_amount(transaction.amount, symbol)}"
