"""Ledger package: the transaction store."""

from finance_tracker.ledger.store import DEFAULT_SNAPSHOT_KEY, TransactionStore

__all__ = ["DEFAULT_SNAPSHOT_KEY", "TransactionStore"]
