"""Shared fixtures for the ledger engine tests."""

import itertools
from decimal import Decimal

import pytest

from finance_tracker.ledger import TransactionStore
from finance_tracker.models import Transaction, TransactionType
from finance_tracker.services.storage import InMemoryStorage


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    return TransactionStore(storage)


@pytest.fixture
def make_transaction():
    """Factory for Transaction objects with sequential ids."""
    counter = itertools.count(1)

    def _make(
        amount="10",
        category="Food",
        date="2024-01-01",
        note="",
        type=TransactionType.EXPENSE,
        id=None,
    ):
        return Transaction(
            id=id or f"t{next(counter)}",
            amount=Decimal(str(amount)),
            category=category,
            date=date,
            note=note,
            type=type,
        )

    return _make
